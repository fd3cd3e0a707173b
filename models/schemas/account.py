from marshmallow import Schema, fields, pre_load, validate


def _strip(v):
    return v.strip() if isinstance(v, str) else v


class CredentialsSchema(Schema):
    """Body of /auth/login and /auth/register."""
    username = fields.String(required=True, validate=validate.Length(min=1, max=50))
    password = fields.String(required=True, load_only=True, validate=validate.Length(min=1))

    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "username" in data:
            data["username"] = _strip(data["username"])
        return data


class RefreshSchema(Schema):
    refresh_token = fields.String(data_key="refreshToken", load_default=None, allow_none=True)


class TokenPairOutSchema(Schema):
    access_token = fields.String(data_key="accessToken")
    refresh_token = fields.String(data_key="refreshToken")
    expires_at = fields.DateTime(data_key="expiresAt")


class AccountOutSchema(Schema):
    id = fields.String()
    username = fields.String()
    created_at = fields.DateTime()
