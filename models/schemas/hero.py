from marshmallow import Schema, fields, pre_load, validates, validate, ValidationError

from models.hero import HERO_ROLES


class AbilitySchema(Schema):
    id = fields.String(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    description = fields.String(allow_none=True, validate=validate.Length(max=500))
    icon = fields.String(allow_none=True, validate=validate.Length(max=500))

    @validates("name")
    def _validate_name(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("name must not be blank.")


class HeroCreateSchema(Schema):
    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    role = fields.String(required=True, validate=validate.OneOf(HERO_ROLES))
    portrait = fields.String(allow_none=True, validate=validate.Length(max=500))
    description = fields.String(allow_none=True, validate=validate.Length(max=1000))
    health = fields.Integer(load_default=0, validate=validate.Range(min=0))
    armor = fields.Integer(load_default=0, validate=validate.Range(min=0))
    shields = fields.Integer(load_default=0, validate=validate.Range(min=0))
    abilities = fields.List(fields.Nested(AbilitySchema), load_default=list)

    @pre_load
    def normalize(self, data, **kwargs):
        # roles are matched case-insensitively and stored lower-case
        if isinstance(data, dict) and isinstance(data.get("role"), str):
            data = dict(data, role=data["role"].strip().lower())
        return data

    @validates("name")
    def _validate_name(self, value, **kwargs):
        if not value.strip():
            raise ValidationError("name must not be blank.")


class HeroUpdateSchema(HeroCreateSchema):
    # PUT replaces the whole hero; an id in the body must match the path
    id = fields.String(load_only=True)


class HeroOutSchema(Schema):
    id = fields.String()
    name = fields.String()
    role = fields.String()
    portrait = fields.String(allow_none=True)
    description = fields.String(allow_none=True)
    health = fields.Integer()
    armor = fields.Integer()
    shields = fields.Integer()
    abilities = fields.List(fields.Nested(AbilitySchema))
    created_at = fields.DateTime()
    updated_at = fields.DateTime()
