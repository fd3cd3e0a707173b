"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- POST /auth/refresh
- POST /auth/logout
- GET  /auth/me

The implementation:
- Uses argon2 for password hashing (via utils.security)
- Issues short-lived HS256 access tokens and opaque refresh tokens (via utils.tokens)
- Keeps one refresh token per account and rotates it on every refresh
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, g, current_app

from models import storage
from models.account_store import AccountStore
from models.schemas.account import (
    CredentialsSchema,
    RefreshSchema,
    TokenPairOutSchema,
    AccountOutSchema,
)
from utils.decorators import jwt_required
from utils.security import CredentialVerifier, register_account
from utils.tokens import RefreshTokenManager

bp = Blueprint("auth", __name__, url_prefix="/auth")

credentials_schema = CredentialsSchema()
refresh_schema = RefreshSchema()
token_pair_out_schema = TokenPairOutSchema()
account_out_schema = AccountOutSchema()


def _token_manager(store: AccountStore) -> RefreshTokenManager:
    return RefreshTokenManager(
        store,
        current_app.extensions["token_signer"],
        current_app.extensions["token_config"],
    )


@bp.post("/register")
def register():
    """
    Register a new account.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [username, password]
          properties:
            username: { type: string, maxLength: 50 }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Username already taken
    """
    data = credentials_schema.load(request.get_json(silent=True) or {})
    account = register_account(AccountStore(storage), data["username"], data["password"])
    return jsonify(
        {
            "message": "Account created",
            "data": account_out_schema.dump(account),
        }
    ), 201


@bp.post("/login")
def login():
    """
    Login: return accessToken, refreshToken and the access token expiry
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [username, password]
           properties:
             username: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
        schema:
          type: object
          properties:
            accessToken: { type: string }
            refreshToken: { type: string }
            expiresAt: { type: string, format: date-time }
      400:
        description: Validation error
      401:
        description: Invalid username or password
    """
    data = credentials_schema.load(request.get_json(silent=True) or {})
    store = AccountStore(storage)
    account = CredentialVerifier(store).verify(data["username"], data["password"])
    issued = _token_manager(store).issue(account)
    return jsonify(token_pair_out_schema.dump(issued._asdict())), 200


@bp.post("/refresh")
def refresh():
    """
    Use a refresh token to obtain new access and refresh tokens (rotation)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [refreshToken]
           properties:
             refreshToken: { type: string }
    responses:
      200:
        description: OK (returns a new token pair)
      400:
        description: Refresh token missing
      401:
        description: Refresh token unknown or expired
    """
    data = refresh_schema.load(request.get_json(silent=True) or {})
    issued = _token_manager(AccountStore(storage)).rotate(data.get("refresh_token"))
    return jsonify(token_pair_out_schema.dump(issued._asdict())), 200


@bp.post("/logout")
@jwt_required()
def logout():
    """
    Logout: drops the account's active refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: ""
      401:
        description: Unauthorized
    """
    _token_manager(AccountStore(storage)).revoke(g.current_account)
    return ("", 204)


@bp.get("/me")
@jwt_required()
def me():
    """
    Get the current account
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
    """
    return jsonify({"data": account_out_schema.dump(g.current_account)})
