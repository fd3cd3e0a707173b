"""
Token issuance and rotation.

- TokenConfig: signing key, issuer/audience and lifetimes, built once from app config
- TokenSigner: HS256 access tokens via PyJWT
- RefreshTokenManager: opaque refresh tokens stored on the account, rotated on every use

Only one refresh token is live per account; issuing a new one replaces the old.
"""
from __future__ import annotations

import logging
import secrets
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Mapping, NamedTuple, Tuple

import jwt

from models.account import Account, ActiveRefreshToken
from utils.exceptions import BadRequest, Unauthorized

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_BYTES = 32  # 256 bits, rendered as 64 hex chars


def _int_or(value, default: int) -> int:
    return default if value is None else int(value)


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenConfig:
    signing_key: str
    issuer: str
    audience: str
    access_token_lifetime: timedelta = timedelta(minutes=15)
    refresh_token_lifetime: timedelta = timedelta(days=7)

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "TokenConfig":
        """Build from a Flask-style config mapping; lifetimes fall back to 15 min / 7 days."""
        return cls(
            signing_key=config["JWT_SECRET"],
            issuer=config["JWT_ISSUER"],
            audience=config["JWT_AUDIENCE"],
            access_token_lifetime=timedelta(minutes=_int_or(config.get("ACCESS_TOKEN_EXPIRES_MINUTES"), 15)),
            refresh_token_lifetime=timedelta(days=_int_or(config.get("REFRESH_TOKEN_EXPIRES_DAYS"), 7)),
        )


class IssuedTokens(NamedTuple):
    access_token: str
    refresh_token: str
    expires_at: datetime


def generate_jti() -> str:
    """Generate a unique JTI (JWT ID).
    """
    return str(uuid.uuid4())


def generate_refresh_token() -> str:
    return secrets.token_hex(REFRESH_TOKEN_BYTES)


class TokenSigner:
    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = _now):
        self.config = config
        self.clock = clock

    def sign(self, account: Account) -> Tuple[str, datetime]:
        """Return a signed access token for the account and its expiry."""
        now = self.clock()
        # exp is whole seconds; report the same instant to the client
        expires_at = (now + self.config.access_token_lifetime).replace(microsecond=0)
        payload = {
            "iss": self.config.issuer,
            "aud": self.config.audience,
            "sub": str(account.id),
            "name": account.username,
            "jti": generate_jti(),
            "type": ACCESS_TOKEN_TYPE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self.config.signing_key, algorithm=JWT_ALGORITHM)
        return token, expires_at

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Decode and validate an access token. Signature, issuer, audience and expiry
        must all match; raises Unauthorized otherwise.
        """
        try:
            decoded = jwt.decode(
                token,
                self.config.signing_key,
                algorithms=[JWT_ALGORITHM],
                audience=self.config.audience,
                issuer=self.config.issuer,
                options={"require": ["exp", "iss", "aud", "sub", "jti"]},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token expired")
        except jwt.InvalidTokenError as exc:
            raise Unauthorized(f"Invalid token: {exc}")

        if decoded.get("type") != ACCESS_TOKEN_TYPE:
            raise Unauthorized("Wrong token type")
        return decoded


class RefreshTokenManager:
    def __init__(self, store, signer: TokenSigner, config: TokenConfig, clock: Callable[[], datetime] = _now):
        self.store = store
        self.signer = signer
        self.config = config
        self.clock = clock

    def _new_state(self) -> ActiveRefreshToken:
        return ActiveRefreshToken(
            value=generate_refresh_token(),
            expires_at=self.clock() + self.config.refresh_token_lifetime,
        )

    def issue(self, account: Account) -> IssuedTokens:
        """Issue an access/refresh pair for a freshly authenticated account."""
        state = self._new_state()
        account.refresh_state = state
        self.store.save(account)
        access_token, expires_at = self.signer.sign(account)
        logger.info("Issued tokens for account %s", account.id)
        return IssuedTokens(access_token, state.value, expires_at)

    def rotate(self, presented: str | None) -> IssuedTokens:
        """Exchange a live refresh token for a new pair; the presented one stops working."""
        if not presented:
            raise BadRequest("Refresh token is required")

        account = self.store.find_by_refresh_token(presented)
        if account is None:
            raise Unauthorized("Invalid refresh token")

        current = account.refresh_state
        if not isinstance(current, ActiveRefreshToken) or current.is_expired(self.clock()):
            self.store.clear_refresh_token(account, presented)
            logger.info("Cleared expired refresh token for account %s", account.id)
            raise Unauthorized("Refresh token expired")

        state = self._new_state()
        if not self.store.replace_refresh_token(account, presented, state):
            logger.warning("Lost refresh token rotation race for account %s", account.id)
            raise Unauthorized("Invalid refresh token")

        access_token, expires_at = self.signer.sign(account)
        logger.info("Rotated refresh token for account %s", account.id)
        return IssuedTokens(access_token, state.value, expires_at)

    def revoke(self, account: Account) -> None:
        """Drop the account's live refresh token, if any (logout)."""
        current = account.refresh_state
        if isinstance(current, ActiveRefreshToken):
            self.store.clear_refresh_token(account, current.value)
