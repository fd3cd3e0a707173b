"""
Account model: the persisted identity record.

The refresh-token slot is stored as two nullable columns but is only ever read
and written through `refresh_state`, which yields one of:
- NoActiveRefreshToken
- ActiveRefreshToken(value, expires_at)
so a token without an expiry (or the reverse) can never be written.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Union

from sqlalchemy import Column, String, DateTime

from models.base_model import BaseModel, Base


@dataclass(frozen=True)
class NoActiveRefreshToken:
    pass


@dataclass(frozen=True)
class ActiveRefreshToken:
    value: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now


RefreshTokenState = Union[NoActiveRefreshToken, ActiveRefreshToken]

NO_ACTIVE_REFRESH_TOKEN = NoActiveRefreshToken()


def as_utc(value: datetime | None) -> datetime | None:
    """SQLite hands back naive datetimes; everything stored here is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def refresh_columns(state: RefreshTokenState) -> dict:
    """Column values for a refresh-token state, for use in bulk updates."""
    if isinstance(state, ActiveRefreshToken):
        return {"refresh_token": state.value, "refresh_token_expires_at": state.expires_at}
    return {"refresh_token": None, "refresh_token_expires_at": None}


class Account(BaseModel, Base):
    __tablename__ = "accounts"

    username = Column(String(50), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    refresh_token = Column(String(128), nullable=True, unique=True, index=True)
    refresh_token_expires_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def password(self):
        raise AttributeError("Password: Write-only field")

    @property
    def refresh_state(self) -> RefreshTokenState:
        if self.refresh_token and self.refresh_token_expires_at is not None:
            return ActiveRefreshToken(self.refresh_token, as_utc(self.refresh_token_expires_at))
        return NO_ACTIVE_REFRESH_TOKEN

    @refresh_state.setter
    def refresh_state(self, state: RefreshTokenState) -> None:
        for key, value in refresh_columns(state).items():
            setattr(self, key, value)

    def __repr__(self):
        return f"<Account username={self.username}>"
