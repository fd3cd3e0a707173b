"""
security helpers:
- Argon2 password hashing via argon2-cffi
- CredentialVerifier: username/password check that never reveals which half failed
- register_account: create an account with a hashed password
"""
from __future__ import annotations

import logging

from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, InvalidHashError

from models.account import Account, NO_ACTIVE_REFRESH_TOKEN
from utils.exceptions import InvalidCredentials, Conflict

logger = logging.getLogger(__name__)

ph = PasswordHasher()

# Verified against when the username is unknown so both failure paths cost the same
_DUMMY_HASH = ph.hash("not-a-real-password")


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


class CredentialVerifier:
    """Checks a username/password pair against the stored Argon2 hash."""

    def __init__(self, store):
        self.store = store

    def verify(self, username: str, password: str) -> Account:
        account = self.store.find_by_username(username)
        if account is None:
            verify_password(password, _DUMMY_HASH)
            logger.info("Login failed: unknown username")
            raise InvalidCredentials()
        if not verify_password(password, account.password_hash):
            logger.info("Login failed: bad password for account %s", account.id)
            raise InvalidCredentials()
        return account


def register_account(store, username: str, password: str) -> Account:
    """Create an account; Conflict if the username is already taken."""
    if store.exists(username):
        raise Conflict("Username already taken")
    account = Account(username=username, password_hash=hash_password(password))
    account.refresh_state = NO_ACTIVE_REFRESH_TOKEN
    store.insert(account)
    logger.info("Registered account %s", account.id)
    return account
