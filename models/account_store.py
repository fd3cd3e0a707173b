"""
AccountStore: the lookup/update surface the auth components use.

It wraps a DBStorage so the auth code never touches SQLAlchemy directly.
Refresh-token writes that depend on a previously read value go through
conditional single-row UPDATEs (`... WHERE refresh_token = :expected`), so two
requests rotating the same token cannot both succeed.
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.exc import IntegrityError

from models.account import Account, RefreshTokenState, NO_ACTIVE_REFRESH_TOKEN, refresh_columns
from utils.exceptions import Conflict


class AccountStore:
    def __init__(self, storage):
        self._storage = storage

    @property
    def _session(self):
        return self._storage.get_session()

    def find_by_id(self, account_id: str) -> Optional[Account]:
        return self._storage.get(Account, account_id)

    def find_by_username(self, username: str) -> Optional[Account]:
        return self._session.query(Account).filter(Account.username == username).first()

    def find_by_refresh_token(self, token: str) -> Optional[Account]:
        if not token:
            return None
        return self._session.query(Account).filter(Account.refresh_token == token).first()

    def exists(self, username: str) -> bool:
        return self._session.query(
            self._session.query(Account).filter(Account.username == username).exists()
        ).scalar()

    def insert(self, account: Account) -> Account:
        """Insert a new account; a unique violation on username becomes Conflict."""
        self._storage.new(account)
        try:
            self._storage.save()
        except IntegrityError:
            raise Conflict("Username already taken")
        return account

    def save(self, account: Account) -> None:
        self._storage.new(account)
        self._storage.save()

    def replace_refresh_token(self, account: Account, expected: str, state: RefreshTokenState) -> bool:
        """
        Swap the account's refresh token for `state` only if the stored value is
        still `expected`. Returns False when another writer got there first.
        """
        updated = (
            self._session.query(Account)
            .filter(Account.id == account.id, Account.refresh_token == expected)
            .update(refresh_columns(state), synchronize_session=False)
        )
        self._storage.save()
        self._session.refresh(account)
        return updated == 1

    def clear_refresh_token(self, account: Account, expected: str) -> bool:
        return self.replace_refresh_token(account, expected, NO_ACTIVE_REFRESH_TOKEN)
