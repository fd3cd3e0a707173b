"""Tests for the account store's lookups and conditional refresh-token updates."""
from datetime import datetime, timedelta, timezone

import pytest

from models.account import Account, ActiveRefreshToken, NoActiveRefreshToken
from utils.exceptions import Conflict
from utils.security import hash_password


def _state(value="a" * 64, days=7):
    return ActiveRefreshToken(value, datetime.now(timezone.utc) + timedelta(days=days))


def test_lookups(store, alice):
    assert store.find_by_username("alice").id == alice.id
    assert store.find_by_username("nobody") is None
    assert store.find_by_id(alice.id).username == "alice"
    assert store.exists("alice")
    assert not store.exists("nobody")


def test_find_by_refresh_token_ignores_empty(store, alice):
    assert store.find_by_refresh_token("") is None
    assert store.find_by_refresh_token(None) is None


def test_insert_duplicate_username_is_conflict(store, alice):
    with pytest.raises(Conflict):
        store.insert(Account(username="alice", password_hash=hash_password("x")))
    # session is usable after the rollback
    assert store.exists("alice")


def test_replace_refresh_token_when_expected_matches(store, alice):
    first = _state("a" * 64)
    alice.refresh_state = first
    store.save(alice)

    second = _state("b" * 64)
    assert store.replace_refresh_token(alice, first.value, second) is True
    assert store.find_by_refresh_token("b" * 64).id == alice.id
    assert store.find_by_refresh_token("a" * 64) is None


def test_replace_refresh_token_when_expected_is_stale(store, alice):
    alice.refresh_state = _state("a" * 64)
    store.save(alice)

    assert store.replace_refresh_token(alice, "stale", _state("b" * 64)) is False
    assert alice.refresh_token == "a" * 64


def test_clear_refresh_token(store, alice):
    alice.refresh_state = _state("a" * 64)
    store.save(alice)

    assert store.clear_refresh_token(alice, "a" * 64) is True
    assert isinstance(store.find_by_id(alice.id).refresh_state, NoActiveRefreshToken)


def test_refresh_state_reads_back_as_utc(store, alice):
    alice.refresh_state = _state("a" * 64)
    store.save(alice)
    store.replace_refresh_token(alice, "a" * 64, _state("c" * 64))

    state = alice.refresh_state
    assert isinstance(state, ActiveRefreshToken)
    assert state.expires_at.tzinfo is not None
