"""Tests for resolving callers to users."""

import pytest

import config
from identity import ensure_user, resolve_user_id


@pytest.mark.parametrize("header,expected", [
  ("Bearer tok123", "tok123"),
  ("bearer tok123", "tok123"),
  ("tok123", "tok123"),
  ("Bearer   ", config.DEFAULT_USER_ID),
  ("", config.DEFAULT_USER_ID),
  (None, config.DEFAULT_USER_ID),
])
def test_resolve_user_id(header, expected):
  assert resolve_user_id(header) == expected


def test_ensure_user_creates_once(store):
  user = ensure_user(store, "tok123")
  assert user["id"] == "tok123"
  assert user["email"] == "tok123@demo.com"
  assert user["name"] == "Demo User"
  assert store.get("users", "tok123") == user

  store.put("users", "tok123", {**user, "name": "Renamed"})
  assert ensure_user(store, "tok123")["name"] == "Renamed"
