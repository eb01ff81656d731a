# identity.py
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, Header

import config
from db import Store, get_store

log = logging.getLogger(__name__)


def resolve_user_id(authorization: Optional[str]) -> str:
  """The bearer token itself is the user id; no token means the demo user."""
  token = (authorization or "").strip()
  scheme, _, rest = token.partition(" ")
  if scheme.lower() == "bearer":
    token = rest.strip()
  return token or config.DEFAULT_USER_ID


def ensure_user(store: Store, user_id: str) -> Dict[str, Any]:
  user = store.get("users", user_id)
  if user is not None:
    return user
  user = {
    "id": user_id,
    "email": f"{user_id}@demo.com",
    "name": "Demo User",
    "createdAt": datetime.now(timezone.utc).isoformat(),
  }
  store.put("users", user_id, user)
  log.info("Provisioned user %s", user_id)
  return user


def current_user(
  authorization: Optional[str] = Header(default=None),
  store: Store = Depends(get_store),
) -> str:
  user_id = resolve_user_id(authorization)
  ensure_user(store, user_id)
  return user_id
