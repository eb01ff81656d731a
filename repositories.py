# repositories.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

from db import Store
from errors import NotFoundError
from models import SERVER_FIELDS

log = logging.getLogger(__name__)


def new_id(prefix: str) -> str:
  return prefix + str(uuid.uuid4())


def _now() -> str:
  return datetime.now(timezone.utc).isoformat()


class OwnedRepository:
  """Records in one store collection, scoped to a single owner."""

  collection = ""
  kind = ""
  id_prefix = ""

  def __init__(self, store: Store, user_id: str):
    self.store = store
    self.user_id = user_id

  def list(self) -> List[Dict[str, Any]]:
    return self.store.values(self.collection, owner=self.user_id)

  def get(self, record_id: str) -> Dict[str, Any]:
    record = self.store.get(self.collection, record_id)
    if record is None or record.get("userId") != self.user_id:
      raise NotFoundError(self.kind, record_id)
    return record

  def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
    record = {
      **fields,
      "id": new_id(self.id_prefix),
      "userId": self.user_id,
      "createdAt": _now(),
    }
    # ids are random; a clash would mean overwriting another user's record
    while self.store.get(self.collection, record["id"]) is not None:
      record["id"] = new_id(self.id_prefix)
    self.store.put(self.collection, record["id"], record)
    log.info("Created %s %s for %s", self.kind, record["id"], self.user_id)
    return record

  def delete(self, record_id: str) -> Dict[str, bool]:
    self.get(record_id)
    self.store.delete(self.collection, record_id)
    log.info("Deleted %s %s", self.kind, record_id)
    return {"success": True}


class InvoiceRepository(OwnedRepository):
  collection = "invoices"
  kind = "invoice"
  id_prefix = "inv_"

  def update(self, invoice_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge; id, owner and creation time are not writable."""
    merged = self.get(invoice_id)
    merged.update({k: v for k, v in fields.items() if k not in SERVER_FIELDS})
    self.store.put(self.collection, invoice_id, merged)
    return merged


class ClientRepository(OwnedRepository):
  collection = "clients"
  kind = "client"
  id_prefix = "cli_"


class SettingsRepository:
  def __init__(self, store: Store, user_id: str):
    self.store = store
    self.user_id = user_id

  def get(self) -> Dict[str, Any]:
    return self.store.get("settings", self.user_id) or {}

  def update(self, fields: Dict[str, Any]) -> Dict[str, Any]:
    merged = {**self.get(), **fields}
    self.store.put("settings", self.user_id, merged)
    return merged
