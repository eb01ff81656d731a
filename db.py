# db.py
from abc import ABC, abstractmethod
import contextlib
import copy
import json
import logging
import os
import tempfile
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session, select

import config
from errors import PersistenceError
from models import UserRow, InvoiceRow, ClientRow, SettingsRow

log = logging.getLogger(__name__)

COLLECTIONS = ("users", "invoices", "clients", "settings")
OWNED = ("invoices", "clients")


def empty_document() -> Dict[str, Dict[str, Any]]:
  return {key: {} for key in COLLECTIONS}


class Store(ABC):
  """Keyed record collections: users, invoices, clients, settings.

  Settings are keyed by user id. Invoices and clients carry their owner in
  ``userId`` and can be listed per owner.
  """

  @abstractmethod
  def get(self, collection: str, key: str) -> Optional[Dict[str, Any]]:
    raise NotImplementedError

  @abstractmethod
  def put(self, collection: str, key: str, record: Dict[str, Any]) -> None:
    raise NotImplementedError

  @abstractmethod
  def delete(self, collection: str, key: str) -> None:
    raise NotImplementedError

  @abstractmethod
  def values(self, collection: str, owner: Optional[str] = None) -> List[Dict[str, Any]]:
    raise NotImplementedError


class JsonStore(Store):
  """The whole store as one JSON document, rewritten on every mutation."""

  def __init__(self, path: str):
    self.path = Path(path)
    self._lock = threading.Lock()
    self._doc = self._load()

  def _load(self) -> Dict[str, Dict[str, Any]]:
    if not self.path.exists():
      return empty_document()
    try:
      with self.path.open("r", encoding="utf-8") as fh:
        doc = json.load(fh)
    except (OSError, ValueError) as e:
      log.exception("Could not read store document %s", self.path)
      raise PersistenceError(f"could not read {self.path}") from e
    if not isinstance(doc, dict):
      raise PersistenceError(f"{self.path} does not hold a JSON object")
    for key in COLLECTIONS:
      if not isinstance(doc.get(key), dict):
        doc[key] = {}
    return doc

  def _write(self, doc: Dict[str, Any]) -> None:
    # temp file + rename so a failed write never truncates the previous document
    tmp = None
    try:
      self.path.parent.mkdir(parents=True, exist_ok=True)
      fd, tmp = tempfile.mkstemp(prefix=".db-", suffix=".json", dir=str(self.path.parent))
      with os.fdopen(fd, "w", encoding="utf-8") as fh:
        json.dump(doc, fh, indent=2)
      os.replace(tmp, self.path)
    except OSError as e:
      log.exception("Could not write store document %s", self.path)
      if tmp:
        with contextlib.suppress(OSError):
          os.unlink(tmp)
      raise PersistenceError(f"could not write {self.path}") from e

  def _commit(self, collection: str, change) -> None:
    with self._lock:
      records = dict(self._doc[collection])
      change(records)
      candidate = {**self._doc, collection: records}
      self._write(candidate)
      self._doc = candidate

  def get(self, collection, key):
    record = self._doc[collection].get(key)
    return copy.deepcopy(record) if isinstance(record, dict) else None

  def put(self, collection, key, record):
    value = copy.deepcopy(record)
    self._commit(collection, lambda records: records.__setitem__(key, value))

  def delete(self, collection, key):
    self._commit(collection, lambda records: records.pop(key, None))

  def values(self, collection, owner=None):
    return [
      copy.deepcopy(r)
      for r in self._doc[collection].values()
      if isinstance(r, dict) and (owner is None or r.get("userId") == owner)
    ]

  def document(self) -> Dict[str, Any]:
    return copy.deepcopy(self._doc)


ROWS = {"users": UserRow, "invoices": InvoiceRow, "clients": ClientRow, "settings": SettingsRow}


class SqlStore(Store):
  """One row per record; every write is its own transaction."""

  def __init__(self, url: str):
    self.engine = create_engine(url, echo=False, pool_pre_ping=True)
    try:
      SQLModel.metadata.create_all(self.engine)
    except SQLAlchemyError as e:
      log.exception("Could not initialise database schema")
      raise PersistenceError("could not initialise database") from e

  @contextlib.contextmanager
  def _session(self) -> Iterator[Session]:
    try:
      with Session(self.engine) as session:
        yield session
    except SQLAlchemyError as e:
      log.exception("Database operation failed")
      raise PersistenceError("database operation failed") from e

  def get(self, collection, key):
    with self._session() as session:
      row = session.get(ROWS[collection], key)
      return dict(row.data) if row is not None else None

  def put(self, collection, key, record):
    row_cls = ROWS[collection]
    if collection == "settings":
      row = row_cls(user_id=key, data=dict(record))
    elif collection in OWNED:
      row = row_cls(id=key, user_id=record.get("userId") or "", data=dict(record))
    else:
      row = row_cls(id=key, data=dict(record))
    with self._session() as session:
      session.merge(row)
      session.commit()

  def delete(self, collection, key):
    with self._session() as session:
      row = session.get(ROWS[collection], key)
      if row is not None:
        session.delete(row)
        session.commit()

  def values(self, collection, owner=None):
    row_cls = ROWS[collection]
    stmt = select(row_cls)
    if owner is not None:
      stmt = stmt.where(row_cls.user_id == owner)
    with self._session() as session:
      return [dict(row.data) for row in session.exec(stmt).all()]


def open_store() -> Store:
  if config.DATABASE_URL:
    log.info("Using SQL store")
    return SqlStore(config.DATABASE_URL)
  log.info("Using JSON store at %s", config.DB_FILE)
  return JsonStore(config.DB_FILE)


@lru_cache(maxsize=None)
def get_store() -> Store:
  return open_store()
