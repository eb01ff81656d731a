# errors.py
"""Error types shared by the store, the repositories and the API."""


class DomainError(Exception):
  """Base class for invoicing errors."""


class NotFoundError(DomainError):
  """Record is absent or owned by another user."""

  def __init__(self, kind: str, record_id: str):
    super().__init__(f"{kind} {record_id} not found")
    self.kind = kind
    self.record_id = record_id


class PersistenceError(DomainError):
  """The backing file or database could not be read or written."""
