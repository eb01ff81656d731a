# stats.py
"""Derived invoice figures: effective status and dashboard totals.

Everything here is a pure function of the stored invoices and a clock value.
Nothing is cached; callers recompute on every read.
"""
import math
import re
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from dateutil.parser import isoparse

from models import InvoiceStats

LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def utcnow() -> datetime:
  return datetime.now(timezone.utc)


def parse_amount(value: Any) -> float:
  """Numeric value of a stored amount; anything unusable counts as 0."""
  if isinstance(value, bool):
    return 0.0
  if isinstance(value, (int, float)):
    number = float(value)
  elif isinstance(value, str):
    # leading number, so "12.5 EUR" reads as 12.5
    match = LEADING_NUMBER.match(value)
    if match is None:
      return 0.0
    number = float(match.group(0))
  else:
    return 0.0
  return number if math.isfinite(number) else 0.0


def parse_timestamp(value: Any) -> Optional[datetime]:
  """ISO-8601 date or datetime as an aware datetime (naive means UTC)."""
  if not isinstance(value, str) or not value.strip():
    return None
  try:
    parsed = isoparse(value.strip())
  except (ValueError, OverflowError):
    return None
  if parsed.tzinfo is None:
    parsed = parsed.replace(tzinfo=timezone.utc)
  return parsed


def as_utc(moment: datetime) -> datetime:
  return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)


def is_paid(status: Any) -> bool:
  return status == "paid"


def is_overdue(status: Any, due_date: Any, now: datetime) -> bool:
  if is_paid(status):
    return False
  due = parse_timestamp(due_date)
  return due is not None and due < as_utc(now)


def effective_status(status: Any, due_date: Any, now: Optional[datetime] = None) -> str:
  """Status to display: the stored one, or "overdue" for unpaid past-due invoices."""
  if is_overdue(status, due_date, now or utcnow()):
    return "overdue"
  return status if isinstance(status, str) and status else "pending"


def compute_stats(invoices: Iterable[Mapping[str, Any]], now: Optional[datetime] = None) -> InvoiceStats:
  now = as_utc(now or utcnow())
  stats = InvoiceStats()
  for inv in invoices:
    amount = parse_amount(inv.get("amount"))
    status = inv.get("status")
    if is_paid(status):
      stats.revenue += amount
      created = parse_timestamp(inv.get("createdAt"))
      if created is not None:
        created = created.astimezone(now.tzinfo)
        if (created.year, created.month) == (now.year, now.month):
          stats.monthRevenue += amount
          stats.monthCount += 1
      continue
    stats.outstanding += amount
    stats.outstandingCount += 1
    if is_overdue(status, inv.get("dueDate"), now):
      stats.overdue += amount
      stats.overdueCount += 1
  return stats
