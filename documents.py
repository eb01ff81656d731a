# documents.py
from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional

from models import DocumentLine, DraftDefaults, InvoiceDocument, Party
from stats import effective_status, parse_amount

DEFAULT_PREFIX = "INV-"
DEFAULT_NEXT_NUMBER = 1001
DEFAULT_PAYMENT_TERMS = 30
DEFAULT_CURRENCY = "EUR"


def _text(value: Any) -> str:
  return value if isinstance(value, str) else ""


def _counter(value: Any) -> str:
  if isinstance(value, float) and value.is_integer():
    value = int(value)
  text = str(value).strip() if value not in (None, "") else ""
  return text or str(DEFAULT_NEXT_NUMBER)


def suggested_number(settings: Dict[str, Any]) -> str:
  return (_text(settings.get("invoicePrefix")) or DEFAULT_PREFIX) + _counter(settings.get("invoiceNext"))


def payment_terms(settings: Dict[str, Any]) -> int:
  return int(parse_amount(settings.get("paymentTerms"))) or DEFAULT_PAYMENT_TERMS


def due_date(today: date, terms: int) -> date:
  try:
    return today + timedelta(days=terms)
  except OverflowError:
    return today + timedelta(days=DEFAULT_PAYMENT_TERMS)


def draft_defaults(settings: Dict[str, Any], today: date) -> DraftDefaults:
  return DraftDefaults(
    number=suggested_number(settings),
    dueDate=due_date(today, payment_terms(settings)).isoformat(),
    notes=_text(settings.get("notes")),
  )


def render_invoice(
  invoice: Dict[str, Any],
  client: Optional[Dict[str, Any]],
  settings: Dict[str, Any],
  now: Optional[datetime] = None,
) -> InvoiceDocument:
  """Display/print data for one invoice. A deleted client renders as "Unknown"."""
  client = client or {}
  items = invoice.get("items")
  lines = []
  for item in items if isinstance(items, list) else []:
    if not isinstance(item, dict):
      continue
    qty = parse_amount(item.get("qty"))
    price = parse_amount(item.get("price"))
    lines.append(DocumentLine(
      description=_text(item.get("description")),
      qty=qty,
      price=price,
      total=round(qty * price, 2),
    ))

  return InvoiceDocument(
    id=invoice["id"],
    number=_text(invoice.get("number")),
    status=effective_status(invoice.get("status"), invoice.get("dueDate"), now),
    issuedAt=invoice.get("createdAt"),
    dueDate=invoice.get("dueDate") if isinstance(invoice.get("dueDate"), str) else None,
    seller=Party(
      name=_text(settings.get("name")) or "Your Business",
      email=_text(settings.get("email")),
      address=_text(settings.get("address")),
      taxId=_text(settings.get("taxId")),
    ),
    billTo=Party(
      name=_text(client.get("name")) or "Unknown",
      email=_text(client.get("email")),
      address=_text(client.get("address")),
    ),
    lines=lines,
    total=parse_amount(invoice.get("amount")),
    currency=_text(settings.get("currency")) or DEFAULT_CURRENCY,
    notes=_text(invoice.get("notes")),
  )
