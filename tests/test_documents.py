"""Tests for invoice rendering and form defaults."""

from datetime import date, datetime, timezone

from documents import draft_defaults, render_invoice, suggested_number

NOW = datetime(2024, 6, 15, tzinfo=timezone.utc)

INVOICE = {
  "id": "inv_1",
  "userId": "alice",
  "clientId": "cli_1",
  "number": "INV-1001",
  "items": [
    {"description": "Design", "qty": 2, "price": 150},
    {"description": "Hosting", "qty": "1", "price": "19.99"},
  ],
  "amount": 319.99,
  "dueDate": "2024-06-01",
  "notes": "Thank you!",
  "status": "pending",
  "createdAt": "2024-05-01T09:00:00+00:00",
}


def test_render_invoice():
  client = {"id": "cli_1", "name": "Acme", "email": "a@acme.com", "address": "1 Road"}
  settings = {"name": "Studio", "email": "me@studio.com", "taxId": "VAT1", "currency": "USD"}

  doc = render_invoice(INVOICE, client, settings, NOW)

  assert doc.number == "INV-1001"
  assert doc.status == "overdue"
  assert doc.seller.name == "Studio"
  assert doc.seller.taxId == "VAT1"
  assert doc.billTo.name == "Acme"
  assert doc.billTo.email == "a@acme.com"
  assert [line.total for line in doc.lines] == [300.0, 19.99]
  assert doc.total == 319.99
  assert doc.currency == "USD"
  assert doc.notes == "Thank you!"


def test_render_without_client_or_settings():
  doc = render_invoice({**INVOICE, "status": "paid", "items": ["junk", {"qty": 3}]}, None, {}, NOW)

  assert doc.billTo.name == "Unknown"
  assert doc.seller.name == "Your Business"
  assert doc.currency == "EUR"
  assert doc.status == "paid"
  assert len(doc.lines) == 1
  assert doc.lines[0].total == 0


def test_suggested_number():
  assert suggested_number({}) == "INV-1001"
  assert suggested_number({"invoicePrefix": "S-", "invoiceNext": 42}) == "S-42"
  assert suggested_number({"invoiceNext": "2001"}) == "INV-2001"
  assert suggested_number({"invoiceNext": 7.0}) == "INV-7"


def test_draft_defaults():
  today = date(2024, 1, 31)
  assert draft_defaults({}, today).model_dump() == {
    "number": "INV-1001", "dueDate": "2024-03-01", "notes": "", "status": "pending",
  }

  custom = draft_defaults({"paymentTerms": "14", "notes": "Pay by wire"}, today)
  assert custom.dueDate == "2024-02-14"
  assert custom.notes == "Pay by wire"


def test_draft_defaults_falls_back_on_huge_terms():
  today = date(2024, 1, 1)
  assert draft_defaults({"paymentTerms": 1e12}, today).dueDate == "2024-01-31"
  assert draft_defaults({"paymentTerms": "3000000"}, today).dueDate == "2024-01-31"


def test_render_tolerates_non_list_items():
  for items in (5, "none", {"a": 1}, None):
    doc = render_invoice({**INVOICE, "items": items, "number": 9, "dueDate": 20200101}, None, {}, NOW)
    assert doc.lines == []
    assert doc.number == ""
    assert doc.dueDate is None
    assert doc.status == "pending"
