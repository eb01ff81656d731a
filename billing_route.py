# billing_route.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends

from db import Store, get_store
from documents import draft_defaults, render_invoice
from errors import NotFoundError
from identity import current_user
from models import (
  ClientIn, DraftDefaults, InvoiceDocument, InvoiceIn, InvoicePatch,
  InvoiceStats, SettingsIn, payload,
)
from repositories import ClientRepository, InvoiceRepository, SettingsRepository
from stats import compute_stats

router = APIRouter(prefix="/api", tags=["billing"])

Record = Dict[str, Any]


def invoices_for(user_id: str = Depends(current_user), store: Store = Depends(get_store)) -> InvoiceRepository:
  return InvoiceRepository(store, user_id)

def clients_for(user_id: str = Depends(current_user), store: Store = Depends(get_store)) -> ClientRepository:
  return ClientRepository(store, user_id)

def settings_for(user_id: str = Depends(current_user), store: Store = Depends(get_store)) -> SettingsRepository:
  return SettingsRepository(store, user_id)


def _client_or_none(clients: ClientRepository, client_id: Any) -> Optional[Record]:
  if not isinstance(client_id, str):
    return None
  try:
    return clients.get(client_id)
  except NotFoundError:
    return None


@router.get("/invoices", response_model=List[Record])
def list_invoices(invoices: InvoiceRepository = Depends(invoices_for)):
  return invoices.list()

@router.post("/invoices", response_model=Record)
def create_invoice(inv: InvoiceIn, invoices: InvoiceRepository = Depends(invoices_for)):
  return invoices.create(payload(inv))

# declared before /invoices/{invoice_id} so "defaults" is not taken as an id
@router.get("/invoices/defaults", response_model=DraftDefaults)
def invoice_defaults(settings: SettingsRepository = Depends(settings_for)):
  return draft_defaults(settings.get(), datetime.now(timezone.utc).date())

@router.get("/invoices/{invoice_id}", response_model=Record)
def get_invoice(invoice_id: str, invoices: InvoiceRepository = Depends(invoices_for)):
  return invoices.get(invoice_id)

@router.get("/invoices/{invoice_id}/document", response_model=InvoiceDocument)
def invoice_document(
  invoice_id: str,
  invoices: InvoiceRepository = Depends(invoices_for),
  clients: ClientRepository = Depends(clients_for),
  settings: SettingsRepository = Depends(settings_for),
):
  invoice = invoices.get(invoice_id)
  return render_invoice(invoice, _client_or_none(clients, invoice.get("clientId")), settings.get())

@router.put("/invoices/{invoice_id}", response_model=Record)
def update_invoice(invoice_id: str, patch: InvoicePatch, invoices: InvoiceRepository = Depends(invoices_for)):
  return invoices.update(invoice_id, payload(patch))

@router.delete("/invoices/{invoice_id}")
def delete_invoice(invoice_id: str, invoices: InvoiceRepository = Depends(invoices_for)):
  return invoices.delete(invoice_id)


@router.get("/stats", response_model=InvoiceStats)
def invoice_stats(invoices: InvoiceRepository = Depends(invoices_for)):
  return compute_stats(invoices.list())


@router.get("/clients", response_model=List[Record])
def list_clients(clients: ClientRepository = Depends(clients_for)):
  return clients.list()

@router.post("/clients", response_model=Record)
def create_client(c: ClientIn, clients: ClientRepository = Depends(clients_for)):
  return clients.create(payload(c))

@router.delete("/clients/{client_id}")
def delete_client(client_id: str, clients: ClientRepository = Depends(clients_for)):
  return clients.delete(client_id)


@router.get("/settings", response_model=Record)
def get_settings(settings: SettingsRepository = Depends(settings_for)):
  return settings.get()

@router.post("/settings", response_model=Record)
def save_settings(s: SettingsIn, settings: SettingsRepository = Depends(settings_for)):
  return settings.update(payload(s))
