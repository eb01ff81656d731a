# models.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field as PydanticField
from sqlalchemy import JSON, Column
from sqlmodel import SQLModel, Field

SERVER_FIELDS = ("id", "userId", "createdAt")


# ---- request payloads: field names documented, values stored exactly as sent

class InvoiceIn(BaseModel):
  model_config = ConfigDict(extra="allow")

  clientId: Any = None
  number: Any = None
  items: Any = PydanticField(default_factory=list)
  amount: Any = 0
  dueDate: Any = None
  notes: Any = None
  status: Any = "pending"


class InvoicePatch(BaseModel):
  model_config = ConfigDict(extra="allow")

  clientId: Any = None
  number: Any = None
  items: Any = None
  amount: Any = None
  dueDate: Any = None
  notes: Any = None
  status: Any = None


class ClientIn(BaseModel):
  model_config = ConfigDict(extra="allow")

  name: Any = None
  email: Any = None
  address: Any = None
  phone: Any = None


class SettingsIn(BaseModel):
  model_config = ConfigDict(extra="allow")

  name: Any = None
  email: Any = None
  address: Any = None
  taxId: Any = None
  paymentTerms: Any = None  # days; the form posts it as text
  currency: Any = None
  invoicePrefix: Any = None
  invoiceNext: Any = None
  notes: Any = None


def payload(model: BaseModel) -> Dict[str, Any]:
  """Fields the caller actually sent, extras included."""
  return model.model_dump(exclude_unset=True)


# ---- derived views

class InvoiceStats(BaseModel):
  revenue: float = 0
  outstanding: float = 0
  outstandingCount: int = 0
  overdue: float = 0
  overdueCount: int = 0
  monthRevenue: float = 0
  monthCount: int = 0


class Party(BaseModel):
  name: str
  email: str = ""
  address: str = ""
  taxId: str = ""


class DocumentLine(BaseModel):
  description: str
  qty: float
  price: float
  total: float


class InvoiceDocument(BaseModel):
  id: str
  number: str
  status: str
  issuedAt: Optional[str] = None
  dueDate: Any = None
  seller: Party
  billTo: Party
  lines: List[DocumentLine]
  total: float
  currency: str
  notes: str = ""


class DraftDefaults(BaseModel):
  number: str
  dueDate: str
  notes: str = ""
  status: str = "pending"


# ---- SQL backend rows: one JSON blob per record, owner broken out for filtering

class UserRow(SQLModel, table=True):
  __tablename__ = "users"
  id: str = Field(primary_key=True)
  data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

class InvoiceRow(SQLModel, table=True):
  __tablename__ = "invoices"
  id: str = Field(primary_key=True)
  user_id: str = Field(index=True)
  data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

class ClientRow(SQLModel, table=True):
  __tablename__ = "clients"
  id: str = Field(primary_key=True)
  user_id: str = Field(index=True)
  data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

class SettingsRow(SQLModel, table=True):
  __tablename__ = "settings"
  user_id: str = Field(primary_key=True)
  data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))
