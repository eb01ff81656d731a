# config.py
import os
from dotenv import load_dotenv

load_dotenv()

DB_FILE = os.getenv("INVOICE_DB_FILE", "db.json").strip() or "db.json"
DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "").strip()
DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "demo").strip() or "demo"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
CORS_ORIGINS = [
  x.strip()
  for x in os.getenv("CORS_ORIGINS", "http://127.0.0.1:5173,http://localhost:5173").split(",")
  if x.strip()
]


def stripe_configured() -> bool:
  # payment integration is a stub; only its presence is reported
  return bool(STRIPE_SECRET_KEY)
