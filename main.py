# main.py
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from billing_route import router as billing_router
from errors import NotFoundError, PersistenceError

logging.basicConfig(
  level=config.LOG_LEVEL,
  format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

app = FastAPI(title="InvoiceHero Backend", version="1.0.0")
app.add_middleware(
  CORSMiddleware,
  allow_origins=config.CORS_ORIGINS,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)
app.include_router(billing_router)


@app.exception_handler(NotFoundError)
async def not_found(request: Request, exc: NotFoundError):
  return JSONResponse(status_code=404, content={"error": "Not found"})


@app.exception_handler(PersistenceError)
async def storage_failed(request: Request, exc: PersistenceError):
  log.error("%s %s failed: %s", request.method, request.url.path, exc)
  return JSONResponse(status_code=500, content={"error": "Storage unavailable"})


@app.get("/health")
def health():
  return {
    "status": "ok",
    "stripe": config.stripe_configured(),
    "timestamp": datetime.now(timezone.utc).isoformat(),
  }
