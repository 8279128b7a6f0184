"""Boutique FastAPI application.

Single-domain web server that processes commands synchronously via HTTP.
Every request runs inside the boutique domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import os
import uuid
from pathlib import Path

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay from domain.toml (e.g. "production"
# switches the database to PostgreSQL).
from boutique.domain import boutique  # noqa: E402
from boutique.utils.logging import add_context, clear_context
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

boutique.init()


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Boutique Inventory API",
    description="Shoes, bags and dresses — catalogue, stock ledger and dashboard",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in os.environ.get("CORS_ORIGINS", "*").split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the boutique domain context and bind a request id to the log context."""
    clear_context()
    add_context(request_id=request.headers.get("x-request-id", str(uuid.uuid4())), path=request.url.path)
    try:
        with boutique.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from boutique.api import (  # noqa: E402
    bags_router,
    dashboard_router,
    dresses_router,
    sales_router,
    shoes_router,
)
from boutique.api.errors import register_error_handlers  # noqa: E402
from boutique.storage import upload_dir  # noqa: E402

app.include_router(shoes_router)
app.include_router(bags_router)
app.include_router(dresses_router)
app.include_router(sales_router)
app.include_router(dashboard_router)

register_error_handlers(app)

_uploads = Path(upload_dir())
_uploads.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=_uploads), name="uploads")


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": boutique.name})
