"""FastAPI main application."""

import logging
import os

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from spill_registry.api import admin, auth, intervenants, reports, stats
from spill_registry.config import settings
from spill_registry.core.errors import (
    ConcurrentAllocationConflict,
    ReportNotFound,
    ReportStoreError,
    StoreTimeout,
    StoreUnavailable,
)
from spill_registry.database import engine, Base
from spill_registry import models  # noqa: F401

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name, version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(reports.router, prefix="/api/reports", tags=["reports"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
app.include_router(intervenants.router, prefix="/api/intervenants", tags=["intervenants"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])

# Uploaded attachments
os.makedirs(settings.local_storage_dir, exist_ok=True)
app.mount("/files", StaticFiles(directory=settings.local_storage_dir), name="files")

STORE_ERROR_STATUS = {
    ReportNotFound: 404,
    ConcurrentAllocationConflict: 409,
    StoreTimeout: 504,
    StoreUnavailable: 503,
}


@app.exception_handler(ReportStoreError)
async def handle_store_error(request: Request, exc: ReportStoreError):
    """Return the error kind and message so clients can offer a retry."""
    status_code = next(
        (code for cls, code in STORE_ERROR_STATUS.items() if isinstance(exc, cls)),
        500,
    )
    logger.warning(f"{request.method} {request.url.path} failed ({exc.kind}): {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "kind": exc.kind})


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok"}
