"""Health endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter

from invoicely.core.config import get_config

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    cfg = get_config()
    return {"status": "ok", "service": cfg.APP_NAME, "version": cfg.APP_VERSION}
