"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from invoicely.api.v1 import auth, health, invoices, subscriptions


def get_api_router(prefix: str = "/api/v1") -> APIRouter:
    api_router = APIRouter(prefix=prefix)
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    api_router.include_router(invoices.router)
    api_router.include_router(subscriptions.router)
    return api_router
