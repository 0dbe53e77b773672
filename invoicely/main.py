"""Application entrypoint: ``uvicorn invoicely.main:app``."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from invoicely.api.v1._errors import register_error_handlers
from invoicely.api.v1.router import get_api_router
from invoicely.core.config import get_config
from invoicely.core.startup import bootstrap


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION)
    if cfg.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(cfg.CORS_ORIGINS),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
    register_error_handlers(app)
    app.include_router(get_api_router(cfg.API_PREFIX))

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


bootstrap()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("invoicely.main:app", host="0.0.0.0", port=8000)
