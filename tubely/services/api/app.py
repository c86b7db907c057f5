# tubely/services/api/app.py
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tubely.common.settings import UploadLimits, get_settings
from tubely.services.api.body_limits import UploadBodyLimit
from tubely.services.api.routers import assets, health, uploads, videos

cfg = get_settings()


def create_app(limits: Optional[UploadLimits] = None) -> FastAPI:
    dev = cfg.app_env.lower() == "development"
    app = FastAPI(
        title="Tubely API",
        version="0.1.0",
        docs_url=f"{cfg.api.prefix}/docs",
        openapi_url=f"{cfg.api.prefix}/openapi.json",
    )

    # last added runs first: CORS wraps the body cap so 413s keep their headers
    app.add_middleware(UploadBodyLimit, limits=limits or cfg.uploads, prefix=cfg.api.prefix)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if dev else cfg.api.cors_allow_origins,
        allow_methods=cfg.api.cors_allow_methods,
        allow_headers=cfg.api.cors_allow_headers,
        allow_credentials=cfg.api.cors_allow_credentials,
    )

    # Routers
    app.include_router(health.router)
    app.include_router(videos.router)
    app.include_router(uploads.router)
    app.include_router(assets.router)
    return app

app = create_app()
