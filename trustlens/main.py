from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .models import AnalysisResult, AnalyzeRequest, HealthResponse
from .resolver import TieredResolver


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="TrustLens", version="0.1.0")
    app.state.settings = settings
    app.state.resolver = TieredResolver.from_settings(settings)

    # Defaults to http://localhost:3000 for local dev.
    # In production, set TRUSTLENS_CORS_ORIGINS to the deployed frontend origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz", response_model=HealthResponse)
    def healthz():
        return {"ok": True, "live": settings.has_live_key}

    @app.post("/analyze", response_model=AnalysisResult)
    async def analyze_endpoint(req: AnalyzeRequest):
        return await app.state.resolver.resolve(req.url)

    return app


app = create_app()
