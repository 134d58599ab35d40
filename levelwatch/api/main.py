"""FastAPI application factory and lifespan management."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from levelwatch.config import settings
from levelwatch.engine import IndicatorEngine
from levelwatch.symbols import fetch_symbols

# Global app state — accessible from route handlers
app_state: dict = {}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic."""
    logger.info("Starting levelwatch...")

    engine: IndicatorEngine = app_state["engine"]
    if settings.symbols_url:
        await fetch_symbols(engine.symbol_book, settings.symbols_url)
    else:
        logger.info("No symbols_url configured; buy/sell lists stay empty")

    yield

    logger.info("levelwatch stopped")


def create_app(engine: IndicatorEngine | None = None) -> FastAPI:
    app_state["engine"] = engine or IndicatorEngine()

    app = FastAPI(title="levelwatch", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from levelwatch.api.market import router as market_router
    from levelwatch.api.ws import router as ws_router

    app.include_router(market_router)
    app.include_router(ws_router)

    @app.get("/api/health")
    async def health():
        engine = app_state["engine"]
        return {
            "status": "ok",
            "symbols": engine.store.symbols(),
            "watched": settings.watched_symbols,
        }

    return app
