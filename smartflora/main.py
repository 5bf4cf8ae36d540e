"""
SmartFlora - Smart plant pot mock backend

Stands in for the SmartFlora cloud API. It keeps anonymous sessions and
the registry of bound pots in a local key-value store, and serves them to
the mobile-web client.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables
load_dotenv()

from smartflora.database import SessionLocal, init_db
from smartflora.device_registry import DeviceRegistry
from smartflora.network import NetworkSimulator
from smartflora.routers import pots_router, sessions_router
from smartflora.session_store import SessionStore
from smartflora.store import KeyValueStore, SqlKeyValueStore

logger = logging.getLogger(__name__)


def create_app(
    kv_store: Optional[KeyValueStore] = None,
    network: Optional[NetworkSimulator] = None,
) -> FastAPI:
    """
    Build the application.

    Without arguments the app persists to DATABASE_URL and simulates
    latency from the environment. Tests pass an in-memory store and a
    zero-latency network instead.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        store = kv_store
        if store is None:
            # Startup: Initialize database tables
            init_db()
            store = SqlKeyValueStore(SessionLocal)

        simulator = network or NetworkSimulator.from_env()
        app.state.session_store = SessionStore(store, network=simulator)
        app.state.device_registry = DeviceRegistry(store, network=simulator)
        logger.info("SmartFlora backend ready")
        yield

    app = FastAPI(
        title="SmartFlora API",
        version="0.1.0",
        description="""
Mock backend for the SmartFlora mobile-web client. Manages anonymous
sessions created by scanning a pot's QR code and the registry of bound
smart plant pots with their telemetry, history and watering settings.
        """,
        lifespan=lifespan,
    )

    # Include routers
    app.include_router(sessions_router)
    app.include_router(pots_router)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    debug = os.getenv("DEBUG", "false").lower() == "true"

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )
    uvicorn.run("smartflora.main:app", host=host, port=port, reload=debug)
