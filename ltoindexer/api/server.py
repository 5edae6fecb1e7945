"""
FastAPI server for the LTO Chain Indexer

This module creates the read-only API application. The storage backend is
created from the settings at startup and closed at shutdown.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ltoindexer import __version__
from ltoindexer.api.v1.endpoints import router as v1_router
from ltoindexer.config.settings import Settings, get_settings
from ltoindexer.indexer.trust_network import TrustNetworkService
from ltoindexer.storage import create_storage_service
from ltoindexer.storage.storage_service import StorageService

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, storage: StorageService = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings())
        storage: Storage service to serve from; created from settings when omitted
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = storage is None
        app.state.storage = storage or create_storage_service(settings)
        app.state.trust_network = TrustNetworkService(app.state.storage, settings.get_trust_network_roles())
        logger.info("Starting LTO indexer API server...")
        yield
        logger.info("Shutting down LTO indexer API server...")
        if owned:
            await app.state.storage.close()

    fast_app = FastAPI(
        title="LTO Chain Indexer API",
        description="Read-only access to anchors, identities, associations and transaction history",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan
    )

    fast_app.include_router(v1_router)
    return fast_app


def run_server(settings: Settings = None):
    """Run the API with uvicorn"""
    settings = settings or get_settings()
    api_config = settings.get_api_config()
    uvicorn.run(create_app(settings), host=api_config["host"], port=api_config["port"])
