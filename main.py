"""
Prompt template service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.middleware import register_middleware
from api.routes import router as api_router
from auth.jwt import get_signer
from auth.routes import router as auth_router
from config.settings import config
from database.sql_store import SQLStore
from database.store import CredentialStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("aiosqlite", "sqlalchemy.engine"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(store: Optional[CredentialStore] = None) -> FastAPI:
    """
    Build the application.

    When *store* is given it is used as-is (tests); otherwise an
    ``SQLStore`` for ``config.database_url`` is created on startup.
    """
    app = FastAPI(
        title="Prompt Template Service",
        version="1.0.0",
        description="Stores reusable prompt templates behind token auth.",
    )
    app.state.store = store

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(api_router)

    @app.on_event("startup")
    async def on_startup():
        # Fail fast on a missing signing secret.
        get_signer()

        if app.state.store is None:
            logger.info("Opening database…")
            app.state.store = await SQLStore.connect(config.database_url)

        logger.info("Application ready to accept requests.")

    @app.on_event("shutdown")
    async def on_shutdown():
        if app.state.store is not None:
            await app.state.store.close()

    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Server starting on %s:%s", config.host, config.port)
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        log_level="debug" if config.debug else "info",
    )
