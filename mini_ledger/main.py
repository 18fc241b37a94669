"""
Mini Ledger: FastAPI Application.

This is the entry point for the application. create_app() wires
settings, the ledger store, the caller identity provider and the
routers together; the module-level `app` is what uvicorn serves.

The store is opened by the lifespan handler when the server
starts and disposed when it stops, so importing this module
never touches the database.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mini_ledger.bootstrap import bootstrap_schema
from mini_ledger.config import Settings, get_settings
from mini_ledger.logging_config import setup_logging
from mini_ledger.security import BearerAccountIdProvider, IdentityProvider
from mini_ledger.store import LedgerStore
from mini_ledger.api.errors import register_exception_handlers
from mini_ledger.api.health import router as health_router
from mini_ledger.api.accounts import router as accounts_router
from mini_ledger.api.transactions import router as transactions_router


def create_app(
    settings: Settings | None = None,
    store: LedgerStore | None = None,
    identity_provider: IdentityProvider | None = None,
) -> FastAPI:
    """
    Build the application.

    A store passed in is used as-is and left open at shutdown;
    otherwise one is created from settings at startup and
    disposed at shutdown.
    """
    settings = settings or get_settings()
    logger = setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = store is None
        app.state.store = store or LedgerStore.from_settings(settings)
        bootstrap_schema(app.state.store.engine)
        logger.info("Ledger store ready")
        try:
            yield
        finally:
            if owned:
                app.state.store.dispose()
                logger.info("Ledger store closed")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="A minimal ledger: accounts, fundings, withdrawals and transfers",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.identity_provider = identity_provider or BearerAccountIdProvider()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(accounts_router, prefix=settings.API_PREFIX)
    app.include_router(transactions_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
