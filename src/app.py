"""Storefront FastAPI application.

Web server that quotes and commits checkouts synchronously via HTTP.
Each request runs inside the storefront domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV controls which config overlay is applied (see domain.toml).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.api import (
    admin_router,
    catalogue_router,
    checkout_router,
    order_router,
    payments_router,
    register_checkout_error_handlers,
    subscription_router,
)
from storefront.checkout.assembly import build_engine
from storefront.checkout.engine import CheckoutEngine
from storefront.domain import storefront

storefront.init()


def create_app(engine: CheckoutEngine | None = None) -> FastAPI:
    """Build the API around a checkout engine (assembled from the environment by default)."""
    app = FastAPI(
        title="Storefront API",
        description="Single-line checkout: catalogue, quoting, commit and administration",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the storefront domain context for each request."""
        with storefront.domain_context():
            response = await call_next(request)
        return response

    register_exception_handlers(app)
    register_checkout_error_handlers(app)

    app.state.engine = engine or build_engine(storefront)

    app.include_router(catalogue_router)
    app.include_router(checkout_router)
    app.include_router(subscription_router)
    app.include_router(order_router)
    app.include_router(payments_router)
    app.include_router(admin_router)

    # -----------------------------------------------------------------------
    # Health / root
    # -----------------------------------------------------------------------
    @app.get("/health")
    async def health():
        return JSONResponse(
            content={
                "status": "ok",
                "domain": {"name": storefront.name},
            }
        )

    return app


app = create_app()
