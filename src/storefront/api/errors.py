"""Map checkout failures onto HTTP responses.

Protean's own exceptions (ValidationError, ObjectNotFoundError, ...) are
handled by ``protean.integrations.fastapi.register_exception_handlers``;
this module covers the checkout taxonomy.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.checkout.errors import ERROR_STATUS_CODES, CheckoutError

logger = structlog.get_logger(__name__)


def status_code_for(exc: CheckoutError) -> int:
    for error_cls in type(exc).__mro__:
        if error_cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_cls]
    return 500


def register_checkout_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error("Checkout failed", path=request.url.path, error_type=type(exc).__name__)
        return JSONResponse(
            status_code=status_code,
            content={"error": str(exc), "error_type": type(exc).__name__},
        )
