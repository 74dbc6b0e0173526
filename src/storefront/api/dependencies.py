"""FastAPI dependencies shared by the Storefront routers."""

import hmac

from fastapi import Header, HTTPException, Request

from storefront.checkout.engine import CheckoutEngine


def get_engine(request: Request) -> CheckoutEngine:
    return request.app.state.engine


def require_admin_key(request: Request, x_admin_key: str | None = Header(default=None)) -> None:
    if not x_admin_key:
        raise HTTPException(status_code=401, detail="Admin key required")
    expected = request.app.state.engine.settings.admin_key
    if not hmac.compare_digest(x_admin_key.encode(), expected.encode()):
        raise HTTPException(status_code=403, detail="Invalid admin key")
