"""FastAPI application factory with role-based route mounting."""

import os
from typing import Literal

from fastapi import FastAPI, Request, Response

from tripmate.observability.correlation import CORRELATION_ID_HEADER, correlation_scope

from .routers import admin, public

AppRole = Literal["public", "admin"]


def create_app(role: AppRole | None = None) -> FastAPI:
    """Create the FastAPI app.

    Args:
        role: Explicit role override. If None, reads APP_ROLE, defaulting
              to "admin". The "public" role serves only health and the
              public site forms.
    """
    if role is None:
        role = os.environ.get("APP_ROLE", "admin")  # type: ignore[assignment]

    app = FastAPI(
        title="TripMate Admin API",
        docs_url=None,
        redoc_url=None,
    )

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            return response

    app.include_router(public.router)

    if role == "admin":
        app.include_router(admin.router)

    return app
