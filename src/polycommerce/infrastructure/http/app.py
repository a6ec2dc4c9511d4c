"""FastAPI application for the sales channel endpoints.

Usage:
    polycommerce serve
    uvicorn polycommerce.infrastructure.http.app:create_app --factory
"""

from __future__ import annotations

import uuid

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from polycommerce.domain.exceptions import DomainException, ErrorKind
from polycommerce.infrastructure.bootstrap import Handlers, build_handlers
from polycommerce.infrastructure.config import Settings
from polycommerce.infrastructure.http.routes import router
from polycommerce.infrastructure.http.schemas import ErrorResponse
from polycommerce.infrastructure.logging import bind_request_context, clear_request_context


def create_app(handlers: Handlers | None = None, settings: Settings | None = None) -> FastAPI:
    app = FastAPI(
        title="PolyCommerce order ingestion",
        description="Imports sales channel orders and reports shipment status",
    )
    app.state.handlers = handlers or build_handlers(settings)

    @app.middleware("http")
    async def request_context_middleware(request: Request, call_next):
        clear_request_context()
        bind_request_context(
            request_id=uuid.uuid4().hex[:12],
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        if exc.kind is ErrorKind.UNAUTHORIZED:
            return Response(status_code=401)
        return JSONResponse(
            status_code=400, content=ErrorResponse(error=str(exc)).model_dump(by_alias=True)
        )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    app.include_router(router)
    return app
