"""FastAPI routes for the sales channel.

Request bodies are decoded by hand rather than by FastAPI so that the
store token is always checked first: an unknown token gets a 401 even if
the body is malformed, and a body that cannot be bound is handed to the
use case as "no submission", which rejects it with the usual message.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

import structlog
from fastapi import APIRouter, Header, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from polycommerce.domain.exceptions import ErrorKind, UnauthorizedError
from polycommerce.infrastructure.bootstrap import Handlers
from polycommerce.infrastructure.http.schemas import (
    CheckShippedOrdersRequest,
    ErrorResponse,
    IngestionErrorResponse,
    OrderIdResponse,
    OrderSubmissionSchema,
    ShippedOrderSchema,
    StoreCurrencyResponse,
)

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

router = APIRouter(prefix="/api/polycommerce/orders", tags=["orders"])


def _handlers(request: Request) -> Handlers:
    return request.app.state.handlers


async def _read_json(request: Request) -> Any:
    """Decoded JSON body, or None when the body is empty or not JSON."""
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        logger.warning("Request body is not JSON", path=request.url.path, error=str(exc))
        return None


def _bind(payload: Any, schema: type[ModelT], path: str) -> ModelT | None:
    if payload is None:
        return None
    try:
        return schema.model_validate(payload)
    except SchemaValidationError as exc:
        logger.warning(
            "Request body could not be bound",
            path=path,
            schema=schema.__name__,
            error=str(exc),
        )
        return None


@router.get("/get_store_currency", response_model=StoreCurrencyResponse)
def get_store_currency(
    request: Request,
    store_token: str | None = Header(default=None, alias="Store-Token"),
):
    try:
        dto = _handlers(request).get_store_currency.handle(store_token)
    except UnauthorizedError:
        return Response(status_code=401)
    except Exception as exc:
        logger.error("Error while fetching store currency", error=str(exc), exc_info=exc)
        return JSONResponse(
            status_code=400, content=ErrorResponse(error=str(exc)).model_dump(by_alias=True)
        )
    return StoreCurrencyResponse(currency_code=dto.currency_code).model_dump(by_alias=True)


@router.post("/add", response_model=OrderIdResponse)
async def add_order(
    request: Request,
    store_token: str | None = Header(default=None, alias="Store-Token"),
):
    payload = await _read_json(request)
    body = _bind(payload, OrderSubmissionSchema, request.url.path)
    submission = body.to_submission() if body is not None else None

    result = await run_in_threadpool(
        _handlers(request).ingest_order.handle, store_token, submission
    )

    if result.ok:
        return OrderIdResponse(order_id=result.order_id).model_dump(by_alias=True)
    if result.error_kind is ErrorKind.UNAUTHORIZED:
        return Response(status_code=401)
    content = IngestionErrorResponse.from_result(result).model_dump(by_alias=True, mode="json")
    if body is None and payload is not None:
        # Echo what was sent even when it could not be bound.
        content["Submission"] = payload
    return JSONResponse(status_code=400, content=content)


@router.post("/check_for_shipped_orders", response_model=list[ShippedOrderSchema])
async def check_for_shipped_orders(
    request: Request,
    store_token: str | None = Header(default=None, alias="Store-Token"),
):
    body = _bind(await _read_json(request), CheckShippedOrdersRequest, request.url.path)
    order_ids = body.order_ids if body is not None else None

    # Domain errors are turned into responses by the app-level handler.
    shipped = await run_in_threadpool(
        _handlers(request).check_shipped_orders.handle, store_token, order_ids
    )
    return [ShippedOrderSchema.from_dto(dto).model_dump(by_alias=True) for dto in shipped]
