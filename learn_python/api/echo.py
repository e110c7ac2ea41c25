from __future__ import annotations

import json
import math
from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from learn_python.models.envelope import ApiResponse, envelope_response, failure, success

router = APIRouter(tags=["utility"])

logger = structlog.get_logger(__name__)


class InvalidBodyError(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise InvalidBodyError(f"Invalid JSON body: {name} is not allowed")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise InvalidBodyError(f"Invalid JSON body: number {text} is out of range")
    return value


def parse_json_body(raw: bytes) -> Any:
    """Decode a request body as JSON; any standard JSON value is accepted."""

    if not raw.strip():
        raise InvalidBodyError("Request body is empty; expected JSON")
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidBodyError("Request body is not valid UTF-8") from exc
    try:
        return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except InvalidBodyError:
        raise
    except json.JSONDecodeError as exc:
        raise InvalidBodyError(f"Invalid JSON body: {exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    except RecursionError as exc:
        raise InvalidBodyError("Invalid JSON body: nesting too deep") from exc
    except ValueError as exc:
        # e.g. integers longer than the interpreter's digit limit
        raise InvalidBodyError(f"Invalid JSON body: {exc}") from exc


@router.post(
    "/echo",
    response_model=ApiResponse[Any],
    responses={400: {"model": ApiResponse[None], "description": "Invalid request body"}},
)
async def echo(request: Request) -> JSONResponse:
    raw = await request.body()
    try:
        payload = parse_json_body(raw)
    except InvalidBodyError as exc:
        logger.info("echo_rejected", reason=str(exc), body_bytes=len(raw))
        return envelope_response(failure(str(exc)), status_code=400)
    return envelope_response(success(payload))
