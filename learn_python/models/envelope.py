from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Uniform wrapper around every JSON response body."""

    success: bool
    data: T | None = None
    error: str | None = None
    timestamp: str


def _now_rfc3339() -> str:
    return datetime.now(timezone.utc).isoformat()


def success(data: Any) -> ApiResponse[Any]:
    return ApiResponse[Any](success=True, data=data, error=None, timestamp=_now_rfc3339())


def failure(message: str) -> ApiResponse[None]:
    return ApiResponse[None](success=False, data=None, error=message, timestamp=_now_rfc3339())


def envelope_response(envelope: ApiResponse[Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.model_dump(mode="json"))
