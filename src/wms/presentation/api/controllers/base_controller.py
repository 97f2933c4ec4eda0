"""Uniform JSON envelope and status helpers shared by all controllers.

Every response body has the shape::

    {
        "success": bool,
        "data": ...,        # optional
        "message": str,     # optional
        "errors": [str],    # optional
        "meta": {"timestamp": iso8601, "correlation_id": str?, "pagination": {...}?}
    }

``success`` is true exactly for 2xx statuses.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Optional

from fastapi import HTTPException, Request, Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from wms.application.result import ErrorKind, Result
from wms.domain.shared import PaginationInfo, utc_now

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"

ERROR_KIND_TO_STATUS: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.BUSINESS_RULE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.INFRASTRUCTURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def build_envelope(
    status_code: int,
    data: Any = None,
    message: Optional[str] = None,
    errors: Optional[list[str]] = None,
    correlation_id: Optional[str] = None,
    pagination: Optional[PaginationInfo] = None,
) -> dict[str, Any]:
    meta: dict[str, Any] = {"timestamp": utc_now().isoformat()}
    if correlation_id:
        meta["correlation_id"] = correlation_id
    if pagination is not None:
        meta["pagination"] = pagination.to_dict()

    body: dict[str, Any] = {"success": 200 <= status_code < 300}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    if message is not None:
        body["message"] = message
    if errors:
        body["errors"] = errors
    body["meta"] = meta
    return body


def envelope_response(
    status_code: int,
    request: Optional[Request] = None,
    headers: Optional[dict[str, str]] = None,
    **kwargs: Any,
) -> JSONResponse:
    correlation_id = request.headers.get(CORRELATION_ID_HEADER) if request else None
    return JSONResponse(
        status_code=status_code,
        content=build_envelope(status_code, correlation_id=correlation_id, **kwargs),
        headers=headers,
    )


def classify_exception(exc: BaseException) -> tuple[int, str]:
    """Map an escaped exception to a status by searching its message.

    Order matters: a message containing both "not found" and "required"
    is a 404.
    """
    message = str(exc) or exc.__class__.__name__
    lowered = message.lower()
    if "not found" in lowered:
        return status.HTTP_404_NOT_FOUND, message
    if "unauthorized" in lowered or "not authenticated" in lowered:
        return status.HTTP_401_UNAUTHORIZED, message
    if "forbidden" in lowered:
        return status.HTTP_403_FORBIDDEN, message
    if "required" in lowered or "validation" in lowered:
        return status.HTTP_400_BAD_REQUEST, message
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred"


def async_handler(
    func: Callable[..., Awaitable[Response]],
) -> Callable[..., Awaitable[Response]]:
    """Funnel exceptions escaping a controller method into the envelope."""

    @functools.wraps(func)
    async def wrapper(self: BaseController, *args: Any, **kwargs: Any) -> Response:
        try:
            return await func(self, *args, **kwargs)
        except HTTPException:
            raise
        except Exception as e:
            status_code, message = classify_exception(e)
            if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
                logger.exception("Unhandled error in %s: %s", func.__qualname__, e)
            else:
                logger.warning("%s failed: %s", func.__qualname__, e)
            return self.respond(status_code, message=message, errors=[message])

    return wrapper


class BaseController:
    """Response helpers bound to the current request."""

    def __init__(self, request: Optional[Request] = None):
        self._request = request

    @property
    def correlation_id(self) -> Optional[str]:
        if self._request is None:
            return None
        return self._request.headers.get(CORRELATION_ID_HEADER)

    def respond(
        self,
        status_code: int,
        headers: Optional[dict[str, str]] = None,
        **kwargs: Any,
    ) -> JSONResponse:
        return envelope_response(status_code, self._request, headers=headers, **kwargs)

    # 2xx

    def ok(self, data: Any = None, message: Optional[str] = None) -> JSONResponse:
        return self.respond(status.HTTP_200_OK, data=data, message=message)

    def ok_paginated(
        self,
        data: Any,
        pagination: PaginationInfo,
        message: Optional[str] = None,
    ) -> JSONResponse:
        return self.respond(
            status.HTTP_200_OK,
            data=data,
            message=message,
            pagination=pagination,
        )

    def created(
        self,
        data: Any = None,
        message: str = "Resource created successfully",
    ) -> JSONResponse:
        return self.respond(status.HTTP_201_CREATED, data=data, message=message)

    def no_content(self) -> Response:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # 4xx / 5xx

    def _error(
        self,
        status_code: int,
        message: str,
        errors: Optional[list[str]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> JSONResponse:
        return self.respond(
            status_code,
            headers=headers,
            message=message,
            errors=errors if errors is not None else [message],
        )

    def bad_request(
        self,
        message: str = "Bad request",
        errors: Optional[list[str]] = None,
    ) -> JSONResponse:
        return self._error(status.HTTP_400_BAD_REQUEST, message, errors)

    def unauthorized(self, message: str = "Unauthorized") -> JSONResponse:
        return self._error(
            status.HTTP_401_UNAUTHORIZED,
            message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    def forbidden(self, message: str = "Forbidden") -> JSONResponse:
        return self._error(status.HTTP_403_FORBIDDEN, message)

    def not_found(self, message: str = "Resource not found") -> JSONResponse:
        return self._error(status.HTTP_404_NOT_FOUND, message)

    def conflict(self, message: str = "Resource conflict") -> JSONResponse:
        return self._error(status.HTTP_409_CONFLICT, message)

    def unprocessable_entity(
        self,
        message: str = "Validation failed",
        errors: Optional[list[str]] = None,
    ) -> JSONResponse:
        return self._error(status.HTTP_422_UNPROCESSABLE_ENTITY, message, errors)

    def too_many_requests(
        self,
        message: str = "Too many requests",
        retry_after: Optional[int] = None,
    ) -> JSONResponse:
        headers = {"Retry-After": str(retry_after)} if retry_after is not None else None
        return self._error(status.HTTP_429_TOO_MANY_REQUESTS, message, headers=headers)

    def internal_server_error(
        self,
        message: str = "Internal server error",
    ) -> JSONResponse:
        return self._error(status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    def failure(self, result: Result[Any]) -> JSONResponse:
        """Render a failed use-case result with the status of its error kind."""
        kind = result.error_kind or ErrorKind.VALIDATION
        message = result.error or "Request failed"
        status_code = ERROR_KIND_TO_STATUS[kind]
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Use case failed: %s", message)
        return self._error(status_code, message)
