"""
Relay endpoint.

Forwards a request to the URL given in the ``target`` query parameter and
returns the target's body and status with permissive CORS headers, so the
dashboard can call the data endpoints from the browser.
"""

import logging
import time

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response

from api.dependencies import get_upstream_client
from api.logging import RequestLog, log_request
from api.models.responses import ErrorMessages, ErrorResponse
from core.config import (
    RELAY_ALLOWED_HEADERS,
    RELAY_ALLOWED_METHODS,
    RELAY_DEFAULT_CONTENT_TYPE,
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": RELAY_ALLOWED_METHODS,
    "Access-Control-Allow-Headers": RELAY_ALLOWED_HEADERS,
}

BODYLESS_METHODS = {"GET", "HEAD"}

logger = logging.getLogger(__name__)

router = APIRouter()


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
        headers=CORS_HEADERS,
    )


def build_forward_url(target: str, query_params) -> httpx.URL:
    """
    Parse the target and copy every other incoming query param onto it.

    Raises:
        ValueError: if target is not an absolute http(s) URL
    """
    try:
        target_url = httpx.URL(target)
    except httpx.InvalidURL as e:
        raise ValueError(str(e))
    if target_url.scheme not in ("http", "https") or not target_url.host:
        raise ValueError(target)

    passthrough = {k: v for k, v in query_params.items() if k != "target"}
    if passthrough:
        target_url = target_url.copy_merge_params(passthrough)
    return target_url


@router.api_route("/", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"])
async def relay(
    request: Request,
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    """Forward the request to ``target`` and mirror the response."""
    # Preflight short-circuits before the target is looked at
    if request.method == "OPTIONS":
        return Response(status_code=status.HTTP_204_NO_CONTENT, headers=CORS_HEADERS)

    start_time = time.time()
    request_log = RequestLog(
        endpoint="/",
        method=request.method,
        client_ip=get_client_ip(request),
    )

    try:
        target = request.query_params.get("target")
        if not target:
            request_log.status_code = status.HTTP_400_BAD_REQUEST
            request_log.error_message = ErrorMessages.MISSING_TARGET
            return error_response(status.HTTP_400_BAD_REQUEST, ErrorMessages.MISSING_TARGET)

        try:
            target_url = build_forward_url(target, request.query_params)
        except ValueError:
            request_log.status_code = status.HTTP_400_BAD_REQUEST
            request_log.error_message = ErrorMessages.INVALID_TARGET
            return error_response(status.HTTP_400_BAD_REQUEST, ErrorMessages.INVALID_TARGET)
        request_log.target_host = target_url.host

        headers = {
            "Content-Type": request.headers.get("Content-Type") or RELAY_DEFAULT_CONTENT_TYPE
        }
        body = None
        if request.method not in BODYLESS_METHODS:
            body = await request.body()

        upstream = await client.request(
            request.method, target_url, content=body, headers=headers
        )

        request_log.status_code = upstream.status_code
        request_log.response_size_bytes = len(upstream.content)
        return Response(
            content=upstream.content,
            status_code=upstream.status_code,
            headers=CORS_HEADERS,
            media_type=upstream.headers.get("Content-Type"),
        )

    except Exception as e:
        request_log.status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        request_log.error_message = str(e) or type(e).__name__
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, request_log.error_message)

    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        try:
            log_request(request_log)
        except Exception as e:
            # Don't fail the request if logging fails
            logger.warning(f"Request log write failed: {e}")
