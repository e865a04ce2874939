from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi.responses import JSONResponse
from starlette.responses import Response

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Origin, X-Requested-With, Content-Type, Accept, Authorization",
    "Access-Control-Max-Age": "86400",  # 24 hours
}

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=(), interest-cohort=()",
}

DISABLED_MESSAGE = (
    "This endpoint is disabled to protect the production database. "
    "To enable it locally, set ENABLE_DESTRUCTIVE_ENDPOINTS=true in your .env file."
)
DISABLED_DOCUMENTATION = "See README.md for setup instructions to run locally with full functionality."


def add_cors_headers(response: Response) -> Response:
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    return response


def json_response(
    content: Any,
    status_code: int = 200,
    cache_seconds: Optional[int] = None,
) -> JSONResponse:
    response = JSONResponse(content=content, status_code=status_code)
    if cache_seconds:
        response.headers["Cache-Control"] = f"public, max-age={cache_seconds}, s-maxage={cache_seconds}"
    return response


def error_response(error: str, status_code: int, **extra: Any) -> JSONResponse:
    return add_cors_headers(json_response({"error": error, **extra}, status_code=status_code))


def preflight_response() -> Response:
    return add_cors_headers(Response(status_code=200))


def disabled_endpoint_response(method: str) -> JSONResponse:
    return error_response(
        f"{method.upper()} endpoint is disabled in production",
        403,
        message=DISABLED_MESSAGE,
        documentation=DISABLED_DOCUMENTATION,
    )


def payload_too_large_response(max_body_kb: int) -> JSONResponse:
    return error_response(f"Request body too large. Maximum size is {max_body_kb}KB", 413)


def server_error_response(message: str, exc: BaseException) -> JSONResponse:
    return error_response(message, 500, details=str(exc) or type(exc).__name__)
