"""
Request pipeline shared by every /words, /categories and /config endpoint.

``Pipeline.wrap`` turns a plain handler ``(ApiRequest, Session) -> Response``
into a Starlette endpoint. Per request, in this order:

1. ``OPTIONS`` is answered with the CORS headers, handler untouched.
2. Destructive endpoints are refused with 403 while the flag is off,
   before any body read or database access.
3. The body of state-changing requests is read once and checked against the
   endpoint's size cap (413).
4. A database session is opened.
5. The handler runs in the threadpool with the request data and the session.
6. CORS headers are added to the handler's response.
7. Anything raised in 3, 4 or 5 becomes a 500 "Failed to <method> request".
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from fastapi import Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool
from starlette.responses import Response

from ..config import Settings
from .responses import (
    add_cors_headers,
    disabled_endpoint_response,
    payload_too_large_response,
    preflight_response,
    server_error_response,
)

logger = logging.getLogger(__name__)

BODY_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

DEFAULT_MAX_BODY_KB = {
    "POST": 100,
    "PUT": 100,
    "DELETE": 50,
}


@dataclass
class ApiRequest:
    method: str
    params: Mapping[str, str] = field(default_factory=dict)
    path_params: Dict[str, Any] = field(default_factory=dict)
    body: bytes = b""

    def json(self) -> Any:
        return json.loads(self.body or b"null")


@dataclass(frozen=True)
class EndpointOptions:
    method: str = "GET"
    destructive: bool = False
    max_body_kb: Optional[int] = None


Handler = Callable[[ApiRequest, Session], Response]


class SessionSource(Protocol):
    def session(self) -> Session: ...


class Pipeline:
    def __init__(self, settings: Settings, database: SessionSource):
        self.settings = settings
        self.database = database

    @property
    def destructive_enabled(self) -> bool:
        return self.settings.enable_destructive_endpoints

    def wrap(self, handler: Handler, options: EndpointOptions = EndpointOptions()):
        method = options.method.upper()
        error_message = f"Failed to {method.lower()} request"

        async def endpoint(request: Request) -> Response:
            if request.method == "OPTIONS":
                return preflight_response()

            if options.destructive and not self.destructive_enabled:
                logger.info("Rejected %s %s: destructive endpoints disabled", method, request.url.path)
                return disabled_endpoint_response(method)

            try:
                body = b""
                if request.method in BODY_METHODS:
                    body = await request.body()
                    if options.max_body_kb is not None and len(body) > options.max_body_kb * 1024:
                        logger.info(
                            "Rejected %s %s: body of %d bytes exceeds %dKB",
                            method,
                            request.url.path,
                            len(body),
                            options.max_body_kb,
                        )
                        return payload_too_large_response(options.max_body_kb)

                api_request = ApiRequest(
                    method=request.method,
                    params=dict(request.query_params),
                    path_params=dict(request.path_params),
                    body=body,
                )

                db = await run_in_threadpool(self.database.session)
                try:
                    response = await run_in_threadpool(handler, api_request, db)
                finally:
                    await run_in_threadpool(db.close)
            except Exception as exc:
                logger.exception("%s %s failed", method, request.url.path)
                return server_error_response(error_message, exc)

            return add_cors_headers(response)

        target = getattr(handler, "func", handler)  # unwrap functools.partial
        endpoint.__name__ = getattr(target, "__name__", "endpoint")
        endpoint.__doc__ = target.__doc__
        return endpoint

    def get(self, handler: Handler):
        return self.wrap(handler, EndpointOptions(method="GET"))

    def post(self, handler: Handler, max_body_kb: int = DEFAULT_MAX_BODY_KB["POST"]):
        return self.wrap(handler, EndpointOptions(method="POST", destructive=True, max_body_kb=max_body_kb))

    def put(self, handler: Handler, max_body_kb: int = DEFAULT_MAX_BODY_KB["PUT"]):
        return self.wrap(handler, EndpointOptions(method="PUT", destructive=True, max_body_kb=max_body_kb))

    def delete(self, handler: Handler, max_body_kb: int = DEFAULT_MAX_BODY_KB["DELETE"]):
        return self.wrap(handler, EndpointOptions(method="DELETE", destructive=True, max_body_kb=max_body_kb))
