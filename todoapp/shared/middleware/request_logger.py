# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-request access log lines tagged with a request id."""

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, Response, g, request

from todoapp.shared.config import load_config
from todoapp.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

_MASKED_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded.split(",")[0].strip() or request.remote_addr or "unknown"


def _fingerprint(value: str) -> str:
    return f"<sha256:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"


def _loggable_headers() -> dict[str, str]:
    return {
        name: _fingerprint(value) if name.lower() in _MASKED_HEADERS else value
        for name, value in request.headers.items()
    }


def configure_request_logging(app: Flask) -> None:
    verbose = load_config().debug_logging

    @app.before_request
    def _open_request() -> None:
        request_id = request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(8)
        set_correlation_id(request_id)
        g.started_at = time.perf_counter()

        if verbose:
            logger.debug(
                f"http.in: {request.method} {request.path} ip={_client_ip()} "
                f"args={request.args.to_dict()} headers={_loggable_headers()} "
                f"bytes={request.content_length or 0}"
            )
        else:
            logger.info(f"http.in: {request.method} {request.path} ip={_client_ip()}")

    @app.after_request
    def _close_request(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("started_at", time.perf_counter())) * 1000
        user_id = g.get("user_id")
        logger.info(
            f"http.out: {request.method} {request.path} status={response.status_code} "
            f"dt_ms={elapsed_ms:.1f}" + (f" user_id={user_id}" if user_id else "")
        )
        response.headers.setdefault(REQUEST_ID_HEADER, get_correlation_id())
        return response

    @app.teardown_request
    def _drop_request_id(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(f"http.error: {type(exc).__name__} on {request.method} {request.path}")
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
