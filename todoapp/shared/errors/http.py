# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from todoapp.shared.config import load_config
from todoapp.shared.logging import logger

from .base import AppError


def error_response(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def register_error_handler(
    app: Flask, *, default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
) -> None:
    """Render every failure as ``{"error": code, "context"?}``.

    Framework errors (404 for unknown routes, 405, ...) keep werkzeug's own
    response.
    """

    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        where = f"{request.method} {request.path}"
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(f"errors.app: {exc.code} on {where}")
        else:
            logger.info(f"errors.app: {exc.code} ({int(exc.status)}) on {where}")
        return error_response(exc)

    @app.errorhandler(HTTPException)
    def _on_http_error(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        where = f"{request.method} {request.path}"
        if verbose:
            logger.exception(f"errors.unhandled: {where} user_id={g.get('user_id')}")
        else:
            logger.error(f"errors.unhandled: {type(exc).__name__} on {where}")
        return jsonify({"error": "internal_error"}), default_status


__all__ = ["error_response", "register_error_handler"]
