"""
dependencies.py — Shared route-layer helpers

FastAPI dependencies for the objects built by the app factory, and the
translation of workflow errors into HTTP responses.
"""

import logging

from fastapi import HTTPException, Request

from .clients import RazorpayClient
from .config import Settings
from .exceptions import CheckoutServiceException

log = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> RazorpayClient:
    return request.app.state.gateway


def to_http_exception(error: Exception, settings: Settings, log_prefix: str = "") -> HTTPException:
    """
    Maps an error raised by a handler to the HTTPException returned to the caller.

    Domain errors keep their message and status. Anything else is logged with
    its traceback and becomes a 500; the raw error text is only exposed outside
    production.
    """
    if isinstance(error, CheckoutServiceException):
        if error.status_code >= 500:
            log.error(f"{log_prefix} {error!r}")
            return HTTPException(status_code=error.status_code, detail=_server_error_detail(error, settings))
        return HTTPException(status_code=error.status_code, detail=error.message)

    log.critical(f"{log_prefix} Unexpected error: {error}", exc_info=error)
    return HTTPException(status_code=500, detail=_server_error_detail(error, settings))


def _server_error_detail(error: Exception, settings: Settings) -> str:
    if settings.is_production:
        return "Internal Server Error"
    return f"Internal Server Error: {error}"
