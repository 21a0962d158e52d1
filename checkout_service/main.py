"""
main.py — FastAPI Entry Point for the Checkout Service

This module provides the REST API of the storefront's payment backend.
It wires configuration, the payment gateway client and the document store
into the application and registers the payment and order-tracking routers.

Responsibilities:
    • Build the gateway client once and hand it to the handlers (no global singleton)
    • Connect to MongoDB on startup, release connections on shutdown
    • Render every error as `{success: false, message}`
    • Provide the public gateway key and system health information
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import payment_routes, tracking_routes
from .clients import RazorpayClient
from .config import Settings, load_settings
from .db import init_database
from .logging_config import setup_logging, get_logger

log = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, gateway: Optional[RazorpayClient] = None) -> FastAPI:
    """
    Builds the FastAPI application.

    Args:
        settings (Settings, optional): Configuration; read from the environment when omitted.
        gateway (RazorpayClient, optional): Gateway client; built from the settings when omitted.

    Returns:
        FastAPI: The configured application. The database is connected by the
        startup event, so callers that bypass the ASGI lifespan must initialize
        Beanie themselves.
    """
    settings = settings or load_settings()
    setup_logging(settings.log_level, settings.log_file)

    if gateway is None:
        gateway = RazorpayClient(settings.razorpay_key_id, settings.razorpay_key_secret,
                                 base_url=settings.razorpay_base_url)

    app = FastAPI(title="LoopXpress Checkout Service")
    app.state.settings = settings
    app.state.gateway = gateway
    app.state.mongo_client = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.on_event("startup")
    async def on_startup():
        log.info("Checkout service starting...")
        app.state.mongo_client = await init_database(settings)

    @app.on_event("shutdown")
    async def on_shutdown():
        await app.state.gateway.aclose()
        if app.state.mongo_client is not None:
            app.state.mongo_client.close()
        log.info("Checkout service stopped.")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        log.warning(f"Malformed request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Invalid request data"},
        )

    app.include_router(payment_routes.router)
    app.include_router(tracking_routes.router)

    @app.get("/api/getkey")
    def get_key():
        """Returns the public gateway key used by the browser checkout widget."""
        return {"key": settings.razorpay_key_id}

    @app.get("/health")
    def health_check():
        """
        Simple health check endpoint for monitoring systems and container orchestrators.
        """
        return {"status": "ok"}

    return app


app = create_app()
