"""
FastAPI application entrypoint for the Call Notifier service.

- Primary: Expose create_app() factory for Uvicorn (--factory) in all environments.
- Convenience: Allow `python -m main` for local development runs, honoring $PORT.

Architecture:
- One stateless webhook: call-ended event in, one notification email out
- Resend as the transactional email provider
- No persistence, queueing or retries
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import Settings, get_settings
from services.email import ResendEmailClient
from utils.logging import RequestIdMiddleware, configure_logging

# Configure logging at import time
configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager for application lifespan events.

    Opens the email provider client on startup and closes it on shutdown.
    """
    settings: Settings = app.state.settings

    logger.info(
        "Starting Call Notifier",
        extra={
            "env": settings.app_env,
            "webhook_path": settings.webhook_path,
            "recipient": settings.recipient_email,
        },
    )

    app.state.email_client = ResendEmailClient.from_settings(settings)

    yield  # Application is running

    logger.info("Shutting down Call Notifier")
    await app.state.email_client.aclose()
    logger.info("Email client closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Application factory for FastAPI.

    Creates and configures the FastAPI application with:
    - The call-ended webhook route
    - Request ID tracking for observability
    - Health and info endpoints

    Args:
        settings: Settings to build the app from (defaults to get_settings())

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Call Notifier",
        description="Emails voice-agent call transcripts to a fixed recipient",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_dev else None,  # Disable in production
        redoc_url="/redoc" if settings.is_dev else None,
    )

    app.state.settings = settings
    # Routes resolve the same Settings the app was built from
    app.dependency_overrides[get_settings] = lambda: settings

    # --- Middleware ---

    # Request ID tracking (for correlation across logs)
    app.add_middleware(RequestIdMiddleware)

    # --- Routes ---

    from api.webhooks import router as webhooks_router

    app.include_router(webhooks_router, prefix=settings.webhook_path)

    # Health check endpoint
    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for load balancers and monitoring."""
        return {
            "status": "healthy",
            "env": settings.app_env,
        }

    # Root endpoint
    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API information."""
        return {
            "service": "Call Notifier",
            "version": "0.1.0",
            "webhook": settings.webhook_path,
            "docs": "/docs" if settings.is_dev else "disabled",
        }

    logger.info(
        "FastAPI application created",
        extra={
            "env": settings.app_env,
            "routes_count": len(app.routes),
        },
    )

    return app


if __name__ == "__main__":
    """
    Development server entry point.

    Run with: python main.py

    In production, use:
        uvicorn main:create_app --factory --host 0.0.0.0 --port 8000
    """
    import os

    import uvicorn

    settings = get_settings()
    port = int(os.getenv("PORT", "8000"))

    logger.info(f"Starting development server on port {port}")

    uvicorn.run(
        "main:create_app",
        factory=True,
        host="0.0.0.0",
        port=port,
        reload=settings.is_dev,  # Auto-reload in development
        log_level=settings.log_level.lower(),
    )
