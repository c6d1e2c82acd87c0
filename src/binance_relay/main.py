"""Main entry point for the Binance relay application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from binance_relay import __version__
from binance_relay.api.routes import router
from binance_relay.core.config import Settings, get_settings
from binance_relay.core.exceptions import InvalidRequestBodyError, RelayError
from binance_relay.core.logging import setup_logging
from binance_relay.core.middleware import REQUEST_ID_HEADER, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management
    Handles startup and shutdown procedures
    """
    settings = app.state.settings
    logger.info(f"Binance Proxy Server running on port {settings.PORT}")
    logger.info(
        "Relay configuration",
        extra={
            "host": settings.HOST,
            "port": settings.PORT,
            "debug": settings.DEBUG,
            "log_level": settings.LOG_LEVEL,
            "upstream_base_url": settings.UPSTREAM_BASE_URL,
            "upstream_timeout": settings.UPSTREAM_TIMEOUT,
            "cors_origins": settings.cors_origins
        }
    )

    yield

    logger.info("Shutting down Binance Proxy Server...")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed relay bodies get the relay's own 400 envelope"""
    logger.warning(
        "Request validation failed",
        extra={
            "url": request.url.path,
            "method": request.method,
            "errors": exc.errors()
        }
    )

    error = InvalidRequestBodyError()
    return JSONResponse(status_code=error.get_http_status_code(), content=error.to_dict())


async def general_exception_handler(request: Request, exc: Exception):
    """General exception handler for unhandled errors"""
    logger.error(
        "Unhandled exception",
        extra={
            "url": request.url.path,
            "method": request.method,
            "error": str(exc)
        },
        exc_info=True
    )

    error = RelayError(str(exc))
    return JSONResponse(status_code=error.get_http_status_code(), content=error.to_dict())


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Binance Proxy Server",
        description="Signing relay keeping Binance secret keys off the browser",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Health check and server status"
            },
            {
                "name": "proxy",
                "description": "Signed request relaying to Binance"
            }
        ]
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER]
    )

    # Add custom exception handlers
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(router)

    return app


# Create app instance for uvicorn to find
app = create_app()


def main() -> None:
    """Main entry point for the application."""
    settings = get_settings()
    setup_logging(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        access_log=False,
        server_header=False,  # Don't reveal server info
        date_header=True,
    )


if __name__ == "__main__":
    main()
