# Import necessary FastAPI components
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from datetime import datetime
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import httpx
import logging

# Import application routes and custom error handlers
from sanctions_search.routers import search_routes
from sanctions_search.utils.exception_handlers import (
    http_exception_handler,
    pydantic_validation_error_handler,
    search_validation_exception_handler,
    unhandled_exception_handler,
    upstream_exception_handler,
    validation_exception_handler
)
from sanctions_search.core.exceptions import UpstreamServiceError, ValidationError as SearchValidationError

# Import middleware
from sanctions_search.middleware.logging_middleware import LoggingMiddleware, RequestIDMiddleware

# Import configuration
from sanctions_search.core.config import settings

# Import collaborator clients
from sanctions_search.services.sanctions import AwsTranslator, MeilisearchClient

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Initialize application state
    app.state.settings = settings

    # Initialize HTTP client with timeouts
    http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(
            connect=5.0,    # connection timeout
            read=settings.meilisearch_timeout_seconds,
            write=10.0,     # write timeout
            pool=5.0        # pool timeout
        )
    )
    app.state.http_client = http_client

    # Long-lived collaborator clients shared by every request
    logger.info(f"Using Meilisearch at: {settings.meilisearch_api_url}")
    app.state.search_client = MeilisearchClient.from_settings(http_client, settings)
    app.state.translator = AwsTranslator.from_settings(settings)
    logger.info(
        f"Translating {settings.translate_source_language} -> {settings.translate_target_language} "
        f"via AWS Translate in {settings.aws_region}"
    )

    yield

    # Shutdown: Clean up resources
    await http_client.aclose()
    logger.info("HTTP client closed successfully")

# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Name search against the sanctions watch-list index",
    version=settings.app_version,
    debug=settings.debug,
    default_response_class=ORJSONResponse,
    lifespan=lifespan
)

# CORS Configuration
logger.info(f"Effective CORS Origins: {settings.cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=settings.cors_methods,
    allow_headers=settings.cors_headers,
)

# Add logging middleware
app.add_middleware(LoggingMiddleware)

# Add request ID middleware (outermost, so log entries carry the ID)
app.add_middleware(RequestIDMiddleware)

# Register custom exception handlers
# These ensure every error response is a {"message": ...} body
app.add_exception_handler(
    SearchValidationError,  # Handle rejected search requests
    search_validation_exception_handler
)
app.add_exception_handler(
    RequestValidationError,  # Handle malformed request bodies
    validation_exception_handler
)
app.add_exception_handler(
    ValidationError,  # Handle Pydantic validation errors
    pydantic_validation_error_handler
)
app.add_exception_handler(
    StarletteHTTPException,  # Handle general HTTP exceptions
    http_exception_handler
)
app.add_exception_handler(
    UpstreamServiceError,  # Handle translation and search engine failures
    upstream_exception_handler
)
app.add_exception_handler(
    Exception,  # Handle anything else
    unhandled_exception_handler
)


@app.get("/health", tags=["Health"])
async def health_check(request: Request):
    """Health check endpoint for monitoring system status

    Returns a status response indicating the API is operational and the status of its dependencies.
    """
    health_status = {
        "status": "healthy",
        "timestamp": str(datetime.now()),
        "version": settings.app_version,
        "dependencies": {
            "meilisearch": "unknown"
        }
    }

    search_client = getattr(request.app.state, "search_client", None)
    if search_client is None:
        health_status["dependencies"]["meilisearch"] = "not_configured"
    elif await search_client.health():
        health_status["dependencies"]["meilisearch"] = "healthy"
    else:
        health_status["dependencies"]["meilisearch"] = "unhealthy"

    # Update overall status if any dependency is unhealthy
    if any(status == "unhealthy" for status in health_status["dependencies"].values()):
        health_status["status"] = "unhealthy"

    return ORJSONResponse(content=health_status)

# Search routes
app.include_router(search_routes.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
