#!/usr/bin/env python3
"""
DemobScout API - FastAPI Application

Stores demob profiles, matches them against open project positions and
reports on the redeployment pipeline.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import FastAPI

from core.config_loader import get_config
from .exceptions import register_exception_handlers
from .models.responses import HealthResponse
from .routers import (
    profiles_router,
    matching_router,
    analytics_router,
    export_router,
    permissions_router,
    projects_router
)
from .routers.matching import add_rate_limit_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Load configuration
config = get_config()

# Create FastAPI app
app = FastAPI(
    title="DemobScout API",
    description="API for matching demobilizing employees to open positions",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

add_rate_limit_handlers(app)
register_exception_handlers(app)

# Include routers
app.include_router(profiles_router)
app.include_router(matching_router)
app.include_router(analytics_router)
app.include_router(export_router)
app.include_router(permissions_router)
app.include_router(projects_router)


@app.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", service="demobscout-api")


def main():
    """Run the web server."""
    import uvicorn

    from database.database import init_db
    init_db()

    logger.info(f"Starting DemobScout API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
