"""
FastAPI application entry point for the Claim Router API.

Configures logging and CORS from settings and registers the routing, regions and
plans routers. The scoring core is stateless, so there is nothing to open or close
over the application lifespan.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from claimrouter import __version__
from claimrouter.api import api_router
from claimrouter.core.config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description=(
        "Routes claim leads to qualified service partners and allocates partner "
        "advertising budgets across regions."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

logger.info(f"{settings.app_name} {__version__} configured")


@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring and load balancer probes.

    Returns:
        Dict with status 'healthy'
    """
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "claimrouter.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
