"""
FastAPI application entry point.

Assembles the FastAPI app with the pricing and vehicle routers.
"""

import logging
import sys

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.pricing.pricing_api import router as pricing_router
from backend.shared.logging.config import setup_logging
from backend.vehicles.vehicles_api import router as vehicles_router


# ============================================================================
# Logging configuration (single source of truth for all routers)
# ============================================================================
LOG_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)-35s | %(message)s"
)

logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True,  # Override any prior basicConfig calls
)

# Quiet noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("pymongo").setLevel(logging.WARNING)

# Refresh summaries are emitted as JSON lines on their own logger
setup_logging(level=logging.INFO)


# Create FastAPI app
app = FastAPI(
    title="Travel Planner Pricing",
    description="Live price refresh for AI-generated Sri Lanka itineraries",
    version="0.1.0",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(pricing_router)
app.include_router(vehicles_router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Travel Planner Pricing",
        "version": "0.1.0",
        "services": {
            "pricing": {
                "status": "active",
                "endpoints": "/api/plans",
            },
            "vehicles": {
                "status": "active",
                "endpoints": "/api/vehicles",
            },
        },
    }


@app.get("/health")
async def health():
    """Global health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
