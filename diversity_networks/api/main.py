"""
Diversity Citation Networks API

FastAPI application exposing network builds over the publication table.

Run:
    uvicorn diversity_networks.api.main:app --port 8000
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from diversity_networks import __version__
from diversity_networks.api.routers import health, network
from diversity_networks.config import Settings

settings = Settings.from_env()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Diversity Citation Networks API",
    description="Co-occurrence networks and itemset rankings of classification codes",
    version=__version__,
)

# The rendering layer is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(network.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
