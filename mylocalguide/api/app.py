"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mylocalguide.api.deps import engine
from mylocalguide.api.routes import neighborhoods, venues
from mylocalguide.config import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Serving %s venue directory", settings.city_location)
    yield
    await engine.dispose()


app = FastAPI(
    title="MyLocalGuide",
    description="Neighborhood resolution and venue directory backend",
    version="0.1.0",
    lifespan=lifespan,
)

# The directory frontend is served from a separate origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

for router in (neighborhoods.router, venues.router):
    app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
