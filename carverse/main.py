"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from carverse.adapters.inbound.http.error_handlers import register_error_handlers
from carverse.adapters.inbound.http.routes import router
from carverse.infrastructure.db import dispose_engine
from carverse.infrastructure.wiring.dependencies import get_seed_coordinator

# Load environment variables from .env file
load_dotenv()


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_seed_coordinator().shutdown()
    dispose_engine()


app = FastAPI(
    title="CarVerse Catalog API",
    description="Car catalog browsing, search and comparison",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def seed_gate(request: Request, call_next):
    """Start the one-time catalog seed on the first request; never waits for it."""
    get_seed_coordinator().try_start_seed()
    return await call_next(request)


register_error_handlers(app)
app.include_router(router)
