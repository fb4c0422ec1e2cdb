"""
tripviz API: Application entry point.

Bootstraps FastAPI, wires up logging, rate limiting and CORS, and
registers the route groups. The service is stateless: no database, no
sessions, nothing to open or close in the lifespan beyond logging.

Run locally:
    uvicorn tripviz.main:app --reload --app-dir apps/backend
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from tripviz import __version__
from tripviz.core.config import settings
from tripviz.core.rate_limit import limiter
from tripviz.routes.health import router as health_router
from tripviz.routes.visualization import router as visualization_router

# ─── Logging ───────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ─── Lifespan ──────────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting tripviz API (env: %s)", settings.environment)
    yield
    logger.info("Shutting down tripviz API")


# ─── App ───────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="tripviz API",
    description=(
        "Turns aggregated taxi-trip snapshots into heatmap, hotspot, route "
        "and level-of-detail render plans for the trips map."
    ),
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
)


# ─── Rate limiting ─────────────────────────────────────────────────────────────
# Routes opt in with @limiter.limit(...) + a `request: Request` parameter.
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# ─── Middleware ─────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ─── Routes ────────────────────────────────────────────────────────────────────
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(visualization_router)


@app.get("/", tags=["root"])
async def root():
    """API root: basic metadata."""
    return {
        "name": "tripviz API",
        "version": __version__,
        "status": "running",
        "environment": settings.environment,
        "docs": "/docs",
    }
