from contextlib import asynccontextmanager
from fastapi import FastAPI
from app.api.routes import router
from app.core.cors import setup_cors
from app.core.errors import register_error_handlers
from app.core.logging import setup_logging, get_logger
from app.db.database import init_database

# Setup logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup/shutdown."""
    # Startup
    logger.info("Starting Swarm Priority API...")
    init_database()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down Swarm Priority API...")


# Create FastAPI app
app = FastAPI(
    title="Swarm Priority API",
    description="Feedback intake with swarm consensus scoring and priority ranking",
    version="1.0.0",
    lifespan=lifespan
)

# Setup CORS
setup_cors(app)

# Map domain errors to JSON responses
register_error_handlers(app)

# Include API routes
app.include_router(router)


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "Swarm Priority API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health"
    }
