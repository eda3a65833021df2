import logging
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import settings
from app.core.database import init_db
from app.core.deps import authenticate_jwt
from app.core.errors import register_exception_handlers
from app.core.logging_config import setup_logging
from app.api.endpoints import auth, companies, health, jobs, users

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up Jobly API...")
    init_db()
    logger.info("Database models registered")

    yield

    logger.info("Shutting down Jobly API...")


# Every request is authenticated (or left anonymous) before route-level checks run
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Job board API: companies, jobs, users and applications",
    lifespan=lifespan,
    dependencies=[Depends(authenticate_jwt)],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint - API health check"""
    return {
        "message": "Jobly API",
        "version": "1.0.0",
        "status": "healthy"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=3001,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
