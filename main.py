from contextlib import asynccontextmanager

from fastapi import FastAPI

from shortlink_app.config import settings
from shortlink_app.logging_config import setup_logging
from shortlink_app.api.v1 import links, redirect
from shortlink_app.telemetry.factory import TelemetryFactory

setup_logging(settings.log_level, json_format=settings.log_json)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Drain queued telemetry events before the process goes away
    TelemetryFactory.clear_instance()


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A short link service with click tracking",
    debug=settings.debug,
    lifespan=lifespan
)

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}




######## Include routers
app.include_router(links.router, prefix="/api/v1")
app.include_router(redirect.router)
