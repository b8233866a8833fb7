"""
FastAPI application entry point for the careers page builder.

This is the main app that:
- Initializes FastAPI with CORS
- Registers all API routers
- Provides health check endpoint
- Sets up database connection lifecycle
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careerpage.config import settings
from careerpage.database import close_db
# Import API routers
from careerpage.api import admin, auth, companies, jobs, public

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    On startup: Database connection is already handled by engine
    On shutdown: Close database connections gracefully
    """
    # Startup
    logger.info("🚀 Starting Careers Page API...")
    if settings.database_url:
        logger.info(f"📊 Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else 'configured'}")
    else:
        logger.warning("📊 Database: not configured, serving sample data")
    logger.info(f"🔧 Debug mode: {settings.debug}")

    yield

    # Shutdown
    logger.info("👋 Shutting down Careers Page API...")
    await close_db()


# Initialize FastAPI app
app = FastAPI(
    title="Careers Page API",
    description="API for building and serving company careers pages",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS
# Set ALLOWED_ORIGINS environment variable with comma-separated domains
allowed_origins = [settings.get_frontend_url()]

if settings.allowed_origins:
    allowed_origins.extend(origin.strip() for origin in settings.allowed_origins.split(','))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return {
        "status": "healthy",
        "service": "Careers Page API",
        "version": "1.0.0",
        "database": "configured" if settings.database_url else "sample-data",
    }


# Root endpoint
@app.get("/")
async def root():
    """API root with basic info."""
    return {
        "message": "Careers Page API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "admin": "/admin/auth",
    }


# Register API routers
# Admin and API prefixes first: the public routes match any /{company-slug}/...
app.include_router(auth.router, prefix="/admin/auth", tags=["auth"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])
app.include_router(companies.router, prefix="/api/companies", tags=["companies"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(public.router, tags=["public"])
