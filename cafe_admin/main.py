"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
from fastapi.middleware.cors import CORSMiddleware

from cafe_admin.config import get_settings
from cafe_admin.db.database import init_db

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events.

    Args:
        app: FastAPI application instance.
    """
    # Startup
    init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    description="Menu administration and spreadsheet import/export for a cafe/bakery",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Import and include routers
from cafe_admin.imports.router import router as imports_router
from cafe_admin.menu.router import router as menu_router

# API routes
app.include_router(menu_router, prefix="/api/menu", tags=["menu"])
app.include_router(imports_router, prefix="/api/menu", tags=["imports"])


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok", "app": settings.app_name}
