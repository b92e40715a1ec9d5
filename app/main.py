# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Activity Admin API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import ActivityAdminException, activity_admin_exception_handler
from app.routers import activities, dashboard, drafts, health, taxonomy
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and shutdown. The Supabase client is created on first use."""
    logger.info(f"Starting Activity Admin API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Attachments bucket: {settings.ASSETS_BUCKET}")

    yield

    logger.info("Shutting down Activity Admin API")


# Create FastAPI application
app = FastAPI(
    title="Activity Admin API",
    description="""
## Admin Dashboard API for Learning Activities

Administrators create learning activities (HTML content plus optional
corrections) filed under a category and a level, attach PDFs or images, and
browse what has already been published.

### How It Works

1. **Open a Draft** - Loads the category and level options
2. **Fill the Form** - Title, description, HTML content, category, level
3. **Stage Attachments** - PDFs and images only, uploaded on submit
4. **Submit** - The activity is created, files are uploaded one after the
   other and their asset records are written in one batch
5. **Browse** - The activity list shows each activity with its attachment count

Progress for each file is pushed over the `/ws/activities` websocket.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Verify JWT tokens and administrator status",
        },
        {
            "name": "Dashboard",
            "description": "Overview counts for the dashboard home page",
        },
        {
            "name": "Taxonomy",
            "description": "Category and level options for the activity form",
        },
        {
            "name": "Activities",
            "description": "List activities and create them in one request",
        },
        {
            "name": "Drafts",
            "description": "Server-side new-activity forms with staged attachments",
        },
        {
            "name": "WebSocket",
            "description": "Real-time upload progress",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(ActivityAdminException)
async def handle_activity_admin_exception(request: Request, exc: ActivityAdminException):
    """Handle custom Activity Admin exceptions."""
    return await activity_admin_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/v1/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api/v1",
    tags=["Health"]
)

# Dashboard overview
app.include_router(
    dashboard.router,
    prefix="/api/v1",
    tags=["Dashboard"]
)

# Category and level options
app.include_router(
    taxonomy.router,
    prefix="/api/v1",
    tags=["Taxonomy"]
)

# Activity listing and one-shot creation
app.include_router(
    activities.router,
    prefix="/api/v1/activities",
    tags=["Activities"]
)

# Draft forms (staged attachments, progress, submit)
app.include_router(
    drafts.router,
    prefix="/api/v1/activities",
    tags=["Drafts"]
)

# WebSocket endpoints (Real-time updates)
app.include_router(
    websocket_routes.router,
    tags=["WebSocket"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Activity Admin API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
