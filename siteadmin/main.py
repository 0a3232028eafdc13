"""FastAPI main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from siteadmin.core.config import settings
from siteadmin.core.middleware import setup_middleware
from siteadmin.core.rate_limiter import limiter
from siteadmin.core.exceptions import SiteAdminError
from siteadmin.db.session import init_db

from siteadmin.api.auth import router as auth_router
from siteadmin.api.login_logs import router as login_logs_router

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("siteadmin")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting %s API", settings.APP_NAME)
    init_db()
    yield
    logger.info("Shutting down %s API", settings.APP_NAME)


app = FastAPI(
    title="Site Admin API",
    description="Multi-site admin backend: login log management",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Middleware
setup_middleware(app)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(SiteAdminError)
async def site_admin_exception_handler(request: Request, exc: SiteAdminError):
    """Business errors become ``{"code", "message"}`` with the matching HTTP status."""
    status_code = exc.code if 400 <= exc.code < 600 else 400
    return JSONResponse(
        status_code=status_code,
        content={"code": exc.code, "message": exc.message},
    )


# Register routers
app.include_router(auth_router, prefix="/api")
app.include_router(login_logs_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/api/health")
async def health():
    """Quick health check endpoint."""
    return {"status": "ok"}
