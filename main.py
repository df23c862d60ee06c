from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from config.logging_config import setup_logging
from config.settings import get_settings, validate_env_variables
from core.errors import MarketplaceError, ValidationError
from db.session import create_tables
from middleware.logging import LoggingMiddleware
from middleware.rate_limit import RateLimitMiddleware
from utilities.response import error_response

# Import API routers
from api.users import router as users_router
from api.wallets import router as wallets_router
from api.contents import router as contents_router
from api.assets import router as assets_router
from api.collections import router as collections_router
from api.nfts import router as nfts_router
from api.external import router as external_router

logger = logging.getLogger(__name__)

settings = get_settings()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    setup_logging(settings)
    logger.info(f"Starting {settings.APP_NAME} ({settings.ENV})...")

    # Validate environment variables (non-fatal if missing optional ones)
    validate_env_variables(settings)

    # Create database tables
    create_tables()
    logger.info("Database tables created/verified")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Users, wallets, NFT collections, NFTs and their pinned media assets",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(RateLimitMiddleware, settings=settings)

# Business failures are reported in the envelope with HTTP 200
@app.exception_handler(MarketplaceError)
async def marketplace_exception_handler(request: Request, exc: MarketplaceError):
    """Handle typed application errors"""
    logger.warning(f"{request.method} {request.url.path} failed: {exc.to_message()}")
    return JSONResponse(status_code=200, content=error_response(exc.to_message()))

@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed request bodies and parameters"""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    message = ValidationError(details).to_message()
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=200, content=error_response(message))

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(
            message=exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        )
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=error_response(
            message="Internal server error"
        )
    )

# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": f"{settings.APP_NAME} is running"}

# Root endpoint
@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "redoc": "/redoc"
    }

# Include routers
app.include_router(users_router)
app.include_router(wallets_router)
app.include_router(contents_router)
app.include_router(assets_router)
app.include_router(collections_router)
app.include_router(nfts_router)
app.include_router(external_router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
