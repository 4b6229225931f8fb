import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .constants import TAXONOMY_VERSION
from .routes.founders import router as founders_router
from .routes.interviews import router as interviews_router
from .routes.nexus import router as nexus_router
from .services.nexus_client import close_client
from .services.nexus_sync import sync_new_interviews_to_nexus


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    print("Starting ZAR Survey Insights API")
    config.log_config_status()
    print(f"   Taxonomy:      v{TAXONOMY_VERSION}")

    if config.NEXUS_SYNC_ON_STARTUP and config.nexus_configured():
        print("   Starting Nexus sync...")
        try:
            result = await sync_new_interviews_to_nexus()
            print(f"   Nexus sync: {len(result.synced)} new, {len(result.skipped)} existing")
        except FileNotFoundError as exc:
            logger.error("[SYNC] Survey table missing, sync skipped: %s", exc)

    print("   Ready to serve founder insights!")

    yield

    await close_client()
    print("Shutting down ZAR Survey Insights API")


app = FastAPI(
    title="ZAR Retail Survey Insights",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(founders_router)
app.include_router(interviews_router)
app.include_router(nexus_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "ZAR Survey Insights",
        "version": "0.1.0",
        "taxonomy_version": TAXONOMY_VERSION,
        "description": "Founder insights over the ZAR retail merchant interviews",
        "docs": "/docs",
        "endpoints": {
            "dashboard": "GET /founders/dashboard - Founder dashboard aggregate",
            "overview": "GET /founders/overview - Dashboard plus validation framework",
            "interviews": "GET /interviews - Searchable interview directory",
            "nexus": "POST /nexus - Send interviews to Nexus",
            "health": "GET /health - Service health check"
        }
    }


@app.get(
    "/health",
    summary="Global Health Check",
    description="Check if the API server is running",
    tags=["General"]
)
async def health():
    """Global health check endpoint."""
    return {
        "status": "healthy",
        "service": "zar-survey-insights",
        "version": "0.1.0"
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception("[API] Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "error": "Internal server error",
            "detail": str(exc) if config.DEBUG else "An unexpected error occurred"
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "zar_insights.main:app",
        host=config.HOST,
        port=config.PORT,
        reload=config.DEBUG,
    )
