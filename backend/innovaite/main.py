import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from . import __version__
from .constants import CORS_HEADERS, UNKNOWN_ERROR_MESSAGE
from .routes.ideas import router as ideas_router


# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):

    # Startup
    print("Starting InnovAIte idea gateway")
    print(f"   OpenAI Key:   {' Configured' if os.getenv('OPENAI_API_KEY') else ' Not set (generation will fail)'}")
    print(f"   OpenAI Model: {os.getenv('OPENAI_MODEL', 'gpt-5-mini-2025-08-07')}")
    print("   Ready to generate ideas!")

    yield

    print("Shutting down InnovAIte idea gateway")


app = FastAPI(
    title="InnovAIte: AI Project Idea Generator",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    """Answer every preflight directly and stamp CORS headers on all responses."""
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)

    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


app.include_router(ideas_router)


@app.get(
    "/",
    summary="API Root",
    description="Welcome endpoint with API information",
    tags=["General"]
)
async def root():
    """Root endpoint with API information."""
    return {
        "name": "InnovAIte",
        "version": __version__,
        "description": "From idea spark to execution plan, in seconds",
        "docs": "/docs",
        "endpoints": {
            "generate": "POST /generate-idea - Generate project ideas",
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
        "service": "innovaite-gateway",
        "version": __version__
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler for unhandled errors."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": str(exc) or UNKNOWN_ERROR_MESSAGE},
        headers=CORS_HEADERS,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "innovaite.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=os.getenv("DEBUG", "true").lower() == "true",
    )
