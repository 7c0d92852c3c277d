"""
Academic Progression & Standing Engine API Server

Serves semester records (GPA, standing, finalization) and academic histories
(cumulative GPA, level progression, graduation, summary, transcript).
"""
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from standing_engine.api.error_handlers import register_error_handlers
from standing_engine.api.routes import academic_history, semester_records
from standing_engine.database import engine

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
SERVICE_NAME = "academic-standing-api"

# Comma-separated list; "*" allows any origin
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and release pooled database connections on shutdown"""
    logger.info(f"Starting {SERVICE_NAME} {API_VERSION}")

    yield

    await engine.dispose()
    logger.info(f"{SERVICE_NAME} stopped; database connections closed")


app = FastAPI(
    title="Academic Standing API",
    description="Semester GPA, academic standing, level progression and graduation tracking",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with its status and duration"""
    started = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - started) * 1000

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Duration: {duration_ms:.2f}ms"
    )
    return response


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness probe with service name and version"""
    return {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "version": API_VERSION,
        "service": SERVICE_NAME
    }


app.include_router(academic_history.router)
app.include_router(semester_records.router)


@app.get("/", tags=["Root"])
async def root():
    return {
        "name": "Academic Standing API",
        "version": API_VERSION,
        "docs": "/api/docs",
        "health": "/health",
        "resources": [academic_history.router.prefix, semester_records.router.prefix]
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("API_RELOAD", "false").lower() in ("1", "true", "yes"),
        log_level="info"
    )
