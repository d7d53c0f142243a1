"""
HealthPulse — FastAPI Application

Головний файл FastAPI додатку.

Запуск:
    DATA_DIR=./data uvicorn health_pulse.api.app:app --host 0.0.0.0 --port 8000

    або:

    python scripts/run_api.py
"""

from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from health_pulse import __version__
from health_pulse.errors import HealthPulseError

from .config import config
from .dependencies import models_manager
from .models import ErrorResponse
from .routes import (
    health_router,
    model_router,
    sessions_router,
)


logger = logging.getLogger("health_pulse.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifecycle manager: побудова моделі при старті.
    """
    print("=" * 60)
    print("🏥 HealthPulse API Starting...")
    print("=" * 60)

    success = models_manager.load()

    if success:
        print("✅ API ready!")
    else:
        print(f"⚠️ API starting in degraded mode: {models_manager.error}")

    print("=" * 60)
    print(f"📍 Swagger UI: http://{config.host}:{config.port}/docs")
    print(f"📍 ReDoc: http://{config.host}:{config.port}/redoc")
    print("=" * 60)

    yield

    print("🛑 HealthPulse API Stopping...")


app = FastAPI(
    title=config.api_title,
    description=config.api_description,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=config.cors_allow_credentials,
    allow_methods=config.cors_allow_methods,
    allow_headers=config.cors_allow_headers,
)


# Middleware для логування запитів
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = time.time() - start_time

    # Логуємо тільки API запити
    if request.url.path.startswith(config.api_prefix):
        logger.info(
            "%s %s → %d (%.1fms)",
            request.method, request.url.path, response.status_code, process_time * 1000
        )

    return response


@app.exception_handler(HealthPulseError)
async def health_pulse_exception_handler(request: Request, exc: HealthPulseError):
    logger.warning("Unhandled domain error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump()
    )


# Глобальний обробник помилок
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            detail=str(exc) if config.debug else None
        ).model_dump()
    )


# Підключаємо роутери
app.include_router(health_router)
app.include_router(model_router, prefix=config.api_prefix)
app.include_router(sessions_router, prefix=config.api_prefix)
