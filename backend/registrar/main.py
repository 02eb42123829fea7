"""
Registrar API application.

Run with ``uvicorn registrar.main:app`` from the ``backend`` directory.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from registrar.core.config import settings
from registrar.core.database import DatabaseManager, SessionLocal, check_database_connection, engine, init_db
from registrar.core.errors import register_exception_handlers
from registrar.routers import api_router


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.PROJECT_NAME} API ({settings.ENVIRONMENT})")

    DatabaseManager.create_all_tables()
    with SessionLocal() as db:
        init_db(db)

    yield

    engine.dispose()
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.DESCRIPTION,
    version=settings.VERSION,
    lifespan=lifespan
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    client = request.client.host if request.client else "unknown"
    logger.info(f"{request.method} {request.url.path} - {client}")
    return await call_next(request)


if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["health"])
def health_check():
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "database": "connected" if check_database_connection() else "unavailable",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("registrar.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
