"""
FastAPI 应用入口

    uvicorn pagebound.app:app --reload
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from pagebound.config import settings, setup_logging
from pagebound.api import api_v1_router
from pagebound.db import base
from pagebound.models import ErrorCode


def _error_body(status_code: int, message: str, error: dict) -> dict:
    return {"success": False, "code": status_code, "message": message, "error": error}


async def _database_status() -> str:
    if not settings.DATABASE_ENABLED:
        return "disabled"
    if base.async_engine is None:
        return "not_initialized"
    try:
        async with base.async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"⚠️  Database ping failed: {e}")
        return "unhealthy"
    return "healthy"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"🚀 Starting {settings.APP_NAME} {settings.APP_VERSION}...")

    if settings.DATABASE_ENABLED:
        await base.init_db()
        logger.success("✅ Database connection pool initialized")
        if settings.DATABASE_AUTO_CREATE:
            await base.create_tables()
            logger.success("✅ Database tables ready")
    else:
        logger.info("📦 Database disabled, API will answer 503 for content routes")

    logger.success("🎉 Application started successfully!")
    yield

    logger.info("👋 Shutting down...")
    await base.close_db()
    logger.success("✅ Application shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    return {"name": settings.APP_NAME, "version": settings.APP_VERSION, "status": "ok"}


@app.get("/health")
async def health_check():
    """健康检查（含数据库连通性）"""
    database = await _database_status()
    return {
        "status": "degraded" if database == "unhealthy" else "healthy",
        "version": settings.APP_VERSION,
        "services": {"database": database},
    }


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """查询失败：记录日志，返回可重试的 503，不做自动重试"""
    logger.error(f"❌ Query failed on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=503,
        content=_error_body(
            503,
            "Query failed, please retry",
            {"code": ErrorCode.QUERY_FAILED, "message": "加载失败，请稍后重试"},
        ),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"❌ Unhandled exception on {request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=500,
        content=_error_body(
            500,
            "Internal server error",
            {"type": type(exc).__name__, "message": str(exc)},
        ),
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pagebound.app:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
