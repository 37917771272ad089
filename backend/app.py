"""
FastAPI 应用入口
"""

import time
import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import settings
from backend.config.logging import setup_logging
from backend.api import api_v1_router
from backend.api.responses import error_body
from backend.db.base import init_db, close_db, create_tables, ping_db
from backend.models import ErrorCode, INTERNAL_ERROR_MESSAGE
from backend.services.follow_service import FollowService


async def check_and_init_database():
    """初始化连接池，并按配置创建缺失的表"""
    await init_db()
    logger.success("✅ Database connection pool initialized")

    if not settings.DATABASE_AUTO_CREATE:
        return

    try:
        await create_tables()
    except (SQLAlchemyError, OSError) as e:
        # 数据库暂不可达时照常启动，请求会返回 INTERNAL_ERROR，就绪检查返回 503
        logger.opt(exception=e).error(f"❌ Database initialization failed: {e}")
        logger.warning("⚠️  Application will start without a reachable database")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时执行
    setup_logging()
    logger.info(f"🚀 Starting {settings.APP_NAME}...")

    await check_and_init_database()

    # 无状态服务，只创建一次
    app.state.follow_service = FollowService()

    logger.success("🎉 Application started successfully!")

    yield

    # 关闭时执行
    logger.info("👋 Shutting down...")

    try:
        await close_db()
        logger.info("✅ Database connections closed")
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"❌ Database close failed: {e}")

    logger.success("✅ Application shutdown complete")


# 创建 FastAPI 应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """请求日志：METHOD path - status - 耗时"""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
    start = time.perf_counter()

    with logger.contextualize(request_id=request_id):
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        if settings.ACCESS_LOG:
            logger.info(f"{request.method} {request.url.path} - {response.status_code} - {duration_ms:.1f}ms")

    response.headers["X-Request-ID"] = request_id
    return response


# 注册 API 路由
app.include_router(api_v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/health")
async def health_check():
    """存活检查"""
    return {"status": "ok"}


@app.get("/health/ready")
async def readiness_check():
    """就绪检查（数据库可达）"""
    try:
        ready = await ping_db()
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"⚠️  Readiness check failed: {e}")
        ready = False

    if not ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "unhealthy"}
        )

    return {"status": "ok", "database": "healthy"}


# 参数校验失败统一返回 400 INVALID_INPUT
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid request")
    if field:
        message = f"{field}: {message}"

    logger.info(f"Validation error on {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, ErrorCode.INVALID_INPUT)
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """未知路由返回 {success, message}；其他 HTTP 错误（如 405）附带错误码"""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = error_body("Route not found")
    elif exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        body = error_body(INTERNAL_ERROR_MESSAGE, ErrorCode.INTERNAL_ERROR)
    else:
        body = error_body(str(exc.detail), ErrorCode.INVALID_INPUT)

    return JSONResponse(
        status_code=exc.status_code,
        content=body,
        headers=getattr(exc, "headers", None)
    )


# 全局异常处理
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """全局异常处理：完整异常写日志，对外只返回通用信息"""
    logger.opt(exception=exc).error(f"Unhandled exception on {request.url.path}: {type(exc).__name__}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(INTERNAL_ERROR_MESSAGE, ErrorCode.INTERNAL_ERROR)
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "backend.app:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
