"""
数据库基础配置

包含 Base 类、数据库引擎初始化等
"""

from typing import Optional

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from backend.config.settings import settings

# 声明式基类
Base = declarative_base()

# 异步引擎（用于 asyncpg）
async_engine: Optional[AsyncEngine] = None
AsyncSessionLocal: Optional[async_sessionmaker] = None


def get_database_url(async_mode: bool = True) -> str:
    """
    获取数据库连接 URL

    Args:
        async_mode: 是否使用异步模式

    Returns:
        数据库连接 URL
    """
    if not settings.DATABASE_URL:
        raise RuntimeError("DATABASE_URL is not set")

    url = settings.DATABASE_URL

    # 异步模式：postgresql:// -> postgresql+asyncpg://
    if async_mode and url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)

    return url


def build_engine(url: Optional[str] = None, **overrides) -> AsyncEngine:
    """
    按配置创建异步引擎

    超时交给驱动处理：连接池等待 pool_timeout，单条语句 command_timeout
    """
    url = url or get_database_url(async_mode=True)
    options = {"echo": settings.DEBUG, "pool_pre_ping": True}

    if url.startswith("postgresql+asyncpg://"):
        options.update(
            pool_size=settings.DATABASE_POOL_SIZE,
            max_overflow=settings.DATABASE_MAX_OVERFLOW,
            pool_timeout=settings.DATABASE_POOL_TIMEOUT,
            connect_args={
                "timeout": settings.DATABASE_COMMAND_TIMEOUT,
                "command_timeout": settings.DATABASE_COMMAND_TIMEOUT,
                "server_settings": {"application_name": settings.APP_NAME},
            },
        )

    options.update(overrides)
    return create_async_engine(url, **options)


async def init_db(engine: Optional[AsyncEngine] = None):
    """
    初始化数据库连接

    创建异步引擎和会话工厂
    """
    global async_engine, AsyncSessionLocal

    async_engine = engine or build_engine()

    # 创建异步会话工厂
    AsyncSessionLocal = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables():
    """创建所有表（已存在的表会跳过）"""
    if not async_engine:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    # 导入模型以确保 Base 知道所有表
    from backend.db import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database tables ensured")


async def ping_db() -> bool:
    """检查数据库是否可达"""
    if not async_engine:
        return False

    async with async_engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def close_db():
    """关闭数据库连接"""
    global async_engine, AsyncSessionLocal

    if async_engine:
        await async_engine.dispose()
        async_engine = None
        AsyncSessionLocal = None


async def get_db():
    """
    获取数据库会话（依赖注入用）

    Yields:
        AsyncSession: 数据库会话
    """
    if not AsyncSessionLocal:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
