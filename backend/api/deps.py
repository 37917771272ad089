"""
API 依赖注入 - 数据库连接、服务实例等
"""

from typing import AsyncIterator
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from backend.db.base import get_db
from backend.services.follow_service import FollowService


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """
    获取数据库会话（依赖注入用）

    Yields:
        AsyncSession: 数据库会话
    """
    async for session in get_db():
        yield session


def get_follow_service(request: Request) -> FollowService:
    """获取应用启动时创建的关注服务实例"""
    return request.app.state.follow_service
