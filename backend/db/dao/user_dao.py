"""
用户数据访问对象
"""

from typing import Iterable, List, Optional, Set
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from backend.db.models.user import User
from backend.utils.id_generator import generate_user_id


class UserDAO:
    """用户 DAO"""

    @staticmethod
    async def get_by_username(session: AsyncSession, username: str) -> Optional[User]:
        """根据用户名获取用户"""
        result = await session.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    @staticmethod
    async def exists(session: AsyncSession, user_id: str) -> bool:
        """用户是否存在"""
        result = await session.execute(
            select(User.id).where(User.id == user_id)
        )
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def existing_ids(session: AsyncSession, user_ids: Iterable[str]) -> Set[str]:
        """
        一次查询返回给定 ID 中实际存在的用户 ID

        Args:
            session: 数据库会话
            user_ids: 用户ID列表

        Returns:
            存在的用户ID集合
        """
        ids = set(user_ids)
        if not ids:
            return set()

        result = await session.execute(
            select(User.id).where(User.id.in_(ids))
        )
        return set(result.scalars().all())

    @staticmethod
    async def list_all(session: AsyncSession) -> List[User]:
        """获取全部用户（按用户名升序）"""
        result = await session.execute(
            select(User).order_by(User.username.asc())
        )
        return list(result.scalars().all())

    @staticmethod
    async def upsert(
        session: AsyncSession,
        username: str,
        display_name: Optional[str] = None,
        user_id: Optional[str] = None
    ) -> User:
        """
        按用户名创建或更新用户（种子数据用）

        已存在时只更新显示名称，ID 保持不变

        Args:
            session: 数据库会话
            username: 用户名
            display_name: 显示名称
            user_id: 指定的用户ID（为空时自动生成 UUID）

        Returns:
            User: 用户对象
        """
        user = await UserDAO.get_by_username(session, username)
        if user:
            user.display_name = display_name
            await session.flush()
            return user

        user = User(
            id=user_id or generate_user_id(),
            username=username,
            display_name=display_name,
        )

        session.add(user)
        await session.flush()

        return user

    @staticmethod
    async def delete(session: AsyncSession, user_id: str) -> bool:
        """
        删除用户

        关注关系由外键 ON DELETE CASCADE 在数据库中级联删除

        Returns:
            是否删除了记录
        """
        result = await session.execute(
            delete(User).where(User.id == user_id)
        )
        return result.rowcount > 0
