"""
关注关系数据访问对象
"""

from typing import List, Tuple
from sqlalchemy import select, delete, and_, func
from sqlalchemy.ext.asyncio import AsyncSession

from backend.db.models.follow import UserFollow
from backend.db.models.user import User


class FollowDAO:
    """关注关系 DAO"""

    @staticmethod
    async def create(
        session: AsyncSession,
        follower_id: str,
        followee_id: str
    ) -> UserFollow:
        """
        创建关注关系

        唯一约束/外键/自关注检查都由数据库负责，违反时 flush 抛出 IntegrityError

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            followee_id: 被关注者ID

        Returns:
            UserFollow: 新创建的关注关系
        """
        follow = UserFollow(
            follower_id=follower_id,
            followee_id=followee_id,
        )

        session.add(follow)
        await session.flush()

        return follow

    @staticmethod
    async def delete(
        session: AsyncSession,
        follower_id: str,
        followee_id: str
    ) -> bool:
        """
        删除关注关系（按关注对单条语句删除）

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            followee_id: 被关注者ID

        Returns:
            是否删除了记录
        """
        result = await session.execute(
            delete(UserFollow).where(
                and_(
                    UserFollow.follower_id == follower_id,
                    UserFollow.followee_id == followee_id
                )
            )
        )
        return result.rowcount > 0

    @staticmethod
    async def is_following(
        session: AsyncSession,
        follower_id: str,
        followee_id: str
    ) -> bool:
        """
        检查是否已关注

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            followee_id: 被关注者ID

        Returns:
            是否已关注
        """
        result = await session.execute(
            select(UserFollow.id).where(
                and_(
                    UserFollow.follower_id == follower_id,
                    UserFollow.followee_id == followee_id
                )
            ).limit(1)
        )
        return result.scalar_one_or_none() is not None

    @staticmethod
    async def get_following_list(
        session: AsyncSession,
        user_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> List[Tuple[User, UserFollow]]:
        """
        获取用户的关注列表（最近关注在前）

        Args:
            session: 数据库会话
            user_id: 用户ID
            limit: 每页数量
            offset: 偏移量

        Returns:
            (被关注用户, 关注关系) 元组列表
        """
        result = await session.execute(
            select(User, UserFollow)
            .join(UserFollow, User.id == UserFollow.followee_id)
            .where(UserFollow.follower_id == user_id)
            .order_by(UserFollow.created_at.desc(), UserFollow.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [tuple(row) for row in result.all()]

    @staticmethod
    async def get_follower_list(
        session: AsyncSession,
        user_id: str,
        limit: int = 20,
        offset: int = 0
    ) -> List[Tuple[User, UserFollow]]:
        """
        获取用户的粉丝列表（最近关注在前）

        Args:
            session: 数据库会话
            user_id: 用户ID
            limit: 每页数量
            offset: 偏移量

        Returns:
            (粉丝用户, 关注关系) 元组列表
        """
        result = await session.execute(
            select(User, UserFollow)
            .join(UserFollow, User.id == UserFollow.follower_id)
            .where(UserFollow.followee_id == user_id)
            .order_by(UserFollow.created_at.desc(), UserFollow.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return [tuple(row) for row in result.all()]

    @staticmethod
    async def count_following(session: AsyncSession, user_id: str) -> int:
        """统计用户关注的人数"""
        result = await session.execute(
            select(func.count(UserFollow.id)).where(
                UserFollow.follower_id == user_id
            )
        )
        return result.scalar() or 0

    @staticmethod
    async def count_followers(session: AsyncSession, user_id: str) -> int:
        """统计用户的粉丝数"""
        result = await session.execute(
            select(func.count(UserFollow.id)).where(
                UserFollow.followee_id == user_id
            )
        )
        return result.scalar() or 0
