"""
关注服务

处理用户关注相关业务逻辑：
- 关注/取消关注（唯一性、外键、自关注最终由数据库约束保证）
- 是否关注、关注/粉丝列表分页、关注/粉丝数
- 全部用户列表

服务本身无状态，应用启动时创建一次并通过依赖注入传给路由。
所有方法返回 ApiResponse 结果，业务错误不抛异常。
"""

import asyncio
from functools import wraps
from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.config.settings import settings
from backend.db.dao import FollowDAO, UserDAO
from backend.db.errors import ConstraintViolation, classify_integrity_error
from backend.models import ApiResponse, ErrorCode, INTERNAL_ERROR_MESSAGE
from backend.models.follow import FollowCheck, FollowCount, FollowCreated, FollowPage, FollowUser
from backend.models.user import UserSummary


def store_guard(operation: str):
    """
    装饰器：把数据库不可用等非业务异常转换为 INTERNAL_ERROR 结果

    完整异常写入日志，对外只返回通用信息；会话先回滚，保证后续提交不带脏数据

    用法:
        @store_guard("follow")
        async def follow(self, session, ...):
            pass
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, session: AsyncSession, *args, **kwargs):
            try:
                return await func(self, session, *args, **kwargs)
            except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
                logger.opt(exception=e).error(f"❌ {operation} failed: {type(e).__name__}")
                try:
                    await session.rollback()
                except (SQLAlchemyError, OSError) as rollback_error:
                    logger.warning(f"⚠️  Rollback after failed {operation} also failed: {rollback_error}")
                return ApiResponse.fail(ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

        return wrapper

    return decorator


class FollowService:
    """关注服务"""

    def __init__(self, default_page_size: Optional[int] = None, max_page_size: Optional[int] = None):
        self.default_page_size = default_page_size or settings.DEFAULT_PAGE_SIZE
        self.max_page_size = max_page_size or settings.MAX_PAGE_SIZE

    def _clamp(self, limit: Optional[int], offset: Optional[int]):
        """分页参数兜底（正常情况下接口层已校验）"""
        if limit is None:
            limit = self.default_page_size
        limit = max(1, min(int(limit), self.max_page_size))
        offset = max(0, int(offset or 0))
        return limit, offset

    # ==================== 写操作 ====================

    @store_guard("follow")
    async def follow(
        self,
        session: AsyncSession,
        follower_id: str,
        followee_id: str
    ) -> ApiResponse:
        """
        关注用户

        不做重复关注的预检查：并发的重复关注由唯一约束拦截并返回 DUPLICATE_FOLLOW。
        用户存在性检查与插入之间的竞争（用户被删除）由外键约束兜底。

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            followee_id: 被关注者ID

        Returns:
            API响应，data 为 {"id": 关注关系ID}
        """
        # 不能关注自己
        if follower_id == followee_id:
            logger.info(f"Rejected self-follow by {follower_id}")
            return ApiResponse.fail(ErrorCode.SELF_FOLLOW, "Cannot follow yourself")

        # 一次查询检查双方是否存在
        found = await UserDAO.existing_ids(session, (follower_id, followee_id))
        if follower_id not in found:
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "Follower user not found")
        if followee_id not in found:
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "Followee user not found")

        # 创建关注关系
        try:
            follow = await FollowDAO.create(session, follower_id, followee_id)
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            return self._integrity_failure(e, follower_id, followee_id)

        logger.info(f"✅ {follower_id} followed {followee_id} (edge {follow.id})")
        return ApiResponse.ok(FollowCreated(id=follow.id).model_dump(), message="User followed successfully")

    @staticmethod
    def _integrity_failure(error: IntegrityError, follower_id: str, followee_id: str) -> ApiResponse:
        """把约束冲突转换为业务错误，无法识别时按内部错误处理"""
        violation = classify_integrity_error(error)

        if violation == ConstraintViolation.DUPLICATE:
            logger.info(f"Duplicate follow {follower_id} -> {followee_id}")
            return ApiResponse.fail(ErrorCode.DUPLICATE_FOLLOW, "Already following this user")
        if violation == ConstraintViolation.MISSING_USER:
            logger.info(f"User vanished before follow {follower_id} -> {followee_id}")
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "User not found")
        if violation == ConstraintViolation.SELF_FOLLOW:
            return ApiResponse.fail(ErrorCode.SELF_FOLLOW, "Cannot follow yourself")

        logger.opt(exception=error).error(f"❌ Unclassified integrity error on follow {follower_id} -> {followee_id}")
        return ApiResponse.fail(ErrorCode.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    @store_guard("unfollow")
    async def unfollow(
        self,
        session: AsyncSession,
        follower_id: str,
        followee_id: str
    ) -> ApiResponse:
        """
        取消关注用户

        按 (follower, followee) 单条语句删除，没有删除任何行即为未关注

        Args:
            session: 数据库会话
            follower_id: 关注者ID
            followee_id: 被关注者ID

        Returns:
            API响应
        """
        deleted = await FollowDAO.delete(session, follower_id, followee_id)
        if not deleted:
            return ApiResponse.fail(ErrorCode.FOLLOW_NOT_FOUND, "Follow relationship not found")

        await session.commit()

        logger.info(f"✅ {follower_id} unfollowed {followee_id}")
        return ApiResponse.ok(message="User unfollowed successfully")

    # ==================== 读操作 ====================

    @store_guard("is_following")
    async def is_following(
        self,
        session: AsyncSession,
        follower_id: str,
        followee_id: str
    ) -> ApiResponse:
        """检查 follower 是否关注了 followee"""
        following = await FollowDAO.is_following(session, follower_id, followee_id)
        return ApiResponse.ok(FollowCheck(is_following=following).model_dump(by_alias=True))

    @store_guard("list_followers")
    async def list_followers(
        self,
        session: AsyncSession,
        user_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = 0
    ) -> ApiResponse:
        """
        获取用户的粉丝列表

        Args:
            session: 数据库会话
            user_id: 用户ID
            limit: 每页数量
            offset: 偏移量

        Returns:
            API响应，data 为 {"total", "items", "limit", "offset"}
        """
        if not await UserDAO.exists(session, user_id):
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "User not found")

        limit, offset = self._clamp(limit, offset)
        total = await FollowDAO.count_followers(session, user_id)
        rows = await FollowDAO.get_follower_list(session, user_id, limit, offset)

        return ApiResponse.ok(self._page(total, rows, limit, offset))

    @store_guard("list_following")
    async def list_following(
        self,
        session: AsyncSession,
        user_id: str,
        limit: Optional[int] = None,
        offset: Optional[int] = 0
    ) -> ApiResponse:
        """
        获取用户的关注列表

        Args:
            session: 数据库会话
            user_id: 用户ID
            limit: 每页数量
            offset: 偏移量

        Returns:
            API响应，data 为 {"total", "items", "limit", "offset"}
        """
        if not await UserDAO.exists(session, user_id):
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "User not found")

        limit, offset = self._clamp(limit, offset)
        total = await FollowDAO.count_following(session, user_id)
        rows = await FollowDAO.get_following_list(session, user_id, limit, offset)

        return ApiResponse.ok(self._page(total, rows, limit, offset))

    @staticmethod
    def _page(total: int, rows, limit: int, offset: int) -> dict:
        items = [
            FollowUser(
                id=user.id,
                username=user.username,
                display_name=user.display_name,
                followed_at=follow.created_at,
            )
            for user, follow in rows
        ]
        page = FollowPage(total=total, items=items, limit=limit, offset=offset)
        return page.model_dump(mode="json", by_alias=True)

    @store_guard("follower_count")
    async def follower_count(self, session: AsyncSession, user_id: str) -> ApiResponse:
        """粉丝数"""
        if not await UserDAO.exists(session, user_id):
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "User not found")

        count = await FollowDAO.count_followers(session, user_id)
        return ApiResponse.ok(FollowCount(count=count).model_dump())

    @store_guard("following_count")
    async def following_count(self, session: AsyncSession, user_id: str) -> ApiResponse:
        """关注数"""
        if not await UserDAO.exists(session, user_id):
            return ApiResponse.fail(ErrorCode.USER_NOT_FOUND, "User not found")

        count = await FollowDAO.count_following(session, user_id)
        return ApiResponse.ok(FollowCount(count=count).model_dump())

    @store_guard("list_all_users")
    async def list_all_users(self, session: AsyncSession) -> ApiResponse:
        """
        全部用户（按用户名升序）

        TODO: 用户量变大后需要分页，目前只适合小规模部署
        """
        users = await UserDAO.list_all(session)
        return ApiResponse.ok([
            UserSummary.model_validate(user).model_dump(by_alias=True)
            for user in users
        ])
