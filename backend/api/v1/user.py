"""
用户模块路由（用户列表、关注/粉丝列表与计数）
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import ApiResponse, ErrorResponse, FollowCount, FollowPage, UserSummary
from backend.api.deps import get_db_session, get_follow_service
from backend.api.responses import render
from backend.config.settings import settings
from backend.services.follow_service import FollowService

router = APIRouter()

NOT_FOUND = {404: {"model": ErrorResponse}}


@router.get("", response_model=ApiResponse[List[UserSummary]])
async def list_users(
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """全部用户（按用户名升序）"""
    result = await service.list_all_users(session)
    return render(result)


@router.get("/{user_id}/followers", response_model=ApiResponse[FollowPage], responses=NOT_FOUND)
async def get_follower_list(
    user_id: UUID,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """
    获取用户的粉丝列表

    - 最近关注在前
    - 支持分页（limit 1-100，offset >= 0）
    """
    result = await service.list_followers(session, str(user_id), limit, offset)
    return render(result)


@router.get("/{user_id}/following", response_model=ApiResponse[FollowPage], responses=NOT_FOUND)
async def get_following_list(
    user_id: UUID,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """
    获取用户的关注列表

    - 最近关注在前
    - 支持分页（limit 1-100，offset >= 0）
    """
    result = await service.list_following(session, str(user_id), limit, offset)
    return render(result)


@router.get("/{user_id}/followers/count", response_model=ApiResponse[FollowCount], responses=NOT_FOUND)
async def get_follower_count(
    user_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """粉丝数"""
    result = await service.follower_count(session, str(user_id))
    return render(result)


@router.get("/{user_id}/following/count", response_model=ApiResponse[FollowCount], responses=NOT_FOUND)
async def get_following_count(
    user_id: UUID,
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """关注数"""
    result = await service.following_count(session, str(user_id))
    return render(result)
