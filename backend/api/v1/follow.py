"""
关注模块路由
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from backend.models import ApiResponse, ErrorResponse, FollowCheck, FollowCreated, FollowRequest
from backend.api.deps import get_db_session, get_follow_service
from backend.api.responses import render
from backend.services.follow_service import FollowService

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[FollowCreated],
    responses=ERROR_RESPONSES
)
async def follow_user(
    data: FollowRequest,
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """
    关注用户

    - 不能关注自己（400 SELF_FOLLOW）
    - 双方必须存在（404 USER_NOT_FOUND）
    - 不能重复关注（409 DUPLICATE_FOLLOW）
    """
    result = await service.follow(session, str(data.follower_id), str(data.followee_id))
    return render(result, status_code=status.HTTP_201_CREATED)


@router.delete("", response_model=ApiResponse, responses=ERROR_RESPONSES)
async def unfollow_user(
    data: FollowRequest,
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """
    取消关注用户

    - 必须已关注（404 FOLLOW_NOT_FOUND）
    """
    result = await service.unfollow(session, str(data.follower_id), str(data.followee_id))
    return render(result)


@router.get("/check", response_model=ApiResponse[FollowCheck], responses=ERROR_RESPONSES)
async def check_following(
    follower_id: UUID = Query(..., alias="followerId"),
    followee_id: UUID = Query(..., alias="followeeId"),
    session: AsyncSession = Depends(get_db_session),
    service: FollowService = Depends(get_follow_service)
):
    """是否关注"""
    result = await service.is_following(session, str(follower_id), str(followee_id))
    return render(result)
