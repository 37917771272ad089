"""
关注相关数据模型
"""

from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


class FollowRequest(BaseModel):
    """关注/取消关注请求"""
    model_config = ConfigDict(populate_by_name=True)

    follower_id: UUID = Field(..., alias="followerId", description="关注者ID")
    followee_id: UUID = Field(..., alias="followeeId", description="被关注者ID")


class FollowCreated(BaseModel):
    """关注成功返回的关注关系ID"""
    id: str


class FollowCheck(BaseModel):
    """是否关注"""
    model_config = ConfigDict(populate_by_name=True)

    is_following: bool = Field(..., alias="isFollowing")


class FollowCount(BaseModel):
    """关注数/粉丝数"""
    count: int


class FollowUser(BaseModel):
    """关注列表中的用户"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    display_name: Optional[str] = Field(None, alias="displayName")
    followed_at: Optional[datetime] = Field(None, alias="followedAt")


class FollowPage(BaseModel):
    """分页的关注/粉丝列表"""
    total: int
    items: List[FollowUser]
    limit: int
    offset: int
