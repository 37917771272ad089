"""
数据模型模块

导出所有 Pydantic 数据模型，用于 API 请求/响应验证
"""

# 通用响应
from .response import ApiResponse, ErrorResponse

# 错误码
from .errors import ErrorCode, ERROR_HTTP_STATUS, INTERNAL_ERROR_MESSAGE

# 用户模块
from .user import UserSummary

# 关注模块
from .follow import FollowRequest, FollowCreated, FollowCheck, FollowCount, FollowUser, FollowPage

__all__ = [
    # Response
    "ApiResponse",
    "ErrorResponse",

    # Errors
    "ErrorCode",
    "ERROR_HTTP_STATUS",
    "INTERNAL_ERROR_MESSAGE",

    # User
    "UserSummary",

    # Follow
    "FollowRequest",
    "FollowCreated",
    "FollowCheck",
    "FollowCount",
    "FollowUser",
    "FollowPage",
]
