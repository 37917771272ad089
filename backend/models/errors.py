"""
错误码定义

业务错误（自关注、用户不存在、重复关注、关注关系不存在）是正常结果，
与内部错误（数据库不可用、无法归类的失败）严格区分
"""

from enum import Enum


class ErrorCode(str, Enum):
    """错误码"""
    SELF_FOLLOW = "SELF_FOLLOW"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    DUPLICATE_FOLLOW = "DUPLICATE_FOLLOW"
    FOLLOW_NOT_FOUND = "FOLLOW_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


ERROR_HTTP_STATUS = {
    ErrorCode.SELF_FOLLOW: 400,
    ErrorCode.USER_NOT_FOUND: 404,
    ErrorCode.DUPLICATE_FOLLOW: 409,
    ErrorCode.FOLLOW_NOT_FOUND: 404,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.INTERNAL_ERROR: 500,
}

# 内部错误对外只返回通用信息
INTERNAL_ERROR_MESSAGE = "Internal server error"


def is_business_error(code: ErrorCode) -> bool:
    """业务错误（调用方无需重试）"""
    return code not in (ErrorCode.INTERNAL_ERROR, ErrorCode.INVALID_INPUT)
