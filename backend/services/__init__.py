"""
业务服务层
"""

from .follow_service import FollowService, store_guard

__all__ = [
    "FollowService",
    "store_guard",
]
