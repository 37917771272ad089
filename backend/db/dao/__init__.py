"""
数据访问对象（DAO）层

封装数据库操作，提供给服务层使用
"""

from .user_dao import UserDAO
from .follow_dao import FollowDAO

__all__ = [
    "UserDAO",
    "FollowDAO",
]
