"""
数据库 ORM 模型

导出所有 SQLAlchemy 模型类
"""

from backend.db.base import Base

# 导入所有模型（确保 Base 知道所有表）
from .user import User
from .follow import UserFollow, UNIQUE_FOLLOW_CONSTRAINT, NO_SELF_FOLLOW_CONSTRAINT

__all__ = [
    # Base
    "Base",

    # Models
    "User",
    "UserFollow",

    # Constraint names
    "UNIQUE_FOLLOW_CONSTRAINT",
    "NO_SELF_FOLLOW_CONSTRAINT",
]
