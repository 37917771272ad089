"""
工具模块
"""

from .id_generator import generate_ulid, generate_user_id, generate_follow_id

__all__ = [
    # ID 生成器
    "generate_ulid",
    "generate_user_id",
    "generate_follow_id",
]
