"""
ID 生成器

提供各种实体的唯一 ID 生成功能
"""

import uuid

import ulid


def generate_ulid() -> str:
    """
    生成 ULID（Universally Unique Lexicographically Sortable Identifier）

    特点：
    - 128-bit 兼容性
    - 按时间排序
    - 规范化的字符串表示（26个字符）

    Returns:
        ULID 字符串
    """
    return str(ulid.new())


def generate_user_id() -> str:
    """
    生成用户 ID

    用户 ID 对外是不透明的 UUID 字符串，接口层按 UUID 格式校验

    Returns:
        用户 ID
    """
    return str(uuid.uuid4())


def generate_follow_id() -> str:
    """
    生成关注关系 ID

    直接使用 ULID，同一毫秒外按生成时间递增，分页时作为稳定的次级排序键

    Returns:
        关注关系 ID
    """
    return generate_ulid()
