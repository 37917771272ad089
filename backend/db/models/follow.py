"""
关注关系表 ORM 模型
"""

from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Index, UniqueConstraint, CheckConstraint
from datetime import datetime

from backend.db.base import Base
from backend.utils.id_generator import generate_follow_id

# 约束名（错误归类时按名称匹配）
UNIQUE_FOLLOW_CONSTRAINT = "uk_follower_followee"
NO_SELF_FOLLOW_CONSTRAINT = "ck_cannot_follow_self"


class UserFollow(Base):
    """关注关系表（follower 关注 followee）"""
    __tablename__ = "user_follows"

    # 主键（ULID，按时间有序，用作分页的稳定排序键）
    id = Column(String(64), primary_key=True, default=generate_follow_id, comment="关注关系ID")

    # 外键（删除用户时级联删除关注关系）
    follower_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, comment="关注者（粉丝）"
    )
    followee_id = Column(
        String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, comment="被关注者"
    )

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="关注时间")

    # 约束和索引
    __table_args__ = (
        UniqueConstraint('follower_id', 'followee_id', name=UNIQUE_FOLLOW_CONSTRAINT),
        CheckConstraint('follower_id != followee_id', name=NO_SELF_FOLLOW_CONSTRAINT),
        Index('idx_follows_follower', 'follower_id', 'created_at'),
        Index('idx_follows_followee', 'followee_id', 'created_at'),
    )
