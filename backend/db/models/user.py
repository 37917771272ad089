"""
用户表 ORM 模型
"""

from sqlalchemy import Column, String, TIMESTAMP
from datetime import datetime

from backend.db.base import Base


class User(Base):
    """用户表（由种子脚本/导入创建，本服务不负责注册）"""
    __tablename__ = "users"

    # 主键（UUID 字符串）
    id = Column(String(64), primary_key=True, comment="用户ID")

    # 基本信息
    username = Column(String(64), unique=True, nullable=False, comment="用户名（区分大小写）")
    display_name = Column(String(128), nullable=True, comment="显示名称")

    # 时间戳
    created_at = Column(TIMESTAMP, nullable=False, default=datetime.utcnow, comment="创建时间")
