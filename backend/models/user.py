"""
用户相关数据模型
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """用户公开信息"""
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str = Field(..., description="用户ID")
    username: str = Field(..., description="用户名")
    display_name: Optional[str] = Field(None, alias="displayName", description="显示名称")
