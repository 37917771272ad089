"""
API v1 路由汇总
"""

from fastapi import APIRouter

from .follow import router as follow_router
from .user import router as user_router

# 创建 v1 API 路由
api_router = APIRouter()

# 注册子路由（按前缀分组）
api_router.include_router(follow_router, prefix="/follows", tags=["Follow"])
api_router.include_router(user_router, prefix="/users", tags=["User"])
