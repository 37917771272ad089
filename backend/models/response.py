"""
统一响应模型
"""

from typing import Any, Generic, TypeVar, Optional
from pydantic import BaseModel, Field

from .errors import ErrorCode, ERROR_HTTP_STATUS


T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """
    统一API响应格式

    服务层以它作为结果类型：成功时携带 data，失败时携带 ErrorCode
    """
    success: bool = Field(True, description="请求是否成功")
    data: Optional[T] = Field(None, description="响应数据")
    message: Optional[str] = Field(None, description="响应消息")
    code: Optional[ErrorCode] = Field(None, description="业务错误码")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {"key": "value"},
                "message": "操作成功"
            }
        }

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "ApiResponse":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, code: ErrorCode, message: str) -> "ApiResponse":
        return cls(success=False, message=message, code=code)

    @property
    def http_status(self) -> int:
        """失败结果对应的 HTTP 状态码"""
        if self.success or self.code is None:
            return 200
        return ERROR_HTTP_STATUS[self.code]


class ErrorResponse(BaseModel):
    """错误响应"""
    success: bool = Field(False, description="请求失败")
    message: str = Field(..., description="错误信息")
    code: Optional[ErrorCode] = Field(None, description="错误码")

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "message": "Already following this user",
                "code": "DUPLICATE_FOLLOW"
            }
        }
