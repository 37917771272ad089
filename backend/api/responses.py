"""
服务结果 -> HTTP 响应
"""

from typing import Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger

from backend.models import ApiResponse, ErrorCode, INTERNAL_ERROR_MESSAGE
from backend.models.errors import is_business_error


def error_body(message: str, code: Optional[ErrorCode] = None) -> dict:
    """统一错误响应体 {success, message, code}"""
    body = {"success": False, "message": message}
    if code is not None:
        body["code"] = code.value
    return body


def render(result: ApiResponse, status_code: int = 200) -> JSONResponse:
    """
    把服务层结果转换为 JSON 响应

    Args:
        result: 服务层返回的 ApiResponse
        status_code: 成功时的状态码

    Returns:
        JSONResponse
    """
    if not result.success:
        if result.code is None:
            result = ApiResponse.fail(ErrorCode.INTERNAL_ERROR, result.message or INTERNAL_ERROR_MESSAGE)
        code = result.code
        if is_business_error(code):
            logger.debug(f"Business error {code.value}: {result.message}")
        return JSONResponse(
            status_code=result.http_status,
            content=error_body(result.message or code.value, code),
        )

    content = {"success": True}
    if result.message:
        content["message"] = result.message
    if result.data is not None:
        content["data"] = jsonable_encoder(result.data)
    return JSONResponse(status_code=status_code, content=content)
