"""HTTP exception handlers.

将领域异常转换为标准 HTTP 响应。
各模块的异常类通过定义 http_status_code 和 error_code 类属性来自定义响应。
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from src.core.domain.exceptions import DomainException
from src.core.interfaces.http.response import ErrorResponse


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions.

    通过读取异常类的 http_status_code 和 error_code 类属性来确定响应。
    """
    status_code = getattr(exc, "http_status_code", 400)
    error_code = getattr(exc, "error_code", "DOMAIN_ERROR")

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{error_code} on {request.method} {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.create(code=error_code, message=exc.message).model_dump(),
    )


async def global_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions (store failures included)."""
    logger.exception(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse.create(
            code="INTERNAL_ERROR", message="An internal error occurred"
        ).model_dump(),
    )
