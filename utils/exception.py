import logging
import traceback
from datetime import datetime
from typing import Any, Dict, Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404, HttpRequest
from django.utils.translation import gettext as _
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

from utils.error import BaseError, ErrorCode, ErrorLevel
from utils.logging import log_exception

logger = logging.getLogger(__name__)


class ExceptionData:
    """异常数据类，用于格式化异常信息"""

    def __init__(
        self,
        exc: Exception,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: int = ErrorCode.SYSTEM_ERROR.code,
        message: Any = None,
        level: ErrorLevel = ErrorLevel.ERROR,
        data: Any = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.exc = exc
        self.status_code = status_code
        self.code = code
        self.message = message or str(exc)
        self.level = level
        self.data = data
        self.extra = extra or {}
        self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        error_dict = {
            "code": self.code,
            "message": self.message,
            "level": self.level.value,
            "timestamp": self.timestamp,
        }

        if settings.DEBUG:
            error_dict.update({"exception": self.exc.__class__.__name__, "traceback": traceback.format_exc()})

        if self.data is not None:
            error_dict["data"] = self.data

        error_dict.update(self.extra)
        return error_dict


class ExceptionHandler:
    """
    统一异常处理器
    项目自己的错误类型和 Django 的 404/403/模型校验错误先按映射表处理，保证 code 为整数；
    其余 APIException (认证失败、限流等) 交给 DRF 默认处理；剩下的记录日志后返回 500
    """

    def __init__(self):
        # 异常映射表，顺序即匹配优先级
        self.exception_mappings = {
            BaseError: self._handle_base_error,
            Http404: self._handle_404,
            PermissionDenied: self._handle_permission_denied,
            ValidationError: self._handle_validation_error,
        }

    def __call__(self, exc: Exception, context: dict) -> Response:
        """处理异常"""
        request = context.get("request")

        handler = self._get_exception_handler(exc)
        if handler is None:
            response = drf_exception_handler(exc, context)
            if response is not None:
                return response

            handler = self._handle_generic_exception
            log_exception(exc, logger, request, {"view": context.get("view").__class__.__name__})

        set_rollback()
        exc_data = handler(exc, request)
        return Response(data=exc_data.to_dict(), status=exc_data.status_code)

    def _get_exception_handler(self, exc: Exception) -> Optional[callable]:
        """获取异常处理方法，没有匹配时返回 None"""
        for exc_class, handler in self.exception_mappings.items():
            if isinstance(exc, exc_class):
                return handler
        return None

    def _handle_base_error(self, exc: BaseError, request: Optional[HttpRequest] = None) -> ExceptionData:
        """处理基础错误"""
        return ExceptionData(
            exc=exc,
            status_code=exc.status_code,
            code=exc.error_code.code,
            message=exc.message,
            level=exc.level,
            data=exc.data,
            extra=exc.kwargs,
        )

    def _handle_404(self, exc: Http404, request: Optional[HttpRequest] = None) -> ExceptionData:
        """处理404错误"""
        return ExceptionData(
            exc=exc,
            status_code=status.HTTP_404_NOT_FOUND,
            code=ErrorCode.RESOURCE_NOT_FOUND.code,
            message=_("Resource not found"),
            level=ErrorLevel.WARNING,
        )

    def _handle_permission_denied(self, exc: PermissionDenied, request: Optional[HttpRequest] = None) -> ExceptionData:
        """处理权限拒绝错误"""
        return ExceptionData(
            exc=exc,
            status_code=status.HTTP_403_FORBIDDEN,
            code=ErrorCode.PERMISSION_DENIED.code,
            message=_("Permission denied"),
            level=ErrorLevel.WARNING,
        )

    def _handle_validation_error(self, exc: ValidationError, request: Optional[HttpRequest] = None) -> ExceptionData:
        """处理模型层抛出的验证错误"""
        if hasattr(exc, "message_dict"):
            data = {"errors": exc.message_dict}
        else:
            data = {"errors": {"__all__": exc.messages}}

        return ExceptionData(
            exc=exc,
            status_code=status.HTTP_400_BAD_REQUEST,
            code=ErrorCode.PARAM_ERROR.code,
            message=_("Validation failed"),
            level=ErrorLevel.WARNING,
            data=data,
        )

    def _handle_generic_exception(self, exc: Exception, request: Optional[HttpRequest] = None) -> ExceptionData:
        """处理通用异常"""
        return ExceptionData(
            exc=exc,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code=ErrorCode.SYSTEM_ERROR.code,
            message=_("Internal server error"),
            level=ErrorLevel.ERROR,
        )


# 创建全局异常处理器实例
exception_handler = ExceptionHandler()


def custom_exception_handler(exc: Exception, context: dict) -> Response:
    """
    自定义异常处理函数
    :param exc: 异常对象
    :param context: 上下文信息
    :return: Response
    """
    return exception_handler(exc, context)
