from enum import Enum
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.exceptions import APIException


class ErrorLevel(Enum):
    """错误级别枚举"""

    WARNING = "warning"
    ERROR = "error"


class ErrorCode(Enum):
    """错误码枚举"""

    # 权限 (10xxx)
    PERMISSION_DENIED = (10004, "权限不足")

    # 参数验证 (20xxx)
    PARAM_ERROR = (20001, "参数错误")

    # 业务逻辑 (30xxx)
    RESOURCE_NOT_FOUND = (30001, "资源不存在")
    OPERATION_FAILED = (30004, "操作失败")

    # 系统错误 (60xxx)
    SYSTEM_ERROR = (60001, "系统错误")

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message


class BaseError(APIException):
    """基础错误类"""

    def __init__(
        self,
        error_code: ErrorCode,
        message: Optional[str] = None,
        data: Any = None,
        level: ErrorLevel = ErrorLevel.ERROR,
        status_code: Optional[int] = None,
        **kwargs,
    ):
        """
        初始化错误对象
        :param error_code: 错误码枚举
        :param message: 自定义错误消息
        :param data: 额外数据
        :param level: 错误级别
        :param status_code: HTTP状态码
        :param kwargs: 其他参数
        """
        self.error_code = error_code
        self.message = message or error_code.message
        self.data = data
        self.level = level
        self.status_code = status_code or self._get_status_code()
        self.kwargs = kwargs

        super().__init__(detail=self.to_dict())

    def __str__(self) -> str:
        return str(self.message)

    def _get_status_code(self) -> int:
        """获取HTTP状态码"""
        code = self.error_code.code
        if code >= 60000:
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        elif code >= 20000:
            return status.HTTP_400_BAD_REQUEST
        elif code >= 10000:
            return status.HTTP_401_UNAUTHORIZED
        return status.HTTP_400_BAD_REQUEST

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        error_dict = {
            "code": self.error_code.code,
            "message": self.message,
            "level": self.level.value,
        }

        if self.data is not None:
            error_dict["data"] = self.data

        if self.kwargs:
            error_dict.update(self.kwargs)

        return error_dict


# 参数相关错误
class ValidationError(BaseError):
    """参数验证错误"""

    def __init__(self, error_code: ErrorCode = ErrorCode.PARAM_ERROR, **kwargs):
        super().__init__(error_code=error_code, level=ErrorLevel.WARNING, **kwargs)


# 业务相关错误
class BusinessError(BaseError):
    """业务逻辑错误"""

    def __init__(
        self,
        error_code: ErrorCode = ErrorCode.OPERATION_FAILED,
        **kwargs,
    ):
        super().__init__(error_code=error_code, level=ErrorLevel.ERROR, **kwargs)
