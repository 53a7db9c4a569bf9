from typing import Dict, List, Mapping, Optional

from rest_framework import status

from utils.error import BusinessError, ErrorCode, ValidationError


class FormValidationException(ValidationError):
    """表单校验失败，errors 为 字段 -> 错误信息列表"""

    def __init__(self, message: str = "Validation failed.", errors: Optional[Mapping] = None, **kwargs):
        self.errors = {field: [str(msg) for msg in messages] for field, messages in (errors or {}).items()}
        super().__init__(message=message, data={"errors": self.errors}, **kwargs)

    def get_errors(self) -> Dict[str, List[str]]:
        return self.errors


class UsersException(BusinessError):
    """用户相关的业务错误，例如用户不存在、删除自己"""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.OPERATION_FAILED, **kwargs):
        super().__init__(error_code=error_code, message=message, **kwargs)

    @classmethod
    def not_found(cls, user_id) -> "UsersException":
        return cls(
            "User does not exist.",
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            status_code=status.HTTP_404_NOT_FOUND,
            user_id=user_id,
        )
