import copy
import json
import logging
import re
import threading
import time
import uuid
from typing import Any, Callable, Iterable, List, Optional, Pattern

from django.conf import settings
from django.http import HttpRequest


def current_request_id() -> Optional[str]:
    return getattr(threading.current_thread(), "request_id", None)


class SensitiveDataFilter:
    """敏感数据过滤器"""

    # 敏感字段模式
    PATTERNS: List[Pattern] = [
        re.compile(r"password", re.I),
        re.compile(r"secret", re.I),
        re.compile(r"token", re.I),
        re.compile(r"csrf", re.I),
        re.compile(r"authorization", re.I),
        re.compile(r"cookie", re.I),
    ]

    # 敏感数据掩码
    MASK = "******"

    @classmethod
    def is_sensitive(cls, key: Any) -> bool:
        return isinstance(key, str) and any(pattern.search(key) for pattern in cls.PATTERNS)

    @classmethod
    def filter_sensitive_data(cls, data: Any) -> Any:
        """递归地把敏感键对应的值替换为掩码"""
        if isinstance(data, dict):
            return {
                key: cls.MASK if cls.is_sensitive(key) else cls.filter_sensitive_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, (list, tuple)):
            return [cls.filter_sensitive_data(item) for item in data]
        return data


class RequestFilter(logging.Filter):
    """给日志记录附加请求ID，并清理 data 中的敏感字段"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = current_request_id()

        if hasattr(record, "data"):
            # 深拷贝，避免改动调用方传入的字典
            record.data = SensitiveDataFilter.filter_sensitive_data(copy.deepcopy(record.data))

        return True


class CustomJsonFormatter(logging.Formatter):
    """自定义JSON格式化器"""

    def __init__(self, *args, **kwargs):
        self.default_fields = kwargs.pop("default_fields", {})
        super().__init__(*args, **kwargs)

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        log_data.update(self.default_fields)

        if record.exc_info:
            log_data["exc_info"] = self.formatException(record.exc_info)

        if hasattr(record, "data"):
            log_data["data"] = SensitiveDataFilter.filter_sensitive_data(record.data)

        request_id = getattr(record, "request_id", None) or current_request_id()
        if request_id:
            log_data["request_id"] = request_id

        log_data["environment"] = getattr(settings, "DJANGO_ENV", "unknown")

        return json.dumps(log_data, ensure_ascii=False, default=str)


class RequestIdMiddleware:
    """请求ID中间件，沿用上游的 X-Request-ID 或生成新的"""

    def __init__(self, get_response: Callable):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> Any:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        thread = threading.current_thread()
        thread.request_id = request_id
        request.request_id = request_id

        try:
            response = self.get_response(request)
        finally:
            thread.request_id = None

        response["X-Request-ID"] = request_id
        return response


def log_exception(
    exc: Exception,
    logger: Optional[logging.Logger] = None,
    request: Optional[HttpRequest] = None,
    context: Optional[dict] = None,
) -> None:
    """记录异常日志"""
    if logger is None:
        logger = logging.getLogger("apps")

    log_data = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
        "context": context or {},
    }

    if request:
        log_data.update(
            {
                "method": request.method,
                "path": request.path,
                "user": str(getattr(request, "user", "AnonymousUser")),
                "ip": request.META.get("REMOTE_ADDR"),
                "request_id": current_request_id(),
            }
        )

    logger.error(
        f"Exception occurred: {type(exc).__name__}",
        extra={"data": log_data},
        exc_info=True,
    )


def setup_request_logging(get_response: Callable) -> Callable:
    """请求日志中间件"""
    logger = logging.getLogger("django.request")

    def middleware(request: HttpRequest) -> Any:
        start_time = time.time()

        request_data = {
            "method": request.method,
            "path": request.path,
            "query_params": SensitiveDataFilter.filter_sensitive_data(dict(request.GET)),
            "user": str(getattr(request, "user", "AnonymousUser")),
            "ip": request.META.get("REMOTE_ADDR"),
            "request_id": current_request_id(),
        }

        try:
            response = get_response(request)
        except Exception as e:
            logger.error(
                "Request error",
                extra={"data": {**request_data, "duration": f"{time.time() - start_time:.2f}s", "error": str(e)}},
                exc_info=True,
            )
            raise

        response_data = {
            **request_data,
            "status": response.status_code,
            "duration": f"{time.time() - start_time:.2f}s",
        }
        # 重定向也算正常完成
        if response.status_code >= 400:
            logger.warning("Request failed", extra={"data": response_data})
        else:
            logger.info("Request completed", extra={"data": response_data})

        return response

    return middleware


class AuditLogger:
    """审计日志记录器，记录账号的增删改"""

    def __init__(self, model_name: str, logger_name: str = "audit") -> None:
        self.logger = logging.getLogger(logger_name)
        self.model_name = model_name

    def _emit(self, action: str, instance: Any, actor: Any = None, **data) -> None:
        self.logger.info(
            f"{self.model_name} {action}",
            extra={
                "data": {
                    "id": instance.pk,
                    "actor": str(actor or "system"),
                    "request_id": current_request_id(),
                    **data,
                }
            },
        )

    def log_create(self, instance: Any, actor: Any = None, roles: Iterable[str] = ()) -> None:
        self._emit("created", instance, actor, roles=sorted(roles))

    def log_update(self, instance: Any, changed_fields: List[str], actor: Any = None) -> None:
        self._emit("updated", instance, actor, changed_fields=changed_fields)

    def log_delete(self, instance: Any, actor: Any = None) -> None:
        # 删除后 pk 已被清空，这里在删除前调用
        self._emit("deleted", instance, actor, username=getattr(instance, "username", None))
