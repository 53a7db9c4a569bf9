import logging
import time
from functools import wraps
from typing import Any, Callable

from django.http import HttpRequest

logger = logging.getLogger("apps")


def log_action(action: str = "", level: str = "info") -> Callable:
    """
    操作日志装饰器，类视图上配合 django.utils.decorators.method_decorator 使用
    :param action: 操作描述
    :param level: 日志级别
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(request: HttpRequest, *args, **kwargs) -> Any:
            start_time = time.time()
            user = getattr(request, "user", None)
            log_data = {
                "user": user.get_username() if user is not None and user.is_authenticated else "anonymous",
                "action": action or func.__name__,
                "path": request.path,
                "method": request.method,
                "ip": request.META.get("REMOTE_ADDR"),
                "params": kwargs,
            }

            try:
                response = func(request, *args, **kwargs)
            except Exception as e:
                log_data.update(duration=f"{(time.time() - start_time):.3f}s", status="error", error=str(e))
                logger.error(f"操作日志: {log_data['action']}", extra={"data": log_data})
                raise

            log_data.update(
                duration=f"{(time.time() - start_time):.3f}s",
                status="success",
                status_code=getattr(response, "status_code", None),
            )
            getattr(logger, level)(f"操作日志: {log_data['action']}", extra={"data": log_data})
            return response

        return wrapper

    return decorator
