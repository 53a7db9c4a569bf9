import logging
from typing import Optional

from django.http import HttpRequest

from users.conf import DashboardConfig, get_dashboard_config

security_logger = logging.getLogger("security")


class AuthService:
    """仪表盘的登录状态和访问权限判断"""

    def __init__(self, config: Optional[DashboardConfig] = None):
        self._config = config

    @property
    def config(self) -> DashboardConfig:
        return self._config or get_dashboard_config()

    def get_current_user(self, request: HttpRequest):
        """当前登录用户，未登录返回 None"""
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return user

    def check(self, request: HttpRequest) -> bool:
        return self.get_current_user(request) is not None

    def has_access(self, user) -> bool:
        """超级管理员和职员总是可以访问，其他用户需要拥有配置的角色之一"""
        if not user.is_active:
            return False
        if user.is_superuser or user.is_staff:
            return True

        allowed = set(self.config.access_roles)
        if allowed and user.roles.filter(slug__in=allowed).exists():
            return True

        security_logger.warning(
            "Dashboard access denied",
            extra={"data": {"user_id": user.pk, "username": user.get_username()}},
        )
        return False
