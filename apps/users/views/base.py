from typing import Any, Dict, Optional

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied
from django.shortcuts import render
from django.views import View

from users.services.auth import AuthService
from utils.flash import pop_form_state


class DashboardView(View):
    """
    仪表盘页面基类
    1. 未登录时重定向到登录页并带上 next
    2. 没有仪表盘权限时返回 403
    3. view() 渲染 dashboard/ 下的模板，并注入 current_user 和上一次提交的表单状态
    """

    auth_service = None
    template_prefix = "dashboard"

    def setup(self, request, *args, **kwargs):
        super().setup(request, *args, **kwargs)
        if self.auth_service is None:
            self.auth_service = AuthService()
        self.current_user = None

    def dispatch(self, request, *args, **kwargs):
        user = self.auth_service.get_current_user(request)
        if user is None:
            return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)
        if not self.auth_service.has_access(user):
            raise PermissionDenied("You do not have access to the dashboard.")

        self.current_user = user
        return super().dispatch(request, *args, **kwargs)

    def get_template_name(self, name: str) -> str:
        """users.index -> dashboard/users/index.html"""
        return f"{self.template_prefix}/{name.replace('.', '/')}.html"

    def view(self, name: str, context: Optional[Dict[str, Any]] = None):
        form_state = pop_form_state(self.request)
        data = {
            "current_user": self.current_user,
            "errors": form_state["errors"],
            "old": form_state["old"],
        }
        data.update(context or {})
        return render(self.request, self.get_template_name(name), data)
