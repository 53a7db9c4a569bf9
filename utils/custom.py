from collections import OrderedDict
from typing import Any, Dict, List

from django.http import HttpRequest
from django.utils.translation import gettext as _
from rest_framework import status
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import BasePermission
from rest_framework.response import Response


class CustomPagination(PageNumberPagination):
    """自定义分页器"""

    page_size = 10
    page_size_query_param = "size"
    max_page_size = 100
    page_query_param = "page"

    def get_paginated_response(self, data: List[Dict[str, Any]]) -> Response:
        """自定义分页响应格式"""
        return Response(
            OrderedDict(
                [
                    ("code", status.HTTP_200_OK),
                    ("message", _("获取成功")),
                    (
                        "data",
                        OrderedDict(
                            [
                                ("list", data),
                                (
                                    "pagination",
                                    {
                                        "page": self.page.number,
                                        "size": self.page.paginator.per_page,
                                        "total": self.page.paginator.count,
                                        "pages": self.page.paginator.num_pages,
                                    },
                                ),
                            ]
                        ),
                    ),
                ]
            )
        )


class DashboardPermission(BasePermission):
    """仪表盘访问权限，规则与 HTML 页面一致"""

    message = _("You do not have access to the dashboard.")

    def has_permission(self, request: HttpRequest, view: Any) -> bool:
        # 延迟导入，settings 加载时 app registry 尚未就绪
        from users.services.auth import AuthService

        auth_service = getattr(view, "auth_service", None) or AuthService()
        user = auth_service.get_current_user(request)
        if user is None:
            return False
        return auth_service.has_access(user)
