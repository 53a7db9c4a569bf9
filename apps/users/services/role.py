from typing import Iterable

from django.db.models import QuerySet

from users.models import Role


class RoleService:
    def get_all(self) -> QuerySet:
        """全部角色，按名称排序"""
        return Role.objects.order_by("name", "id")

    def get_by_slugs(self, slugs: Iterable[str]) -> QuerySet:
        return Role.objects.filter(slug__in=list(slugs)).order_by("name", "id")

    def choices(self):
        """(slug, name) 列表，按名称排序，用于表单和下拉框"""
        return list(self.get_all().values_list("slug", "name"))
