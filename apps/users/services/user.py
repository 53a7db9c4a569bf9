"""
Services Layer:
服务层负责用户管理的业务逻辑，控制器(HTML视图和API)只负责请求和响应。
校验失败抛出 FormValidationException，用户不存在等业务错误抛出 UsersException。
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from django.db import transaction
from django.db.models import QuerySet

from users.conf import get_dashboard_config
from users.exceptions import FormValidationException, UsersException
from users.forms import UserCreateForm, UserForm
from users.models import User
from users.services.role import RoleService
from utils.logging import AuditLogger

logger = logging.getLogger("apps")


def form_errors(form) -> Dict[str, List[str]]:
    """字段 -> 错误信息列表，非字段错误的键为 __all__"""
    return {field: [error["message"] for error in errors] for field, errors in form.errors.get_json_data().items()}


class UserService:
    def __init__(self, role_service: Optional[RoleService] = None):
        self.role_service = role_service or RoleService()
        self.audit = AuditLogger("User")

    def get_all_with(self, *relations: str) -> QuerySet:
        """全部用户，预加载给定的关联"""
        return User.objects.prefetch_related(*relations).order_by("id")

    def get_by_id_with(self, user_id: Any, *relations: str) -> Optional[User]:
        """按ID获取用户，不存在时返回 None"""
        return User.objects.prefetch_related(*relations).filter(pk=user_id).first()

    def create(self, data: Mapping, actor: Any = None) -> User:
        """
        创建用户
        :param data: 提交的数据，roles 为角色标识列表
        :param actor: 执行操作的用户，写入审计日志
        """
        form = UserCreateForm(data, role_choices=self.role_service.choices())
        if not form.is_valid():
            raise FormValidationException("The user could not be created.", form_errors(form))

        slugs = list(form.cleaned_data["roles"])
        default_role = get_dashboard_config().default_role
        if not slugs and default_role:
            slugs = [default_role]

        with transaction.atomic():
            user = form.save(commit=False)
            user.is_active = True
            user.save()
            roles = list(self.role_service.get_by_slugs(slugs))
            user.roles.set(roles)

        self.audit.log_create(user, actor, roles=[role.slug for role in roles])
        return user

    def update(self, data: Mapping, user_id: Any, actor: Any = None) -> User:
        """
        更新用户，密码留空表示不修改，角色同步为提交的列表
        """
        user = self.get_by_id_with(user_id)
        if user is None:
            raise UsersException.not_found(user_id)

        form = UserForm(data, instance=user, role_choices=self.role_service.choices())
        if not form.is_valid():
            raise FormValidationException("The user could not be updated.", form_errors(form))

        with transaction.atomic():
            user = form.save()
            user.roles.set(self.role_service.get_by_slugs(form.cleaned_data["roles"]))

        changed_fields = [field for field in form.changed_data if field != "password_confirmation"]
        self.audit.log_update(user, changed_fields, actor)
        return user

    def delete(self, user_id: Any, actor: Any = None) -> None:
        """删除用户，不允许删除当前登录的账号"""
        user = self.get_by_id_with(user_id)
        if user is None:
            raise UsersException.not_found(user_id)

        if actor is not None and actor.pk == user.pk:
            logger.warning("Refused self deletion", extra={"data": {"user_id": user.pk}})
            raise UsersException("You cannot delete your own account.")

        self.audit.log_delete(user, actor)
        user.delete()
