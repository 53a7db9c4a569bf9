from collections import OrderedDict

from django.contrib import messages
from django.shortcuts import redirect
from django.utils.decorators import method_decorator

from users.exceptions import FormValidationException, UsersException
from users.services.role import RoleService
from users.services.user import UserService
from users.views.base import DashboardView
from utils.decorators import log_action
from utils.flash import redirect_with_errors


class UserViewMixin:
    """
    用户管理页面共用的服务对象，可通过 as_view(user_service=..., role_service=...) 注入
    """

    user_service = None
    role_service = None

    def setup(self, request, *args, **kwargs):
        super().setup(request, *args, **kwargs)
        if self.role_service is None:
            self.role_service = RoleService()
        if self.user_service is None:
            self.user_service = UserService(role_service=self.role_service)

    def role_choices(self) -> OrderedDict:
        """角色标识 -> 角色名称，顺序与 role_service.get_all() 一致"""
        return OrderedDict((role.slug, role.name) for role in self.role_service.get_all())


class UserIndexView(UserViewMixin, DashboardView):
    """用户列表(GET)和保存新用户(POST)"""

    def get(self, request):
        return self.index(request)

    def post(self, request):
        return self.store(request)

    def index(self, request):
        users = self.user_service.get_all_with("roles")
        return self.view("users.index", {"users": users})

    @method_decorator(log_action("创建用户"))
    def store(self, request):
        try:
            self.user_service.create(request.POST, actor=request.user)
        except FormValidationException as e:
            return redirect_with_errors(
                request, "users:create", message=e.message, errors=e.get_errors(), data=request.POST
            )

        messages.success(request, "User successfully created.")
        return redirect("users:index")


class UserCreateView(UserViewMixin, DashboardView):
    """新建用户表单"""

    def get(self, request):
        return self.create(request)

    def create(self, request):
        return self.view("users.create", {"roles": self.role_choices()})


class UserEditView(UserViewMixin, DashboardView):
    """编辑用户表单(GET)和保存修改(POST)"""

    def get(self, request, user_id):
        return self.edit(request, user_id)

    def post(self, request, user_id):
        return self.update(request, user_id=user_id)

    def edit(self, request, user_id):
        user = self.user_service.get_by_id_with(user_id, "roles")
        if user is None:
            messages.error(request, "User does not exist.")
            return redirect("users:index")

        role_names = sorted(role.name for role in user.get_roles())
        current_roles = ", ".join(role_names) if role_names else "Not Available"

        return self.view(
            "users.edit",
            {"user": user, "current_roles": current_roles, "roles": self.role_choices()},
        )

    @method_decorator(log_action("更新用户"))
    def update(self, request, user_id):
        try:
            self.user_service.update(request.POST, user_id, actor=request.user)
        except FormValidationException as e:
            return redirect_with_errors(
                request, "users:edit", user_id=user_id, message=e.message, errors=e.get_errors(), data=request.POST
            )
        except UsersException as e:
            messages.error(request, e.message)
            return redirect("users:index")

        messages.success(request, "User successfully updated.")
        return redirect("users:edit", user_id=user_id)


class UserDeleteView(UserViewMixin, DashboardView):
    """删除用户，只接受 POST"""

    http_method_names = ["post"]

    def post(self, request, user_id):
        return self.delete(request, user_id=user_id)

    @method_decorator(log_action("删除用户"))
    def delete(self, request, user_id):
        try:
            self.user_service.delete(user_id, actor=request.user)
        except UsersException as e:
            messages.error(request, e.message)
            return redirect("users:index")

        messages.success(request, "User successfully deleted.")
        return redirect("users:index")
