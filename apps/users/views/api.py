from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view

from utils.baseDRF import CoreViewSet
from utils.custom import CustomPagination
from utils.response import success_response
from ..conf import get_dashboard_config
from ..exceptions import UsersException
from ..models import Role, User
from ..serializers.role import RoleSerializer
from ..serializers.user import UserListSerializer, UserWriteSerializer
from ..services.role import RoleService
from ..services.user import UserService


class DashboardPagination(CustomPagination):
    """每页条数取 DASHBOARD["per_page"]"""

    def get_page_size(self, request):
        self.page_size = get_dashboard_config().per_page
        return super().get_page_size(request)


@extend_schema_view(
    list=extend_schema(summary="用户列表", tags=["users"]),
    retrieve=extend_schema(
        summary="用户详情",
        responses={200: UserListSerializer, 404: OpenApiResponse(description="用户不存在")},
        tags=["users"],
    ),
    create=extend_schema(
        summary="创建用户",
        request=UserWriteSerializer,
        responses={201: UserListSerializer, 400: OpenApiResponse(description="参数校验失败")},
        tags=["users"],
    ),
    update=extend_schema(
        summary="修改用户",
        description="密码留空表示不修改，roles 为修改后的全部角色标识",
        request=UserWriteSerializer,
        responses={200: UserListSerializer, 400: OpenApiResponse(description="参数校验失败")},
        tags=["users"],
    ),
    destroy=extend_schema(
        summary="删除用户",
        responses={200: OpenApiResponse(description="删除成功"), 404: OpenApiResponse(description="用户不存在")},
        tags=["users"],
    ),
)
class UserViewSet(CoreViewSet):
    """用户管理：增删改查，写操作交给 UserService"""

    queryset = User.objects.all()
    serializer_class = UserListSerializer
    service_class = UserService
    pagination_class = DashboardPagination
    lookup_value_regex = r"\d+"
    filterset_fields = ["is_active", "roles__slug"]
    search_fields = ("username", "email", "first_name", "last_name")
    ordering_fields = ("id", "username", "email", "date_joined")

    def get_queryset(self):
        return self.get_service().get_all_with("roles")

    def get_user(self, pk):
        user = self.get_service().get_by_id_with(pk, "roles")
        if user is None:
            raise UsersException.not_found(pk)
        self.check_object_permissions(self.request, user)
        return user

    def retrieve(self, request, pk=None):
        return success_response(data=self.get_serializer(self.get_user(pk)).data, message="获取成功")

    def create(self, request):
        user = self.get_service().create(request.data, actor=request.user)
        self.log_operation(request, "create", user.pk)
        return success_response(data=self.get_serializer(user).data, message="创建成功", code=201)

    def update(self, request, pk=None):
        user = self.get_service().update(request.data, pk, actor=request.user)
        self.log_operation(request, "update", user.pk)
        return success_response(data=self.get_serializer(user).data, message="更新成功")

    def destroy(self, request, pk=None):
        self.get_service().delete(pk, actor=request.user)
        self.log_operation(request, "delete", pk)
        return success_response(message="删除成功")


@extend_schema_view(
    list=extend_schema(summary="角色列表", tags=["roles"]),
    retrieve=extend_schema(summary="角色详情", tags=["roles"]),
)
class RoleViewSet(CoreViewSet):
    """角色只读接口，供前端渲染角色选项"""

    queryset = Role.objects.all()
    serializer_class = RoleSerializer
    service_class = RoleService
    pagination_class = DashboardPagination
    lookup_value_regex = r"\d+"
    filterset_fields = ["status"]
    search_fields = ("name", "slug")
    ordering_fields = ("name", "id")

    def get_queryset(self):
        return self.get_service().get_all()
