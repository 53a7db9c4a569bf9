from rest_framework import serializers

from ..models import Role, User


class UserListSerializer(serializers.ModelSerializer):
    """
    用户列表和详情的序列化
    """

    roles = serializers.SlugRelatedField(slug_field="slug", many=True, read_only=True)
    role_names = serializers.SerializerMethodField()
    date_joined = serializers.DateTimeField(read_only=True, format="%Y-%m-%d %H:%M:%S")

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "phone",
            "is_active",
            "roles",
            "role_names",
            "date_joined",
        ]

    def get_role_names(self, obj):
        """角色名称，按名称排序后用逗号连接"""
        names = sorted(role.name for role in obj.roles.all())
        return ", ".join(names) if names else "Not Available"


class UserWriteSerializer(serializers.Serializer):
    """
    创建和修改用户的请求体，仅用于接口文档；校验由服务层的表单完成
    """

    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, max_length=11)
    password = serializers.CharField(required=False, write_only=True, style={"input_type": "password"})
    password_confirmation = serializers.CharField(required=False, write_only=True, style={"input_type": "password"})
    roles = serializers.SlugRelatedField(slug_field="slug", many=True, required=False, queryset=Role.objects.all())
