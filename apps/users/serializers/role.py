from utils.baseDRF import BaseSerializer

from ..models import Role


class RoleSerializer(BaseSerializer):
    """
    角色序列化
    """

    class Meta(BaseSerializer.Meta):
        model = Role
        fields = ["id", "slug", "name", "status", "status_display", "remark", "create_time", "update_time"]
