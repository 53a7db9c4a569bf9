import logging

from django.apps import AppConfig
from django.db.models.signals import post_migrate

logger = logging.getLogger(__name__)


class UsersConfig(AppConfig):
    name = "users"
    verbose_name = "用户管理"
    default_auto_field = "django.db.models.BigAutoField"

    def ready(self):
        """
        注册迁移后的信号处理，并提前校验 DASHBOARD 配置
        """
        from users.conf import get_dashboard_config
        from users.signals import create_default_roles

        post_migrate.connect(create_default_roles, sender=self)

        # 配置有误时在启动阶段就抛出 pydantic.ValidationError
        get_dashboard_config()
        logger.info("用户管理应用初始化完成")
