import logging

logger = logging.getLogger("apps")


def create_default_roles(sender, **kwargs):
    """迁移完成后创建 settings.DASHBOARD["seed_roles"] 中配置的角色"""
    from users.conf import get_dashboard_config
    from users.models import Role

    using = kwargs.get("using", "default")
    for seed in get_dashboard_config().seed_roles:
        role, created = Role.objects.using(using).get_or_create(slug=seed.slug, defaults={"name": seed.name})
        if created:
            logger.info(f"Created default role: {role.slug}")
