from django.test import TestCase, override_settings
from pydantic import ValidationError

from users.conf import DashboardConfig, get_dashboard_config
from users.models import Role
from users.signals import create_default_roles
from users.tests.factories import RoleFactory, UserFactory


class RoleModelTests(TestCase):
    """角色模型测试"""

    def test_str_returns_name(self):
        role = RoleFactory(name="Editor", slug="editor")
        self.assertEqual(str(role), "Editor")

    def test_default_ordering_by_name(self):
        RoleFactory(name="Zeta", slug="zeta")
        RoleFactory(name="Alpha", slug="alpha")
        self.assertEqual(list(Role.objects.values_list("slug", flat=True)), ["alpha", "zeta"])


class UserModelTests(TestCase):
    """用户模型测试"""

    def test_get_roles(self):
        editor = RoleFactory(name="Editor", slug="editor")
        admin = RoleFactory(name="Administrator", slug="admin")
        user = UserFactory(roles=[editor, admin])

        self.assertCountEqual(user.get_roles(), [editor, admin])
        self.assertEqual(user.role_slugs(), {"editor", "admin"})

    def test_get_roles_empty(self):
        user = UserFactory()
        self.assertEqual(user.get_roles(), [])

    def test_str_returns_username(self):
        user = UserFactory(username="ada")
        self.assertEqual(str(user), "ada")


class DashboardConfigTests(TestCase):
    """仪表盘配置测试"""

    def test_defaults(self):
        config = DashboardConfig()
        self.assertEqual(config.access_roles, ["admin"])
        self.assertIsNone(config.default_role)
        self.assertEqual(config.per_page, 10)

    def test_blank_default_role_is_none(self):
        self.assertIsNone(DashboardConfig(default_role="").default_role)

    def test_invalid_per_page(self):
        with self.assertRaises(ValidationError):
            DashboardConfig(per_page=0)

    def test_invalid_seed_role_slug(self):
        with self.assertRaises(ValidationError):
            DashboardConfig(seed_roles=[{"slug": "not a slug", "name": "Broken"}])

    @override_settings(DASHBOARD={"access_roles": ["editor"], "per_page": 25})
    def test_reads_settings(self):
        config = get_dashboard_config()
        self.assertEqual(config.access_roles, ["editor"])
        self.assertEqual(config.per_page, 25)


class CreateDefaultRolesTests(TestCase):
    """迁移后创建默认角色的信号测试"""

    @override_settings(
        DASHBOARD={
            "seed_roles": [
                {"slug": "admin", "name": "Administrator"},
                {"slug": "registered", "name": "Registered"},
            ]
        }
    )
    def test_creates_seed_roles_once(self):
        create_default_roles(sender=None, using="default")
        create_default_roles(sender=None, using="default")

        self.assertEqual(
            list(Role.objects.values_list("slug", "name")),
            [("admin", "Administrator"), ("registered", "Registered")],
        )

    @override_settings(DASHBOARD={"seed_roles": [{"slug": "admin", "name": "Administrator"}]})
    def test_keeps_existing_role_name(self):
        RoleFactory(slug="admin", name="Site admins")
        create_default_roles(sender=None, using="default")
        self.assertEqual(Role.objects.get(slug="admin").name, "Site admins")
