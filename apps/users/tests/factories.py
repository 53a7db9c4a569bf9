import factory
from django.contrib.auth import get_user_model
from factory.django import DjangoModelFactory, Password

from users.models import Role

User = get_user_model()

PASSWORD = "Tr1cky-Ledger-88"


class RoleFactory(DjangoModelFactory):
    """角色工厂类"""

    class Meta:
        model = Role
        django_get_or_create = ("slug",)

    name = factory.Sequence(lambda n: f"Role {n}")
    slug = factory.Sequence(lambda n: f"role-{n}")


class UserFactory(DjangoModelFactory):
    """用户工厂类"""

    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    first_name = "Ada"
    last_name = "Lovelace"
    password = Password(PASSWORD)
    is_active = True
    is_staff = False
    is_superuser = False

    @factory.post_generation
    def roles(self, create, extracted, **kwargs):
        if not create:
            return

        if extracted:
            self.roles.set(extracted)


class DashboardUserFactory(UserFactory):
    """拥有 admin 角色、可以进入仪表盘的用户"""

    @factory.post_generation
    def roles(self, create, extracted, **kwargs):
        if not create:
            return

        if extracted is None:
            extracted = [RoleFactory(slug="admin", name="Administrator")]
        self.roles.set(extracted)


class StaffUserFactory(UserFactory):
    """职员用户工厂类"""

    is_staff = True


class SuperUserFactory(UserFactory):
    """超级用户工厂类"""

    is_staff = True
    is_superuser = True
