from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from users.models import User
from users.tests.factories import PASSWORD, DashboardUserFactory, RoleFactory, UserFactory
from utils.error import ErrorCode


class UserApiTestCase(APITestCase):
    def setUp(self):
        self.admin_role = RoleFactory(slug="admin", name="Administrator")
        self.editor_role = RoleFactory(slug="editor", name="Editor")
        self.admin = DashboardUserFactory(username="admin", roles=[self.admin_role])
        self.client.force_authenticate(user=self.admin)

        self.list_url = reverse("user-list")


class UserApiAccessTests(APITestCase):
    """接口认证和权限测试"""

    def test_unauthenticated(self):
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_without_dashboard_access(self):
        self.client.force_authenticate(user=UserFactory())
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_jwt_token(self):
        user = DashboardUserFactory()
        response = self.client.post(reverse("token_obtain_pair"), {"username": user.username, "password": PASSWORD})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get(reverse("user-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)


class UserApiReadTests(UserApiTestCase):
    """用户查询接口测试"""

    def test_list(self):
        UserFactory(roles=[self.editor_role])

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["code"], 200)
        self.assertEqual(response.data["data"]["pagination"]["total"], 2)
        self.assertEqual(len(response.data["data"]["list"]), 2)
        self.assertNotIn("password", response.data["data"]["list"][0])

    def test_filter_by_role(self):
        editor = UserFactory(roles=[self.editor_role])

        response = self.client.get(self.list_url, {"roles__slug": "editor"})

        self.assertEqual([item["id"] for item in response.data["data"]["list"]], [editor.pk])

    def test_search(self):
        UserFactory(username="grace")

        response = self.client.get(self.list_url, {"search": "grace"})

        self.assertEqual([item["username"] for item in response.data["data"]["list"]], ["grace"])

    @override_settings(DASHBOARD={"per_page": 1})
    def test_page_size_from_settings(self):
        UserFactory()

        response = self.client.get(self.list_url)

        self.assertEqual(len(response.data["data"]["list"]), 1)
        self.assertEqual(response.data["data"]["pagination"]["pages"], 2)

    def test_retrieve(self):
        user = UserFactory(roles=[self.editor_role, self.admin_role])

        response = self.client.get(reverse("user-detail", args=[user.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["username"], user.username)
        self.assertCountEqual(response.data["data"]["roles"], ["admin", "editor"])
        self.assertEqual(response.data["data"]["role_names"], "Administrator, Editor")

    def test_retrieve_missing(self):
        response = self.client.get(reverse("user-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "User does not exist.")
        self.assertEqual(response.json()["code"], ErrorCode.RESOURCE_NOT_FOUND.code)
        self.assertIsInstance(response.json()["code"], int)


class UserApiWriteTests(UserApiTestCase):
    """用户写接口测试"""

    def user_data(self, **overrides):
        data = {
            "username": "grace",
            "email": "grace@example.com",
            "first_name": "Grace",
            "last_name": "Hopper",
            "password": PASSWORD,
            "password_confirmation": PASSWORD,
            "roles": ["editor"],
        }
        data.update(overrides)
        return data

    def test_create(self):
        response = self.client.post(self.list_url, self.user_data())

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["roles"], ["editor"])
        self.assertTrue(User.objects.get(username="grace").check_password(PASSWORD))

    def test_create_invalid(self):
        response = self.client.post(self.list_url, self.user_data(email="not-an-email"))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "The user could not be created.")
        self.assertIn("email", response.data["data"]["errors"])
        self.assertEqual(response.json()["code"], ErrorCode.PARAM_ERROR.code)
        self.assertIsInstance(response.json()["data"]["errors"]["email"][0], str)

    def test_update(self):
        user = UserFactory(username="grace", email="grace@example.com", roles=[self.editor_role])

        response = self.client.put(
            reverse("user-detail", args=[user.pk]),
            self.user_data(first_name="Amazing", password="", password_confirmation="", roles=["admin"]),
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["first_name"], "Amazing")
        self.assertEqual(response.data["data"]["roles"], ["admin"])

    def test_update_missing(self):
        response = self.client.put(reverse("user-detail", args=[9999]), self.user_data())
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_patch_not_allowed(self):
        user = UserFactory()
        response = self.client.patch(reverse("user-detail", args=[user.pk]), {"first_name": "x"})
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_destroy(self):
        user = UserFactory()

        response = self.client.delete(reverse("user-detail", args=[user.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.filter(pk=user.pk).exists())

    def test_destroy_self(self):
        response = self.client.delete(reverse("user-detail", args=[self.admin.pk]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "You cannot delete your own account.")
        self.assertEqual(response.json()["code"], ErrorCode.OPERATION_FAILED.code)


class RoleApiTests(UserApiTestCase):
    """角色接口测试"""

    def test_list_ordered_by_name(self):
        RoleFactory(slug="viewer", name="Viewer")

        response = self.client.get(reverse("role-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [item["slug"] for item in response.data["data"]["list"]],
            ["admin", "editor", "viewer"],
        )

    def test_retrieve_missing_role(self):
        response = self.client.get(reverse("role-detail", args=[9999]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()["code"], ErrorCode.RESOURCE_NOT_FOUND.code)

    def test_read_only(self):
        response = self.client.post(reverse("role-list"), {"slug": "new", "name": "New"})
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
