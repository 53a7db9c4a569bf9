import json
import logging

from django.core.exceptions import PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from django.http import Http404
from django.test import RequestFactory, SimpleTestCase, TestCase
from django.urls import reverse
from django.utils.module_loading import import_string
from rest_framework.exceptions import NotAuthenticated

from config.settings import base as base_settings
from users.exceptions import FormValidationException, UsersException
from users.tests.factories import DashboardUserFactory
from utils.error import ErrorCode
from utils.exception import custom_exception_handler
from utils.logging import CustomJsonFormatter, SensitiveDataFilter


class ErrorTests(SimpleTestCase):
    """错误类型测试"""

    def test_form_validation_exception(self):
        exc = FormValidationException("The user could not be created.", {"email": ["Taken."]})

        self.assertEqual(exc.status_code, 400)
        self.assertEqual(exc.error_code, ErrorCode.PARAM_ERROR)
        self.assertEqual(exc.get_errors(), {"email": ["Taken."]})
        self.assertEqual(str(exc), "The user could not be created.")

    def test_users_exception_not_found(self):
        exc = UsersException.not_found(7)

        self.assertEqual(exc.status_code, 404)
        self.assertEqual(exc.message, "User does not exist.")
        self.assertEqual(exc.to_dict()["code"], ErrorCode.RESOURCE_NOT_FOUND.code)

    def test_users_exception_default(self):
        exc = UsersException("You cannot delete your own account.")
        self.assertEqual(exc.status_code, 400)
        self.assertEqual(exc.error_code, ErrorCode.OPERATION_FAILED)


class ExceptionHandlerTests(SimpleTestCase):
    """接口异常处理测试"""

    def handle(self, exc):
        return custom_exception_handler(exc, {"request": RequestFactory().get("/api/users/"), "view": None})

    def test_unhandled_exception_returns_json_500(self):
        with self.assertLogs("utils.exception", level="ERROR"):
            response = self.handle(RuntimeError("boom"))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data["code"], ErrorCode.SYSTEM_ERROR.code)

    def test_base_error_keeps_integer_code(self):
        response = self.handle(UsersException.not_found(7))

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], ErrorCode.RESOURCE_NOT_FOUND.code)
        self.assertEqual(response.data["message"], "User does not exist.")
        self.assertEqual(response.data["user_id"], 7)

    def test_form_errors_in_data(self):
        response = self.handle(FormValidationException("The user could not be created.", {"email": ["Taken."]}))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["code"], ErrorCode.PARAM_ERROR.code)
        self.assertEqual(response.data["data"], {"errors": {"email": ["Taken."]}})

    def test_django_404(self):
        response = self.handle(Http404())
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["code"], ErrorCode.RESOURCE_NOT_FOUND.code)

    def test_django_permission_denied(self):
        response = self.handle(PermissionDenied())
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.data["code"], ErrorCode.PERMISSION_DENIED.code)

    def test_model_validation_error(self):
        response = self.handle(DjangoValidationError({"email": ["Enter a valid email address."]}))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["data"], {"errors": {"email": ["Enter a valid email address."]}})

    def test_other_api_exception_delegated_to_drf(self):
        response = self.handle(NotAuthenticated())
        self.assertEqual(response.status_code, 401)
        self.assertIn("detail", response.data)


class LoggingTests(SimpleTestCase):
    """日志工具测试"""

    def test_sensitive_data_masked(self):
        data = {"username": "grace", "password": "secret", "nested": [{"access_token": "abc"}]}
        self.assertEqual(
            SensitiveDataFilter.filter_sensitive_data(data),
            {"username": "grace", "password": "******", "nested": [{"access_token": "******"}]},
        )

    def test_json_formatter(self):
        formatter = CustomJsonFormatter(default_fields={"service": "dashboard"})
        record = logging.LogRecord("audit", logging.INFO, __file__, 1, "User created", None, None)
        record.data = {"id": 1, "password": "secret"}

        output = json.loads(formatter.format(record))

        self.assertEqual(output["message"], "User created")
        self.assertEqual(output["service"], "dashboard")
        self.assertEqual(output["data"], {"id": 1, "password": "******"})


class RequestIdMiddlewareTests(TestCase):
    """请求ID中间件测试"""

    def test_request_id_header(self):
        self.client.force_login(DashboardUserFactory())

        response = self.client.get(reverse("users:index"), HTTP_X_REQUEST_ID="req-123")

        self.assertEqual(response["X-Request-ID"], "req-123")

    def test_request_id_generated(self):
        response = self.client.get(reverse("login"))
        self.assertTrue(response["X-Request-ID"])


class PasswordHasherSettingsTests(SimpleTestCase):
    """正式环境的密码哈希器依赖的库都已声明安装"""

    def test_hasher_libraries_importable(self):
        for path in base_settings.PASSWORD_HASHERS:
            hasher = import_string(path)()
            if hasher.library:
                hasher._load_library()
