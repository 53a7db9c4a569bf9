from .base import *  # noqa

# 测试设置
DEBUG = False
SECRET_KEY = "test-dashboard-secret-key"
ALLOWED_HOSTS = ["testserver", "localhost"]

# 使用内存数据库
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

# 密码哈希设置
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# 邮件设置
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

# 缓存设置
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "",
    }
}

# 安全设置
SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

# 日志设置
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "WARNING",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}

# 测试运行器设置
TEST_RUNNER = "django.test.runner.DiscoverRunner"

# API设置
REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "TEST_REQUEST_DEFAULT_FORMAT": "json",
}

# JWT设置
SIMPLE_JWT = {
    **SIMPLE_JWT,
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=5),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=1),
}

# 测试中不自动创建种子角色，避免干扰用例数据
DASHBOARD = {
    **DASHBOARD,
    "access_roles": ["admin"],
    "default_role": None,
    "seed_roles": [],
}
