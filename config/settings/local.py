from .base import *  # noqa
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = True
SECRET_KEY = env("DJANGO_SECRET_KEY", default="local-dashboard-secret-key")
ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# DATABASES
# ------------------------------------------------------------------------------
# 本地开发默认使用 sqlite，设置 DJANGO_USE_MYSQL 后沿用 base 中的 MySQL 配置
if not env.bool("DJANGO_USE_MYSQL", default=False):
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": str(ROOT_DIR / "db.sqlite3"),
            "ATOMIC_REQUESTS": True,
        }
    }

# CACHES
# ------------------------------------------------------------------------------
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "",
    }
}

# EMAIL
# ------------------------------------------------------------------------------
EMAIL_BACKEND = env("DJANGO_EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")

# SECURITY
# ------------------------------------------------------------------------------
CSRF_COOKIE_SECURE = False  # 在开发环境下可以设为 False
SESSION_COOKIE_SECURE = False

# LOGGING
# ------------------------------------------------------------------------------
LOGGING["loggers"]["apps"]["level"] = "DEBUG"
