import os
from datetime import timedelta
from pathlib import Path

import environ

# START
# ------------------------------------------------------------------------------
ROOT_DIR = Path(__file__).resolve(strict=True).parent.parent.parent

env = environ.Env()

READ_DOT_ENV_FILE = env.bool("DJANGO_READ_DOT_ENV_FILE", default=True)
if READ_DOT_ENV_FILE:
    env.read_env(str(ROOT_DIR / ".env"))

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = env.bool("DJANGO_DEBUG", default=False)
SECRET_KEY = env.str("DJANGO_SECRET_KEY", default="change_me_in_production")
TIME_ZONE = "Asia/Shanghai"
LANGUAGE_CODE = "en-us"
SITE_ID = 1
USE_I18N = True
USE_TZ = True
LOCALE_PATHS = [str(ROOT_DIR / "locale")]

# SECURITY
# ------------------------------------------------------------------------------
ALLOWED_HOSTS = env.list("DJANGO_ALLOWED_HOSTS", default=["localhost", "127.0.0.1"])

# DATABASES
# ------------------------------------------------------------------------------
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.mysql",
        "NAME": env.str("MYSQL_DATABASE", default="dashboard"),
        "USER": env.str("MYSQL_USER", default="root"),
        "PASSWORD": env.str("MYSQL_PASSWORD", default="root"),
        "HOST": env.str("MYSQL_HOST", default="localhost"),
        "PORT": env.str("MYSQL_PORT", default="3306"),
        "CONN_MAX_AGE": env.int("MYSQL_CONN_MAX_AGE", default=60 * 60 * 6),
        "ATOMIC_REQUESTS": True,
        "OPTIONS": {
            "init_command": 'SET sql_mode="STRICT_TRANS_TABLES"',
            "charset": "utf8mb4",
        },
    }
}
# 默认自动字段设置为 BigAutoField
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# URLS
# ------------------------------------------------------------------------------
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# APPS
# ------------------------------------------------------------------------------
INSTALLED_APPS = [
    # Django自带的应用
    "django.contrib.auth",  # 用户认证系统
    "django.contrib.contenttypes",  # 内容类型框架
    "django.contrib.sessions",  # 会话框架，保存表单错误和旧输入
    "django.contrib.messages",  # 消息框架，用于一次性提示
    "django.contrib.staticfiles",  # 静态文件管理
    "django.contrib.admin",  # 管理后台
    # 第三方应用
    "rest_framework",  # Django REST框架
    "drf_spectacular",  # 用于生成API文档
    "django_filters",  # 用于 Django 的过滤器
    # 本地应用
    "users",
]

# AUTHENTICATION
# ------------------------------------------------------------------------------
AUTHENTICATION_BACKENDS = [
    "django.contrib.auth.backends.ModelBackend",
]
AUTH_USER_MODEL = "users.User"
LOGIN_URL = "login"
LOGIN_REDIRECT_URL = "users:index"
LOGOUT_REDIRECT_URL = "login"

# PASSWORDS
# ------------------------------------------------------------------------------
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.Argon2PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2PasswordHasher",
    "django.contrib.auth.hashers.PBKDF2SHA1PasswordHasher",
]
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# MIDDLEWARE
# ------------------------------------------------------------------------------
MIDDLEWARE = [
    "utils.logging.RequestIdMiddleware",  # 添加请求ID中间件
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
    "utils.logging.setup_request_logging",  # 请求日志中间件
]

# STATIC
# ------------------------------------------------------------------------------
STATIC_ROOT = str(ROOT_DIR / "staticfiles")
STATIC_URL = "/static/"

# TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [str(ROOT_DIR / "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.template.context_processors.i18n",
                "django.template.context_processors.static",
                "django.template.context_processors.tz",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

# SESSIONS & MESSAGES
# ------------------------------------------------------------------------------
SESSION_ENGINE = "django.contrib.sessions.backends.db"
MESSAGE_STORAGE = "django.contrib.messages.storage.fallback.FallbackStorage"

# SECURITY
# ------------------------------------------------------------------------------
SESSION_COOKIE_HTTPONLY = True
CSRF_COOKIE_HTTPONLY = True
X_FRAME_OPTIONS = "DENY"

# ADMIN
# ------------------------------------------------------------------------------
ADMIN_URL = "admin/"
ADMINS = [("""Dashboard""", "admin@example.com")]
MANAGERS = ADMINS

# LOGGING
# ------------------------------------------------------------------------------
LOGS_DIR = os.path.join(ROOT_DIR, "logs")
os.makedirs(LOGS_DIR, exist_ok=True)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    # 日志格式配置
    "formatters": {
        # 标准格式,包含基本的时间、文件等信息
        "standard": {
            "format": "[%(levelname)s][%(asctime)s][%(filename)s:%(lineno)d] %(message)s",
        },
        # 简单格式,只含日志级别和消息
        "simple": {
            "format": "[%(levelname)s] %(message)s",
        },
        # JSON格式,用于审计和安全日志
        "json": {
            "()": "utils.logging.CustomJsonFormatter",
            "default_fields": {"service": "dashboard"},
        },
    },
    "filters": {
        "request": {"()": "utils.logging.RequestFilter"},
    },
    # 日志处理器配置
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
        "file_handler": {
            "level": "INFO",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(LOGS_DIR, "info.log"),
            "when": "midnight",
            "interval": 1,
            "backupCount": 20,
            "formatter": "standard",
            "encoding": "utf-8",
        },
        "error_handler": {
            "level": "ERROR",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(LOGS_DIR, "err.log"),
            "when": "midnight",
            "interval": 1,
            "backupCount": 20,
            "formatter": "standard",
            "encoding": "utf-8",
        },
        "security_handler": {
            "level": "DEBUG",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(LOGS_DIR, "security.log"),
            "when": "midnight",
            "interval": 1,
            "backupCount": 30,
            "formatter": "json",
            "filters": ["request"],
            "encoding": "utf-8",
        },
        "audit_handler": {
            "level": "DEBUG",
            "class": "logging.handlers.TimedRotatingFileHandler",
            "filename": os.path.join(LOGS_DIR, "audit.log"),
            "when": "midnight",
            "interval": 1,
            "backupCount": 90,
            "formatter": "json",
            "filters": ["request"],
            "encoding": "utf-8",
        },
    },
    # 日志记录器配置
    "loggers": {
        "": {
            "handlers": ["console", "file_handler", "error_handler"],
            "level": "INFO",
            "propagate": True,
        },
        "apps": {
            "handlers": ["console", "file_handler", "error_handler"],
            "level": "INFO",
            "propagate": False,
        },
        "security": {
            "handlers": ["console", "security_handler"],
            "level": "INFO",
            "propagate": False,
        },
        # 审计日志记录器，记录用户的增删改
        "audit": {
            "handlers": ["console", "audit_handler"],
            "level": "INFO",
            "propagate": False,
        },
    },
}

# DRF
# -------------------------------------------------------------------------------
REST_FRAMEWORK = {
    # 默认分页类
    "DEFAULT_PAGINATION_CLASS": "utils.custom.CustomPagination",
    "PAGE_SIZE": 10,
    # 自定义的异常处理器
    "EXCEPTION_HANDLER": "utils.exception.custom_exception_handler",
    "DEFAULT_AUTHENTICATION_CLASSES": (
        # JWT身份验证
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        # 会话身份验证，仪表盘页面和API共用登录状态
        "rest_framework.authentication.SessionAuthentication",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ),
    "DEFAULT_PARSER_CLASSES": (
        "rest_framework.parsers.JSONParser",
        "rest_framework.parsers.FormParser",
        "rest_framework.parsers.MultiPartParser",
    ),
    # 只有拥有仪表盘访问权限的用户才能调用API
    "DEFAULT_PERMISSION_CLASSES": [
        "utils.custom.DashboardPermission",
    ],
    "DEFAULT_FILTER_BACKENDS": (
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.SearchFilter",
        "rest_framework.filters.OrderingFilter",
    ),
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "Dashboard API",
    "DESCRIPTION": "User and role management endpoints of the dashboard",
    "VERSION": "1.0.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=150),  # 访问令牌的有效期
    "REFRESH_TOKEN_LIFETIME": timedelta(days=1),  # 刷新令牌的有效期
}

# DASHBOARD
# ------------------------------------------------------------------------------
# 由 users.conf.DashboardConfig 校验
DASHBOARD = {
    # 拥有这些角色的非管理员用户也可以进入仪表盘
    "access_roles": env.list("DASHBOARD_ACCESS_ROLES", default=["admin"]),
    # 新建用户未选择角色时自动分配
    "default_role": env.str("DASHBOARD_DEFAULT_ROLE", default="registered"),
    # 迁移后自动创建的角色
    "seed_roles": [
        {"slug": "admin", "name": "Administrator"},
        {"slug": "registered", "name": "Registered"},
    ],
}
