from django.conf import settings
from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.contrib.staticfiles.urls import staticfiles_urlpatterns
from django.urls import include, path
from django.views.generic import RedirectView
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework import routers
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from users.views import api

# 创建默认路由器
router = routers.DefaultRouter()

router.register(r"users", api.UserViewSet, basename="user")  # 用户管理
router.register(r"roles", api.RoleViewSet, basename="role")  # 角色(只读)

# 仪表盘页面
urlpatterns = [
    path(
        "dashboard/login/",
        auth_views.LoginView.as_view(template_name="dashboard/login.html", redirect_authenticated_user=True),
        name="login",
    ),
    path("dashboard/logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("dashboard/", RedirectView.as_view(pattern_name="users:index"), name="dashboard"),
    path("dashboard/users/", include("users.urls")),
]

# 开发环境静态文件服务
if settings.DEBUG:
    urlpatterns += staticfiles_urlpatterns()

# API URL配置
urlpatterns += [
    # 后台管理
    path(settings.ADMIN_URL, admin.site.urls),
    # API基础路由
    path("api/", include(router.urls)),
    # JWT令牌
    path("api/token/", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    # API文档相关
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("swagger/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
]
