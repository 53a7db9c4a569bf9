from django.urls import path

from users.views import dashboard

app_name = "users"

urlpatterns = [
    # 用户列表(GET)，保存新用户(POST)
    path("", dashboard.UserIndexView.as_view(), name="index"),
    # 新建用户表单
    path("create/", dashboard.UserCreateView.as_view(), name="create"),
    # 编辑用户表单(GET)，保存修改(POST)
    path("<int:user_id>/edit/", dashboard.UserEditView.as_view(), name="edit"),
    # 删除用户
    path("<int:user_id>/delete/", dashboard.UserDeleteView.as_view(), name="delete"),
]
