from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import Role, User


class UserAdmin(DjangoUserAdmin):
    list_display = ("username", "email", "is_active", "is_staff")  # 显示字段
    search_fields = ("username", "email")  # 搜索字段
    list_filter = ("is_active", "is_staff", "roles")
    filter_horizontal = ("groups", "user_permissions", "roles")
    fieldsets = DjangoUserAdmin.fieldsets + (("仪表盘", {"fields": ("phone", "roles")}),)


class RoleAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "status")  # 显示字段
    search_fields = ("name", "slug")  # 搜索字段
    prepopulated_fields = {"slug": ("name",)}


# 注册模型及其自定义的 ModelAdmin
models_to_register = {
    User: UserAdmin,
    Role: RoleAdmin,
}

for model, admin_class in models_to_register.items():
    admin.site.register(model, admin_class)
