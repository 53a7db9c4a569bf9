from django.contrib.auth.models import AbstractUser
from django.db import models

from utils.baseDRF import BaseEntity


class Role(BaseEntity):
    """角色"""

    name = models.CharField(max_length=50, unique=True, verbose_name="名称")
    slug = models.SlugField(max_length=50, unique=True, verbose_name="标识")

    class Meta(BaseEntity.Meta):
        ordering = ["name"]
        verbose_name = "角色"
        verbose_name_plural = verbose_name


class User(AbstractUser):
    """用户"""

    phone = models.CharField(max_length=11, null=True, blank=True, verbose_name="电话")
    roles = models.ManyToManyField(
        "Role",
        blank=True,
        related_name="users",
        verbose_name="角色",
    )

    class Meta(AbstractUser.Meta):
        ordering = ["id"]
        verbose_name = "用户"
        verbose_name_plural = verbose_name

    def __str__(self):
        return self.username

    def get_roles(self):
        """用户拥有的角色，prefetch 过 roles 时不会再查库"""
        return list(self.roles.all())

    def role_slugs(self):
        return {role.slug for role in self.get_roles()}
