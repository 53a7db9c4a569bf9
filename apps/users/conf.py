from functools import lru_cache
from typing import List, Optional

from django.conf import settings
from django.core.signals import setting_changed
from pydantic import BaseModel, Field, field_validator


class SeedRole(BaseModel):
    """迁移后自动创建的角色"""

    slug: str = Field(min_length=1, max_length=50, pattern=r"^[-a-zA-Z0-9_]+$")
    name: str = Field(min_length=1, max_length=50)


class DashboardConfig(BaseModel):
    """仪表盘配置，对应 settings.DASHBOARD"""

    access_roles: List[str] = Field(default_factory=lambda: ["admin"], description="可进入仪表盘的角色标识")
    default_role: Optional[str] = Field(default=None, description="新建用户未选角色时分配的角色标识")
    per_page: int = Field(default=10, ge=1, le=100, description="API 每页条数")
    seed_roles: List[SeedRole] = Field(default_factory=list, description="迁移后自动创建的角色")

    @field_validator("default_role", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        # 环境变量里的空字符串表示不分配
        return value or None


@lru_cache(maxsize=None)
def get_dashboard_config() -> DashboardConfig:
    return DashboardConfig(**(getattr(settings, "DASHBOARD", None) or {}))


def _reset_dashboard_config(*, setting, **kwargs):
    if setting == "DASHBOARD":
        get_dashboard_config.cache_clear()


setting_changed.connect(_reset_dashboard_config)
