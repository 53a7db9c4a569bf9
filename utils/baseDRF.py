import logging

from django.db import models
from rest_framework import serializers, viewsets

from utils.response import success_response

logger = logging.getLogger("apps")


class BaseEntity(models.Model):
    """
    抽象基类，提供状态、备注、创建和更新时间等公共字段
    """

    status = models.BooleanField(default=True, verbose_name="状态", db_index=True)
    remark = models.CharField(max_length=500, null=True, blank=True, verbose_name="备注")
    create_date = models.DateTimeField(auto_now_add=True, editable=False, verbose_name="创建时间")
    update_date = models.DateTimeField(auto_now=True, verbose_name="更新时间")

    class Meta:
        ordering = ["-create_date", "-id"]  # 默认按创建时间和ID降序排列
        abstract = True

    def __str__(self):
        """默认返回name，没有name时返回类名加主键"""
        return getattr(self, "name", None) or f"{self.__class__.__name__}_{self.pk}"


class BaseSerializer(serializers.ModelSerializer):
    """
    序列化器基类，用于序列化 BaseEntity 中的公共字段
    """

    id = serializers.IntegerField(read_only=True)
    create_time = serializers.DateTimeField(source="create_date", read_only=True, format="%Y-%m-%d %H:%M:%S")
    update_time = serializers.DateTimeField(source="update_date", read_only=True, format="%Y-%m-%d %H:%M:%S")
    status_display = serializers.SerializerMethodField()

    class Meta:
        fields = ["id", "status", "status_display", "remark", "create_time", "update_time"]
        read_only_fields = ["id", "create_time", "update_time"]

    def get_status_display(self, obj):
        """获取状态的显示值"""
        return "启用" if obj.status else "禁用"


class CoreViewSet(viewsets.GenericViewSet):
    """
    API基类，查询走 queryset，写操作交给 service 对象
    """

    service_class = None
    service = None

    # 需要记录日志的方法
    log_methods = ["POST", "PUT", "DELETE"]

    def get_service(self):
        """返回注入的 service，未注入时按 service_class 构造"""
        if self.service is None:
            assert self.service_class is not None, (
                f"'{self.__class__.__name__}' should either include a `service_class` attribute, "
                "or pass `service` to as_view()."
            )
            self.service = self.service_class()
        return self.service

    def log_operation(self, request, action, object_id=None, detail=None):
        """记录操作日志"""
        if request.method not in self.log_methods:
            return

        logger.info(
            f"Operation Log: {action}",
            extra={
                "data": {
                    "user": request.user.get_username(),
                    "action": action,
                    "model": self.get_queryset().model.__name__,
                    "object_id": object_id,
                    "detail": detail or "",
                    "ip": request.META.get("REMOTE_ADDR"),
                    "method": request.method,
                    "path": request.path,
                }
            },
        )

    def list(self, request, *args, **kwargs):
        """获取对象列表"""
        queryset = self.filter_queryset(self.get_queryset())
        page = self.paginate_queryset(queryset)

        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)

        serializer = self.get_serializer(queryset, many=True)
        return success_response(data=serializer.data, message="获取成功")

    def retrieve(self, request, *args, **kwargs):
        """获取单个对象"""
        serializer = self.get_serializer(self.get_object())
        return success_response(data=serializer.data, message="获取成功")
