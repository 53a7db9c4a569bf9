from typing import Any

from rest_framework import status
from rest_framework.response import Response


class ApiResponse(Response):
    """
    统一API响应格式
    {"code": ..., "message": ..., "data": ...}
    """

    def __init__(self, data: Any = None, message: str = "操作成功", code: int = status.HTTP_200_OK, headers: dict = None):
        """
        :param data: 响应数据，已经序列化好的 serializer.data
        :param message: 响应消息
        :param code: 业务状态码，同时作为HTTP状态码
        """
        super().__init__(data={"code": code, "message": message, "data": data}, status=code, headers=headers)


def success_response(data: Any = None, message: str = "操作成功", code: int = status.HTTP_200_OK) -> ApiResponse:
    """
    成功响应
    :param data: 响应数据
    :param message: 响应消息
    :param code: 状态码
    :return: ApiResponse
    """
    return ApiResponse(data=data, message=message, code=code)
