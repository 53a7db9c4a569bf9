"""
表单状态的一次性存储

校验失败后重定向时，把字段错误和用户刚提交的内容(旧输入)放进 session，
下一个请求读取一次后即清除。提示文字走 django.contrib.messages。
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from django.contrib import messages
from django.http import HttpRequest, HttpResponseRedirect
from django.shortcuts import redirect

from utils.logging import SensitiveDataFilter

FORM_STATE_SESSION_KEY = "_dashboard_form_state"


def old_input(data: Optional[Mapping], list_fields: Iterable[str] = ("roles",)) -> Dict[str, Any]:
    """
    提取可以回填到表单的旧输入，密码、令牌类字段一律丢弃
    :param data: request.POST 或普通字典
    :param list_fields: 多值字段，保留为列表
    """
    if not data:
        return {}

    list_fields = set(list_fields)
    result = {}
    for key in data.keys():
        if SensitiveDataFilter.is_sensitive(key):
            continue
        if key in list_fields:
            if hasattr(data, "getlist"):
                value = data.getlist(key)
            else:
                value = data[key]
            if isinstance(value, str):
                value = [value]
            result[key] = [str(item) for item in value or []]
        else:
            value = data[key]
            # QueryDict 的 __getitem__ 已返回最后一个值
            result[key] = value[-1] if isinstance(value, (list, tuple)) and value else value
    return result


def flash_form_state(request: HttpRequest, errors: Optional[Mapping] = None, data: Optional[Mapping] = None) -> None:
    """保存字段错误和旧输入，供下一个请求使用"""
    request.session[FORM_STATE_SESSION_KEY] = {
        "errors": {field: [str(message) for message in field_errors] for field, field_errors in (errors or {}).items()},
        "old": old_input(data),
    }


def pop_form_state(request: HttpRequest) -> Dict[str, Dict]:
    """读取并清除表单状态，没有时返回空的 errors/old"""
    state = request.session.pop(FORM_STATE_SESSION_KEY, None) or {}
    return {"errors": state.get("errors", {}), "old": state.get("old", {})}


def redirect_with_errors(
    request: HttpRequest,
    to: str,
    *args,
    message: Optional[str] = None,
    errors: Optional[Mapping] = None,
    data: Optional[Mapping] = None,
    **kwargs,
) -> HttpResponseRedirect:
    """
    提示错误、保存表单状态并重定向
    :param to: 路由名或URL，参数同 django.shortcuts.redirect
    :param message: 错误提示
    :param errors: 字段错误
    :param data: 提交的数据
    """
    if message:
        messages.error(request, message)
    if errors or data:
        flash_form_state(request, errors, data)
    return redirect(to, *args, **kwargs)
