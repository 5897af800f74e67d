"""
视图装饰器
"""

from functools import wraps
from flask import request

from .exceptions import APIException

BODY_METHODS = ('POST', 'PUT', 'PATCH')


def require_json(f):
    """写操作要求 Content-Type 为 application/json 且请求体是 JSON 对象"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if request.method in BODY_METHODS:
            if not request.is_json:
                raise APIException('Content-Type must be application/json', 400, 'INVALID_CONTENT_TYPE')
            if not isinstance(request.get_json(silent=True), dict):
                raise APIException('Request body must be a JSON object', 400, 'INVALID_JSON')
        return f(*args, **kwargs)
    return decorated_function
