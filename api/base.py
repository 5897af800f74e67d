"""
API 基础工具

统一响应信封和请求解析。

成功: {"success": true, "message", "timestamp", "path", "data", ...extra}
失败: {"success": false, "error": {"message", "status_code", "code", "timestamp", "path", "details"}}
"""

from datetime import datetime, timezone
from flask import jsonify, request

from core.exceptions import APIException, ValidationError

# 列表接口识别的查询参数
QUERY_KEYS = (
    'projectCode', 'reporter', 'owner', 'status', 'needHelp',
    'startDate', 'endDate', 'search', 'sortBy', 'sortOrder', 'page', 'limit',
)


class ApiResponse:
    """响应构造器，视图中统一通过 ApiResponse.xxx(...).to_response() 返回"""

    def __init__(self, data=None, message="Success", status_code=200, error_code=None,
                 details=None, **extra):
        self.data = data
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details
        self.extra = extra

    @classmethod
    def success(cls, data=None, message="Success", status_code=200, **extra):
        return cls(data, message, status_code, **extra)

    @classmethod
    def created(cls, data=None, message="Created"):
        return cls(data, message, 201)

    @classmethod
    def error(cls, message="An error occurred", code=400, error_code=None, details=None):
        return cls(None, message, code, error_code=error_code, details=details)

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def to_dict(self):
        meta = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'path': request.path,
        }
        if self.ok:
            body = {'success': True, 'message': self.message, **meta, **self.extra}
            if self.data is not None:
                body['data'] = self.data
            return body

        error = {'message': self.message, 'status_code': self.status_code, **meta}
        if self.error_code:
            error['code'] = self.error_code
        if self.details:
            error['details'] = self.details
        return {'success': False, 'error': error}

    def to_response(self):
        return jsonify(self.to_dict()), self.status_code


def validate_json_request(required_fields=None, optional_fields=None):
    """
    读取 JSON 请求体

    Args:
        required_fields: 必须出现的字段，缺失时抛出 ValidationError
        optional_fields: 其余允许的字段，其他字段被丢弃

    Returns:
        只包含允许字段的字典
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise APIException("Request body must be a JSON object", 400, "INVALID_JSON")

    required_fields = list(required_fields or [])
    missing = [field for field in required_fields if field not in data]
    if missing:
        raise ValidationError(
            [f"Missing required field: {field}" for field in missing],
            message=f"Missing required fields: {', '.join(missing)}"
        )

    allowed = set(required_fields) | set(optional_fields or [])
    if not allowed:
        return data
    return {k: v for k, v in data.items() if k in allowed}


def get_request_args():
    """列表查询参数，去掉空白，空值不出现在结果中"""
    args = {}
    for key in QUERY_KEYS:
        value = request.args.get(key, '').strip()
        if value:
            args[key] = value
    return args


def parse_id_list(data, field):
    ids = data.get(field)
    if not isinstance(ids, list) or not ids:
        raise ValidationError([f"{field} must be a non-empty list of ids"])
    return ids
