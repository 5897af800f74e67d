"""
API 异常定义

所有业务错误都通过这里的异常抛出，由 core/error_handlers.py 统一转换为响应
"""


class APIException(Exception):
    """自定义 API 异常类"""

    status_code = 400
    error_code = 'BAD_REQUEST'

    def __init__(self, message, status_code=None, error_code=None, details=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details

    def to_response(self):
        """转换为 API 错误响应"""
        from api.base import ApiResponse
        return ApiResponse.error(self.message, self.status_code, self.error_code, self.details).to_response()


class ValidationError(APIException):
    """数据验证失败，details 为完整的错误消息列表"""

    status_code = 400
    error_code = 'VALIDATION_FAILED'

    def __init__(self, errors, message="Validation failed"):
        if isinstance(errors, str):
            errors = [errors]
        super().__init__(message, details=list(errors))
        self.errors = list(errors)


class NotFoundError(APIException):
    status_code = 404
    error_code = 'NOT_FOUND'


class ConflictError(APIException):
    status_code = 409
    error_code = 'CONFLICT'


class PersistenceError(APIException):
    """写入数据文件失败，对外只返回通用消息"""

    status_code = 500
    error_code = 'PERSISTENCE_FAILED'
