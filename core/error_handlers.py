"""
错误处理器

业务异常、HTTP 错误和未捕获异常都转换为统一的错误响应
"""

from flask import request
from werkzeug.exceptions import HTTPException

from api.base import ApiResponse
from core.exceptions import APIException, PersistenceError

# HTTP 错误对外消息，未列出的状态码使用 werkzeug 自带的描述
HTTP_ERROR_MESSAGES = {
    400: 'The request could not be understood by the server',
    404: 'The requested resource was not found',
    413: 'Request size exceeds maximum allowed size',
    500: 'An unexpected error occurred',
}

HTTP_ERROR_CODES = {
    400: 'BAD_REQUEST',
    404: 'NOT_FOUND',
    405: 'METHOD_NOT_ALLOWED',
    413: 'PAYLOAD_TOO_LARGE',
    500: 'INTERNAL_ERROR',
}


def setup_error_handlers(app):
    """配置错误处理器"""

    @app.errorhandler(APIException)
    def handle_api_exception(error):
        if isinstance(error, PersistenceError) or error.status_code >= 500:
            app.logger.error(f"[{error.error_code}] {request.method} {request.path} - {error.message}")
        else:
            app.logger.warning(
                f"[{error.error_code}] {request.method} {request.path} - {error.message}"
                + (f" {error.details}" if error.details else '')
            )
        return error.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        code = error.code or 500
        if code == 405:
            message = f'The {request.method} method is not allowed for this endpoint'
        else:
            message = HTTP_ERROR_MESSAGES.get(code, error.description)

        log = app.logger.info if code == 404 else app.logger.warning
        log(f"HTTP {code}: {request.method} {request.path}")
        return ApiResponse.error(message, code, HTTP_ERROR_CODES.get(code)).to_response()

    @app.errorhandler(Exception)
    def handle_unexpected_exception(error):
        """记录完整堆栈，对外只返回通用消息"""
        app.logger.exception(f"Unhandled exception: {request.method} {request.path}")
        return ApiResponse.error(HTTP_ERROR_MESSAGES[500], 500, 'INTERNAL_ERROR').to_response()
