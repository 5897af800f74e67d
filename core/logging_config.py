"""
日志配置和请求日志中间件

包含应用日志配置和HTTP请求/响应日志记录功能
"""

import os
import time
import logging
from logging.handlers import RotatingFileHandler
from flask import request, g

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

# 超过该时长（秒）的请求记为慢请求
SLOW_REQUEST_SECONDS = 1.0


def setup_logging(app):
    """配置日志系统"""
    level_name = app.config.get('LOG_LEVEL', 'INFO')
    if app.debug:
        level_name = 'DEBUG'
    level = getattr(logging, str(level_name).upper(), logging.INFO)

    if not app.debug:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT + ' [in %(pathname)s:%(lineno)d]'
        )
    else:
        logging.basicConfig(
            level=level,
            format=LOG_FORMAT
        )

    logging.getLogger('models').setLevel(level)
    app.logger.setLevel(level)

    if app.config.get('LOG_TO_FILE') and not app.debug:
        setup_file_logging(app, level)


def setup_file_logging(app, level=logging.INFO):
    """日志同时写入滚动文件（10MB x 10）"""
    log_file = app.config['LOG_FILE']
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=10, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT + ' [in %(pathname)s:%(lineno)d]'))
    file_handler.setLevel(level)

    app.logger.addHandler(file_handler)
    logging.getLogger('models').addHandler(file_handler)
    app.logger.info(f"Writing logs to {log_file}")


def setup_request_logging(app):
    """配置请求日志中间件"""

    @app.before_request
    def before_request():
        """请求开始前的处理"""
        g.start_time = time.time()
        g.request_id = f"{int(time.time() * 1000)}-{id(request)}"

        app.logger.info(f"[REQUEST_START] {g.request_id} {request.method} {request.path}", extra={
            'request_id': g.request_id,
            'method': request.method,
            'path': request.path,
            'remote_addr': request.remote_addr,
            'query_args': dict(request.args) if request.args else {},
        })

        if request.is_json and request.method in ['POST', 'PUT', 'PATCH']:
            json_data = request.get_json(silent=True)
            if isinstance(json_data, dict):
                # 长文本只记录前 100 个字符
                filtered_data = {}
                for key, value in json_data.items():
                    if isinstance(value, str) and len(value) > 100:
                        filtered_data[key] = value[:100] + '...'
                    else:
                        filtered_data[key] = value

                app.logger.debug(f"[REQUEST_BODY] {g.request_id} {filtered_data}")
            elif json_data is None:
                app.logger.warning(f"[REQUEST_BODY_ERROR] {g.request_id} Failed to parse JSON")

    @app.after_request
    def after_request(response):
        """请求结束后的处理"""
        if hasattr(g, 'start_time'):
            duration = time.time() - g.start_time

            if response.status_code >= 500:
                log_level = 'error'
            elif response.status_code >= 400:
                log_level = 'warning'
            else:
                log_level = 'info'

            getattr(app.logger, log_level)(
                f"[REQUEST_END] {g.request_id} {request.method} {request.path} - "
                f"Status: {response.status_code}, Duration: {duration:.3f}s"
            )

            if duration > SLOW_REQUEST_SECONDS:
                app.logger.warning(f"[SLOW_REQUEST] {g.request_id} {request.method} {request.path} - Duration: {duration:.3f}s")

            response.headers['X-Response-Time'] = f"{duration:.3f}s"

        response.headers['X-Request-ID'] = getattr(g, 'request_id', 'unknown')
        return response
