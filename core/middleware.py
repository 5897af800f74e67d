"""
中间件入口

日志 → 请求日志 → 错误处理，最后检查数据目录
"""

import os

from .logging_config import setup_logging, setup_request_logging
from .error_handlers import setup_error_handlers


def check_data_dir(app):
    """启动时报告数据目录状态；目录缺失不是错误，首次写入时会自动创建"""
    data_dir = app.config['DATA_DIR']
    if os.path.isdir(data_dir):
        app.logger.info(f"Using data directory {data_dir}")
    elif os.path.exists(data_dir):
        app.logger.error(f"Data path is not a directory, writes will fail: {data_dir}")
    else:
        app.logger.warning(f"Data directory {data_dir} does not exist yet, it will be created on first write")


def setup_all_middleware(app):
    setup_logging(app)
    setup_request_logging(app)
    setup_error_handlers(app)
    check_data_dir(app)
