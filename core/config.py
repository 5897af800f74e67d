"""
Flask 应用配置

配置按环境分为 development / testing / production，
所有值都可以通过环境变量或 .env 文件覆盖。
"""

import os
from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def load_env_files():
    """
    加载 .env 文件

    优先使用 ENV_FILE 指定的文件；容器内（DOCKER_ENV=true）只读环境变量；
    否则尝试项目根目录下的 .env。已存在的环境变量不会被覆盖。

    Returns:
        实际加载的文件路径，未加载时为 None
    """
    path = os.environ.get('ENV_FILE')
    if path and not os.path.exists(path):
        print(f"⚠️  ENV_FILE 指向的文件不存在: {path}")
        return None
    if not path:
        if os.environ.get('DOCKER_ENV') == 'true':
            return None
        path = os.path.join(PROJECT_ROOT, '.env')
        if not os.path.exists(path):
            return None

    load_dotenv(path)
    print(f"📄 已加载环境变量文件: {path}")
    return path


loaded_env_file = load_env_files()


def _int_env(name, default):
    value = os.environ.get(name)
    return int(value) if value else default


class Config:
    """基础配置类"""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # 数据文件（每个集合一个 JSON 数组文件）
    DATA_DIR = os.environ.get('DATA_DIR') or os.path.join(PROJECT_ROOT, 'data')
    PROJECTS_FILE = os.environ.get('PROJECTS_FILE') or 'projects.json'
    PROGRESS_FILE = os.environ.get('PROGRESS_FILE') or 'progress.json'

    MAX_CONTENT_LENGTH = _int_env('MAX_CONTENT_LENGTH', 1024 * 1024)

    CORS_ORIGINS = [o.strip() for o in os.environ.get('CORS_ORIGINS', '*').split(',') if o.strip()]

    # 项目统计中的列表长度
    RECENT_PROJECTS_LIMIT = _int_env('RECENT_PROJECTS_LIMIT', 5)
    UPCOMING_DEADLINES_LIMIT = _int_env('UPCOMING_DEADLINES_LIMIT', 5)

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or os.path.join('logs', 'progress_tracker.log')
    LOG_TO_FILE = False

    @staticmethod
    def init_app(app):
        # 返回 JSON 时保留中文字符
        app.json.ensure_ascii = False


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True


class TestingConfig(Config):
    """测试环境配置"""
    TESTING = True
    DEBUG = False
    DATA_DIR = os.environ.get('TEST_DATA_DIR') or os.path.join(Config.DATA_DIR, 'test')


class ProductionConfig(Config):
    """生产环境配置，日志额外写入滚动文件"""
    DEBUG = False
    LOG_TO_FILE = True


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
