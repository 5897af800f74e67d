#!/usr/bin/env python3
"""
Progress Tracker - Flask 应用入口

主要功能:
- Flask 应用初始化（.env 由 core.config 加载）
- JSON 数据文件存储
- API 路由注册
- 命令行数据初始化
"""

import os
from flask import Flask
from flask_cors import CORS

from models import store
from core.config import config
from core.middleware import setup_all_middleware

API_PREFIX = '/api'
VERSION = '1.0.0'


def create_app(config_name=None, **overrides):
    """
    应用工厂函数

    Args:
        config_name: development / testing / production，默认读取 FLASK_ENV
        **overrides: 覆盖配置项（如测试时的 DATA_DIR）
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')
    config_class = config.get(config_name, config['default'])

    app = Flask(__name__)
    app.config.from_object(config_class)
    app.config.update(overrides)
    config_class.init_app(app)

    store.init_app(app)

    CORS(app,
         origins=app.config['CORS_ORIGINS'],
         allow_headers=['Content-Type'],
         methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'])

    setup_all_middleware(app)
    register_blueprints(app)
    register_commands(app)

    return app


def register_blueprints(app):
    """注册根路由和 API 蓝图"""
    from api import ApiResponse, projects_bp, progress_bp, dashboard_bp

    @app.route('/')
    def index():
        return ApiResponse.success(
            data={
                'service': 'Progress Tracker API',
                'version': VERSION,
                'endpoints': {
                    'projects': f'{API_PREFIX}/projects',
                    'progress': f'{API_PREFIX}/progress',
                    'dashboard': f'{API_PREFIX}/dashboard/stats',
                    'health': '/health',
                },
            },
            message='Welcome to Progress Tracker API'
        ).to_response()

    @app.route('/health')
    def health_check():
        data_dir = app.config['DATA_DIR']
        return ApiResponse.success(
            data={
                'status': 'healthy',
                'data_dir': data_dir,
                'data_dir_exists': os.path.isdir(data_dir)
            },
            message='Service is healthy'
        ).to_response()

    app.register_blueprint(projects_bp, url_prefix=f'{API_PREFIX}/projects')
    app.register_blueprint(progress_bp, url_prefix=f'{API_PREFIX}/progress')
    app.register_blueprint(dashboard_bp, url_prefix=f'{API_PREFIX}/dashboard')


def register_commands(app):
    """注册 flask 命令行命令"""

    @app.cli.command('init-data')
    def init_data():
        """创建缺失的数据文件"""
        store.ensure_collections()
        print(f'Data files ready in {app.config["DATA_DIR"]}')

    @app.cli.command('reset-data')
    def reset_data():
        """清空项目和进度回报"""
        if store.reset():
            print('All collections cleared.')
        else:
            print('Failed to reset data files, see log for details.')


app = create_app()


if __name__ == '__main__':
    port = int(os.environ.get('PORT', 3000))
    host = os.environ.get('HOST', '127.0.0.1')

    with app.app_context():
        store.ensure_collections()

    print("🚀 启动 Progress Tracker 服务器...")
    print(f"📍 地址: http://{host}:{port}")
    print(f"📁 数据目录: {app.config['DATA_DIR']}")

    app.run(host=host, port=port, debug=app.config['DEBUG'])
