"""
API 蓝图包

包含所有 API 相关的蓝图和工具函数
"""

from .base import ApiResponse
from .projects import projects_bp
from .progress_split import progress_bp
from .dashboard import dashboard_bp

__all__ = [
    'ApiResponse',
    'projects_bp',
    'progress_bp',
    'dashboard_bp',
]
