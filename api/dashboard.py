"""
仪表盘API
"""

from flask import Blueprint

from models import Project, ProgressReport
from core.stats import dashboard_overview
from .base import ApiResponse

dashboard_bp = Blueprint('dashboard', __name__)


@dashboard_bp.route('/stats', methods=['GET'])
def get_dashboard_stats():
    """获取仪表盘统计数据"""
    stats = dashboard_overview(Project.all(), ProgressReport.all())
    return ApiResponse.success(stats, "Dashboard stats retrieved successfully").to_response()
