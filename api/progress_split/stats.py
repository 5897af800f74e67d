"""
进度统计API
"""

def register_routes(bp):
    """注册路由"""
    from models import Project, ProgressReport
    from core.query import PROGRESS_QUERY, apply_filters, normalize_query_args
    from core.stats import summarize_filtered, summarize_progress
    from ..base import ApiResponse
    from .list import progress_query_args

    @bp.route('/stats/summary', methods=['GET'])
    def get_progress_stats():
        """全部回报的统计：总数、工时、本周、按项目、按回报人、最近趋势"""
        stats = summarize_progress(ProgressReport.all(), Project.all())
        return ApiResponse.success(stats, "Progress stats retrieved successfully").to_response()

    @bp.route('/stats/filtered', methods=['GET'])
    def get_filtered_stats():
        """按列表筛选条件统计（忽略分页）"""
        options = normalize_query_args(progress_query_args(), PROGRESS_QUERY)
        reports = apply_filters(ProgressReport.all(), options, PROGRESS_QUERY)

        return ApiResponse.success(
            summarize_filtered(reports),
            "Filtered progress stats retrieved successfully"
        ).to_response()
