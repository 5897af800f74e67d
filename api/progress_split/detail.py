"""
进度回报详情API - 获取和删除单个回报
"""

def register_routes(bp):
    """注册路由"""
    from models import ProgressReport
    from ..base import ApiResponse

    @bp.route('/<int:report_id>', methods=['GET'])
    def get_progress(report_id):
        """获取进度回报详情"""
        report = ProgressReport.get_or_404(report_id)
        return ApiResponse.success(report, "Progress report retrieved successfully").to_response()

    @bp.route('/<int:report_id>', methods=['DELETE'])
    def delete_progress(report_id):
        """删除进度回报"""
        deleted = ProgressReport.delete(report_id)
        return ApiResponse.success(deleted, "Progress report deleted successfully").to_response()
