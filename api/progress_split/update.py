"""
更新进度回报API
"""

def register_routes(bp):
    """注册路由"""
    from models import ProgressReport
    from core.decorators import require_json
    from ..base import ApiResponse, validate_json_request

    @bp.route('/<int:report_id>', methods=['PUT', 'PATCH'])
    @require_json
    def update_progress(report_id):
        """更新进度回报（合并更新，合并后的记录重新验证）"""
        report = ProgressReport.get_or_404(report_id)
        data = validate_json_request(optional_fields=list(ProgressReport.fields))
        updated = ProgressReport.update(report, data)

        return ApiResponse.success(updated, "Progress report updated successfully").to_response()
