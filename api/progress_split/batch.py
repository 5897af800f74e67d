"""
批量进度回报操作API - 批量更新协助状态
"""

def register_routes(bp):
    """注册路由"""
    from models import ProgressReport
    from core.decorators import require_json
    from ..base import ApiResponse, validate_json_request, parse_id_list

    @bp.route('/batch/help-status', methods=['PATCH'])
    @require_json
    def batch_update_help_status():
        """
        批量更新协助状态

        请求体: {"progressIds": [1, 2], "needHelp": "是"}
        不存在的 ID 会被跳过，返回实际更新的数量
        """
        data = validate_json_request(required_fields=['progressIds', 'needHelp'])
        report_ids = parse_id_list(data, 'progressIds')
        updated = ProgressReport.batch_update_help_status(report_ids, data['needHelp'])

        return ApiResponse.success(
            {'updatedCount': len(updated), 'items': updated},
            f"Successfully updated help status of {len(updated)} progress reports"
        ).to_response()
