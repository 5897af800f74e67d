"""
创建进度回报API
"""

def register_routes(bp):
    """注册路由"""
    from models import ProgressReport
    from core.decorators import require_json
    from ..base import ApiResponse, validate_json_request

    @bp.route('', methods=['POST'])
    @require_json
    def create_progress():
        """
        新增进度回报

        先完整验证，再检查项目是否存在，全部通过后才写入文件
        """
        data = validate_json_request(optional_fields=list(ProgressReport.fields))
        report = ProgressReport.create(data)

        return ApiResponse.created(report, "Progress report created successfully").to_response()
