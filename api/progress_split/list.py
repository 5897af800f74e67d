"""
进度回报列表API - 获取进度回报列表
"""


def progress_query_args():
    """读取列表查询参数，needHelp 支持 yes/no 写法"""
    from models import NeedHelp
    from ..base import get_request_args

    args = get_request_args()
    if 'needHelp' in args:
        args['needHelp'] = NeedHelp.coerce(args['needHelp'])
    return args


def register_routes(bp):
    """注册路由"""
    from models import ProgressReport
    from core.query import PROGRESS_QUERY, run_query
    from ..base import ApiResponse

    @bp.route('', methods=['GET'])
    def list_progress():
        """
        获取进度回报列表

        GET /api/progress?projectCode=PRJ-001&reporter=张小明&startDate=2025-06-01&endDate=2025-06-30&page=2&limit=10
        """
        args = progress_query_args()
        result = run_query(ProgressReport.all(), args, PROGRESS_QUERY)

        return ApiResponse.success(
            result['items'],
            "Progress reports retrieved successfully",
            pagination=result['pagination']
        ).to_response()
