"""
进度回报快捷查询API - 按项目、按回报人、需要协助
"""

def register_routes(bp):
    """注册路由"""
    from flask import request
    from models import Project, ProgressReport
    from core.exceptions import ValidationError
    from core.query import SORT_ORDERS, filter_records, parse_positive_int, sort_records, PROGRESS_QUERY
    from ..base import ApiResponse

    def newest_first(reports):
        """按日期排序（默认新到旧）并截取 limit 条"""
        sort_order = request.args.get('sortOrder', 'desc').strip() or 'desc'
        if sort_order not in SORT_ORDERS:
            raise ValidationError([f'sortOrder must be one of: {", ".join(SORT_ORDERS)}'])

        limit = parse_positive_int(request.args.get('limit', '').strip(), 'limit')
        reports = sort_records(reports, 'date', sort_order)
        if limit:
            reports = reports[:limit]
        return reports

    @bp.route('/project/<project_code>', methods=['GET'])
    def get_project_progress(project_code):
        """获取特定项目的进度回报"""
        Project.get_by_code_or_404(project_code)

        reports = newest_first(ProgressReport.for_project(project_code))
        return ApiResponse.success(
            reports,
            "Project progress reports retrieved successfully",
            total=len(reports)
        ).to_response()

    @bp.route('/reporter/<reporter>', methods=['GET'])
    def get_reporter_progress(reporter):
        """获取特定回报人的进度回报，可按日期范围筛选"""
        date_range = {
            key: request.args.get(key, '').strip()
            for key in ('startDate', 'endDate')
        }
        reports = filter_records(ProgressReport.for_reporter(reporter), date_range, PROGRESS_QUERY)
        reports = newest_first(reports)

        return ApiResponse.success(
            reports,
            "Reporter progress reports retrieved successfully",
            total=len(reports)
        ).to_response()

    @bp.route('/need-help', methods=['GET'])
    def get_need_help_progress():
        """获取需要协助的进度回报，并附带项目名称和负责人"""
        reports = ProgressReport.needing_help()

        project_code = request.args.get('projectCode', '').strip()
        if project_code:
            reports = [r for r in reports if r.get('projectCode') == project_code]

        reports = newest_first(reports)

        projects = {p.get('projectCode'): p for p in Project.all()}
        items = []
        for report in reports:
            project = projects.get(report.get('projectCode'))
            item = dict(report)
            item['projectName'] = project.get('name') if project else 'Unknown project'
            item['projectOwner'] = project.get('owner') if project else None
            items.append(item)

        return ApiResponse.success(
            items,
            "Reports needing help retrieved successfully",
            total=len(items)
        ).to_response()
