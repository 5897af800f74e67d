"""
项目 API 蓝图

提供项目的 CRUD、批量状态更新和统计接口
"""

from flask import Blueprint, current_app

from models import Project
from core.decorators import require_json
from core.query import PROJECT_QUERY, run_query
from core.stats import summarize_projects
from .base import ApiResponse, validate_json_request, get_request_args, parse_id_list

# 创建蓝图
projects_bp = Blueprint('projects', __name__)

PROJECT_FIELDS = list(Project.fields)


@projects_bp.route('', methods=['GET'])
def list_projects():
    """
    获取项目列表

    GET /api/projects?status=active&owner=张小明&search=网站&sortBy=endDate&sortOrder=asc&page=1&limit=10
    """
    args = get_request_args()
    result = run_query(Project.all(), args, PROJECT_QUERY)

    return ApiResponse.success(
        result['items'],
        "Projects retrieved successfully",
        total=result['pagination']['total'],
        pagination=result['pagination']
    ).to_response()


@projects_bp.route('', methods=['POST'])
@require_json
def create_project():
    """创建新项目"""
    data = validate_json_request(optional_fields=PROJECT_FIELDS)
    project = Project.create(data)

    return ApiResponse.created(project, "Project created successfully").to_response()


@projects_bp.route('/<int:project_id>', methods=['GET'])
def get_project(project_id):
    """按 ID 获取项目详情"""
    project = Project.get_or_404(project_id)
    return ApiResponse.success(project, "Project retrieved successfully").to_response()


@projects_bp.route('/code/<project_code>', methods=['GET'])
def get_project_by_code(project_code):
    """按项目代码获取项目详情"""
    project = Project.get_by_code_or_404(project_code)
    return ApiResponse.success(project, "Project retrieved successfully").to_response()


@projects_bp.route('/<int:project_id>', methods=['PUT', 'PATCH'])
@require_json
def update_project(project_id):
    """更新项目（合并更新）"""
    project = Project.get_or_404(project_id)
    data = validate_json_request(optional_fields=PROJECT_FIELDS)
    updated = Project.update(project, data)

    return ApiResponse.success(updated, "Project updated successfully").to_response()


@projects_bp.route('/code/<project_code>', methods=['PUT', 'PATCH'])
@require_json
def update_project_by_code(project_code):
    """按项目代码更新项目"""
    project = Project.get_by_code_or_404(project_code)
    data = validate_json_request(optional_fields=PROJECT_FIELDS)
    updated = Project.update(project, data)

    return ApiResponse.success(updated, "Project updated successfully").to_response()


@projects_bp.route('/<int:project_id>', methods=['DELETE'])
def delete_project(project_id):
    """删除项目（不会删除该项目的进度回报）"""
    deleted = Project.delete(project_id)
    return ApiResponse.success(deleted, "Project deleted successfully").to_response()


@projects_bp.route('/batch/status', methods=['PATCH'])
@require_json
def batch_update_status():
    """
    批量更新项目状态

    请求体: {"projectIds": [1, 2], "status": "active"}
    """
    data = validate_json_request(required_fields=['projectIds', 'status'])
    project_ids = parse_id_list(data, 'projectIds')
    updated = Project.batch_update_status(project_ids, data['status'])

    return ApiResponse.success(
        {'updatedCount': len(updated), 'items': updated},
        f"Successfully updated {len(updated)} projects"
    ).to_response()


@projects_bp.route('/stats/summary', methods=['GET'])
def get_project_stats():
    """项目统计：状态分布、最近项目、即将到期项目"""
    stats = summarize_projects(
        Project.all(),
        recent_limit=current_app.config.get('RECENT_PROJECTS_LIMIT', 5),
        deadline_limit=current_app.config.get('UPCOMING_DEADLINES_LIMIT', 5),
    )
    return ApiResponse.success(stats, "Project stats retrieved successfully").to_response()

