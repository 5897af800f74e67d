from enum import Enum
import logging

from core.exceptions import ConflictError, NotFoundError, ValidationError
from core.validators import validate_project
from .base import BaseModel

logger = logging.getLogger(__name__)


class ProjectStatus(Enum):
    PLANNING = 'planning'
    ACTIVE = 'active'
    ON_HOLD = 'on-hold'
    COMPLETED = 'completed'


class Project(BaseModel):
    collection = 'projects'
    not_found_message = "Project not found"
    not_found_code = "PROJECT_NOT_FOUND"

    fields = {
        'projectCode': '',
        'name': '',
        'owner': '',
        'startDate': '',
        'endDate': '',
        'status': ProjectStatus.PLANNING.value,
        'description': '',
    }
    string_fields = ('projectCode', 'name', 'owner', 'description', 'startDate', 'endDate')

    @classmethod
    def find_by_code(cls, project_code):
        for project in cls.all():
            if project.get('projectCode') == project_code:
                return project
        return None

    @classmethod
    def get_by_code_or_404(cls, project_code):
        project = cls.find_by_code(project_code)
        if project is None:
            raise NotFoundError(cls.not_found_message, error_code=cls.not_found_code)
        return project

    @classmethod
    def exists(cls, project_code):
        return cls.find_by_code(project_code) is not None

    @classmethod
    def create(cls, data):
        """验证 → 检查代码唯一 → 分配 ID 和时间戳 → 追加并写回"""
        data = cls.normalize(data)
        errors = validate_project(data)
        if errors:
            raise ValidationError(errors)

        projects = cls.all()
        if any(p.get('projectCode') == data['projectCode'] for p in projects):
            raise ConflictError("Project code already exists", error_code="DUPLICATE_PROJECT_CODE")

        project = cls.build(data, projects)
        projects.append(project)
        cls.persist(projects, "Failed to save project")

        logger.info(f"Created project {project['projectCode']} (id={project['id']})")
        return project

    @classmethod
    def update(cls, project, changes):
        """
        合并更新项目

        Args:
            project: 当前项目记录
            changes: 部分或完整的字段修改

        Returns:
            更新后的项目记录
        """
        changes = cls.normalize(changes)
        for key, value in changes.items():
            if value is None:
                changes[key] = cls.fields[key]

        updated = cls.merge(project, changes)
        errors = validate_project(updated)
        if errors:
            raise ValidationError(errors)

        projects = cls.all()
        if updated['projectCode'] != project.get('projectCode'):
            if any(p.get('projectCode') == updated['projectCode'] for p in projects):
                raise ConflictError("New project code already exists", error_code="DUPLICATE_PROJECT_CODE")

        if not any(p.get('id') == project['id'] for p in projects):
            raise NotFoundError(cls.not_found_message, error_code=cls.not_found_code)

        cls.persist(cls.replace(projects, updated), "Failed to update project")
        logger.info(f"Updated project {updated['projectCode']} (id={updated['id']})")
        return updated

    @classmethod
    def batch_update_status(cls, project_ids, status):
        try:
            status = ProjectStatus(status).value
        except ValueError:
            raise ValidationError(['Invalid project status'])
        return cls.batch_update(project_ids, {'status': status})
