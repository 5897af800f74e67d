from enum import Enum
import logging

from core.exceptions import APIException, ValidationError
from core.validators import is_blank, parse_hours, validate_progress_report
from .base import BaseModel
from .project import Project

logger = logging.getLogger(__name__)


class NeedHelp(Enum):
    YES = '是'
    NO = '否'

    @classmethod
    def coerce(cls, value):
        """把 yes/no/true/false 等输入统一为 是/否，无法识别时原样返回"""
        if isinstance(value, bool):
            return cls.YES.value if value else cls.NO.value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in ('yes', 'true', 'y', cls.YES.value):
                return cls.YES.value
            if lowered in ('no', 'false', 'n', cls.NO.value):
                return cls.NO.value
        return value


class ProgressReport(BaseModel):
    collection = 'progress'
    not_found_message = "Progress report not found"
    not_found_code = "PROGRESS_NOT_FOUND"

    fields = {
        'reporter': '',
        'date': '',
        'projectCode': '',
        'workHours': 0,
        'content': '',
        'blocker': '',
        'needHelp': NeedHelp.NO.value,
        'plan': '',
    }
    string_fields = ('reporter', 'date', 'projectCode', 'content', 'blocker', 'plan')

    @classmethod
    def normalize(cls, data):
        data = super().normalize(data)
        if 'needHelp' in data:
            need_help = data['needHelp']
            data['needHelp'] = None if is_blank(need_help) else NeedHelp.coerce(need_help)
        return data

    @staticmethod
    def _coerce_hours(data):
        """验证通过后把工作时数统一存为 float"""
        if 'workHours' in data:
            hours = data['workHours']
            data['workHours'] = 0.0 if is_blank(hours) else parse_hours(hours)
        return data

    @staticmethod
    def ensure_project(project_code):
        if not Project.exists(project_code):
            raise APIException("Specified project does not exist", 400, "PROJECT_NOT_FOUND")

    @classmethod
    def create(cls, data, today=None):
        """验证 → 检查项目存在 → 分配 ID 和时间戳 → 追加并写回"""
        data = cls.normalize(data)
        errors = validate_progress_report(data, today=today)
        if errors:
            raise ValidationError(errors)

        cls.ensure_project(data['projectCode'])

        reports = cls.all()
        report = cls.build(cls._coerce_hours(data), reports)
        report['workHours'] = float(report['workHours'])
        reports.append(report)
        cls.persist(reports, "Failed to save progress report")

        logger.info(f"Created progress report {report['id']} for {report['projectCode']}")
        return report

    @classmethod
    def update(cls, report, changes, today=None):
        """合并更新回报，合并后的完整记录需要重新验证并检查项目存在"""
        changes = cls.normalize(changes)
        for key, value in changes.items():
            if value is None:
                changes[key] = cls.fields[key]

        updated = cls.merge(report, changes)
        errors = validate_progress_report(updated, today=today)
        if errors:
            raise ValidationError(errors)

        cls.ensure_project(updated['projectCode'])

        reports = cls.all()
        if not any(r.get('id') == report['id'] for r in reports):
            cls.get_or_404(report['id'])

        updated = cls._coerce_hours(updated)
        cls.persist(cls.replace(reports, updated), "Failed to update progress report")
        logger.info(f"Updated progress report {updated['id']}")
        return updated

    @classmethod
    def batch_update_help_status(cls, report_ids, need_help):
        need_help = NeedHelp.coerce(need_help)
        try:
            need_help = NeedHelp(need_help).value
        except ValueError:
            raise ValidationError(['Invalid need-help value'])
        return cls.batch_update(report_ids, {'needHelp': need_help})

    @classmethod
    def for_project(cls, project_code):
        return [r for r in cls.all() if r.get('projectCode') == project_code]

    @classmethod
    def for_reporter(cls, reporter):
        return [r for r in cls.all() if r.get('reporter') == reporter]

    @classmethod
    def needing_help(cls):
        return [r for r in cls.all() if r.get('needHelp') == NeedHelp.YES.value]
