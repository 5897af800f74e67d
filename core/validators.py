"""
字段级数据验证

每个函数返回完整的错误消息列表（不会在第一个错误处停止），空列表表示验证通过。
验证不访问存储，项目是否存在由调用方单独检查。
"""

import math
import re
from datetime import date, datetime, timedelta

PROJECT_STATUSES = ('planning', 'active', 'on-hold', 'completed')
NEED_HELP_OPTIONS = ('是', '否')

# 回报日期最多允许超前的天数
MAX_FUTURE_DAYS = 7
MAX_WORK_HOURS = 24

# 只接受补零的扩展格式，存储值可直接按字符串比较
ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_blank(value):
    return value is None or (isinstance(value, str) and value.strip() == '')


def parse_date(value):
    """解析严格的 YYYY-MM-DD 日期（整串匹配），无法解析时返回 None"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not ISO_DATE_RE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def parse_hours(value):
    """把工作时数解析为 float，无法解析时返回 None"""
    if isinstance(value, bool):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(hours) or math.isinf(hours):
        return None
    return hours


def validate_project(data):
    """验证项目数据"""
    errors = []

    if is_blank(data.get('projectCode')) or not isinstance(data.get('projectCode'), str):
        errors.append('Project code is required')

    if is_blank(data.get('name')) or not isinstance(data.get('name'), str):
        errors.append('Project name is required')

    start_date = None
    end_date = None
    if not is_blank(data.get('startDate')):
        start_date = parse_date(data['startDate'])
        if start_date is None:
            errors.append('Invalid start date format')
    if not is_blank(data.get('endDate')):
        end_date = parse_date(data['endDate'])
        if end_date is None:
            errors.append('Invalid end date format')

    if start_date and end_date and end_date < start_date:
        errors.append('End date cannot be earlier than start date')

    status = data.get('status')
    if not is_blank(status) and status not in PROJECT_STATUSES:
        errors.append('Invalid project status')

    return errors


def validate_progress_report(data, today=None):
    """
    验证进度回报数据

    Args:
        data: 回报数据
        today: 验证基准日期，默认为当天

    Returns:
        错误消息列表
    """
    today = today or date.today()
    errors = []

    if is_blank(data.get('reporter')) or not isinstance(data.get('reporter'), str):
        errors.append('Reporter is required')

    if is_blank(data.get('date')):
        errors.append('Report date is required')
    else:
        report_date = parse_date(data['date'])
        if report_date is None:
            errors.append('Invalid date format')
        elif report_date > today + timedelta(days=MAX_FUTURE_DAYS):
            errors.append(f'Report date cannot be more than {MAX_FUTURE_DAYS} days in the future')

    if is_blank(data.get('projectCode')) or not isinstance(data.get('projectCode'), str):
        errors.append('Project code is required')

    work_hours = data.get('workHours')
    if not is_blank(work_hours):
        hours = parse_hours(work_hours)
        if hours is None or hours < 0 or hours > MAX_WORK_HOURS:
            errors.append(f'Work hours must be between 0 and {MAX_WORK_HOURS}')

    need_help = data.get('needHelp')
    if not is_blank(need_help) and need_help not in NEED_HELP_OPTIONS:
        errors.append('Invalid need-help value')

    return errors
