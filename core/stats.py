"""
统计聚合

所有函数都接受一个 now 参数，同一次请求只读取一次时钟，
保证"本周"、"最近 30 天"等时间窗口在同一份结果里边界一致。
"""

import math
from collections import Counter
from datetime import datetime, timedelta

from core.query import parse_timestamp
from core.validators import PROJECT_STATUSES, parse_date, parse_hours

NEED_HELP_YES = '是'

THIS_WEEK_DAYS = 7
RECENT_TREND_DAYS = 30


def capture_now(now=None):
    return now or datetime.now()


def _hours(report):
    hours = parse_hours(report.get('workHours'))
    return hours if hours is not None else 0.0


def _sum_hours(reports):
    return round(sum(_hours(r) for r in reports), 2)


def _average_hours(reports):
    if not reports:
        return 0
    return round(sum(_hours(r) for r in reports) / len(reports), 1)


def _need_help_count(reports):
    return sum(1 for r in reports if r.get('needHelp') == NEED_HELP_YES)


def _since(reports, start_day):
    """筛选日期不早于 start_day 的回报，无法解析日期的记录被忽略"""
    result = []
    for report in reports:
        report_date = parse_date(report.get('date'))
        if report_date is not None and report_date >= start_day:
            result.append(report)
    return result


def _group_summary(reports):
    dates = [r.get('date') for r in reports if parse_date(r.get('date')) is not None]
    return {
        'reportCount': len(reports),
        'totalHours': _sum_hours(reports),
        'needHelpCount': _need_help_count(reports),
        'lastReportDate': max(dates) if dates else None,
    }


def this_week(reports, today):
    recent = _since(reports, today - timedelta(days=THIS_WEEK_DAYS))
    return {
        'reports': len(recent),
        'workHours': _sum_hours(recent),
        'needHelp': _need_help_count(recent),
    }


def group_by_project(reports, projects):
    """按已知项目分组，只保留至少有一条回报的项目"""
    by_code = {}
    for report in reports:
        by_code.setdefault(report.get('projectCode'), []).append(report)

    result = []
    for project in projects:
        project_reports = by_code.get(project.get('projectCode'))
        if not project_reports:
            continue
        summary = {
            'projectCode': project.get('projectCode'),
            'projectName': project.get('name'),
        }
        summary.update(_group_summary(project_reports))
        result.append(summary)
    return result


def group_by_reporter(reports):
    """按回报人分组，顺序为回报人首次出现的顺序"""
    by_reporter = {}
    for report in reports:
        by_reporter.setdefault(report.get('reporter'), []).append(report)

    result = []
    for reporter, reporter_reports in by_reporter.items():
        summary = {'reporter': reporter}
        summary.update(_group_summary(reporter_reports))
        result.append(summary)
    return result


def recent_trend(reports, today):
    """最近 30 天按日期分桶，按日期升序"""
    buckets = {}
    for report in _since(reports, today - timedelta(days=RECENT_TREND_DAYS)):
        key = report.get('date')
        bucket = buckets.setdefault(key, {
            'date': key,
            'reportCount': 0,
            'workHours': 0.0,
            'needHelpCount': 0,
        })
        bucket['reportCount'] += 1
        bucket['workHours'] = round(bucket['workHours'] + _hours(report), 2)
        if report.get('needHelp') == NEED_HELP_YES:
            bucket['needHelpCount'] += 1

    return sorted(buckets.values(), key=lambda b: parse_date(b['date']))


def summarize_progress(reports, projects, now=None):
    """进度回报总体统计"""
    now = capture_now(now)
    today = now.date()

    return {
        'total': len(reports),
        'needHelpCount': _need_help_count(reports),
        'totalWorkHours': _sum_hours(reports),
        'averageWorkHours': _average_hours(reports),
        'thisWeek': this_week(reports, today),
        'byProject': group_by_project(reports, projects),
        'byReporter': group_by_reporter(reports),
        'recentTrend': recent_trend(reports, today),
    }


def status_breakdown(projects):
    counts = {status: 0 for status in PROJECT_STATUSES}
    for project in projects:
        status = project.get('status')
        if status in counts:
            counts[status] += 1
    return counts


def days_until(end_date, now):
    deadline = datetime(end_date.year, end_date.month, end_date.day)
    return math.ceil((deadline - now).total_seconds() / 86400)


def upcoming_deadlines(projects, now, limit=5):
    """
    未完成且设置了结束日期的项目，按结束日期升序

    已逾期的项目同样包含在内，daysUntilDeadline 为负数。
    """
    candidates = []
    for project in projects:
        if project.get('status') == 'completed':
            continue
        end_date = parse_date(project.get('endDate'))
        if end_date is None:
            continue
        candidates.append((end_date, project))

    candidates.sort(key=lambda item: item[0])

    result = []
    for end_date, project in candidates[:limit]:
        item = dict(project)
        item['daysUntilDeadline'] = days_until(end_date, now)
        result.append(item)
    return result


def recent_projects(projects, limit=5):
    return sorted(projects, key=lambda p: parse_timestamp(p.get('createdAt')), reverse=True)[:limit]


def summarize_projects(projects, now=None, recent_limit=5, deadline_limit=5):
    """项目统计：状态分布、最近项目、即将到期"""
    now = capture_now(now)
    return {
        'total': len(projects),
        'byStatus': status_breakdown(projects),
        'recentProjects': recent_projects(projects, recent_limit),
        'upcomingDeadlines': upcoming_deadlines(projects, now, deadline_limit),
    }


def _top(counter):
    if not counter:
        return None
    return counter.most_common(1)[0]


def summarize_filtered(reports):
    """筛选结果的统计（不涉及时间窗口）"""
    dates = sorted(r.get('date') for r in reports if parse_date(r.get('date')) is not None)

    top_reporter = _top(Counter(r.get('reporter') for r in reports))
    top_project = _top(Counter(r.get('projectCode') for r in reports))

    return {
        'totalReports': len(reports),
        'totalWorkHours': _sum_hours(reports),
        'needHelpCount': _need_help_count(reports),
        'uniqueProjects': len({r.get('projectCode') for r in reports}),
        'uniqueReporters': len({r.get('reporter') for r in reports}),
        'averageWorkHours': _average_hours(reports),
        'dateRange': {'start': dates[0], 'end': dates[-1]} if dates else None,
        'topReporter': {'name': top_reporter[0], 'count': top_reporter[1]} if top_reporter else None,
        'topProject': {'code': top_project[0], 'count': top_project[1]} if top_project else None,
    }


def dashboard_overview(projects, reports, now=None):
    """仪表盘概览"""
    now = capture_now(now)
    today = now.date()
    return {
        'totalProjects': len(projects),
        'activeProjects': sum(1 for p in projects if p.get('status') == 'active'),
        'completedProjects': sum(1 for p in projects if p.get('status') == 'completed'),
        'totalReports': len(reports),
        'needHelpCount': _need_help_count(reports),
        'thisWeekReports': len(_since(reports, today - timedelta(days=THIS_WEEK_DAYS))),
        'totalWorkHours': _sum_hours(reports),
    }
