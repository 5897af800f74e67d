"""
内存查询引擎

对已加载的集合依次执行：筛选 → 关键字搜索 → 排序 → 分页。
"""

import math
import unicodedata
from datetime import datetime, timezone
from functools import cmp_to_key

from core.exceptions import ValidationError
from core.validators import parse_date, parse_hours

SORT_ORDERS = ('asc', 'desc')
DATE_FIELDS = ('date', 'createdAt', 'updatedAt')
NUMERIC_FIELDS = ('workHours',)


class QueryProfile:
    """描述某种实体可用的筛选、搜索和默认排序方式"""

    def __init__(self, exact_fields=(), contains_fields=(), search_fields=(),
                 date_field=None, default_sort=None, default_order='asc'):
        self.exact_fields = tuple(exact_fields)
        self.contains_fields = tuple(contains_fields)
        self.search_fields = tuple(search_fields)
        self.date_field = date_field
        self.default_sort = default_sort
        self.default_order = default_order

    @property
    def filter_keys(self):
        keys = list(self.exact_fields) + list(self.contains_fields) + ['search']
        if self.date_field:
            keys += ['startDate', 'endDate']
        return keys


PROJECT_QUERY = QueryProfile(
    exact_fields=('status', 'projectCode'),
    contains_fields=('owner',),
    search_fields=('name', 'projectCode', 'description', 'owner'),
    default_sort=None,
    default_order='asc',
)

PROGRESS_QUERY = QueryProfile(
    exact_fields=('projectCode', 'needHelp'),
    contains_fields=('reporter',),
    search_fields=('content', 'blocker', 'plan', 'reporter'),
    date_field='date',
    default_sort='date',
    default_order='desc',
)


def filter_records(records, args, profile):
    """按等值、包含和日期范围条件筛选"""
    result = list(records)

    for field in profile.exact_fields:
        value = args.get(field)
        if value:
            result = [r for r in result if r.get(field) == value]

    for field in profile.contains_fields:
        value = args.get(field)
        if value:
            result = [r for r in result if isinstance(r.get(field), str) and value in r[field]]

    # ISO 日期为补零的 YYYY-MM-DD，字符串比较即日期比较
    if profile.date_field:
        start_date = args.get('startDate')
        end_date = args.get('endDate')
        if start_date:
            result = [r for r in result if str(r.get(profile.date_field) or '') >= start_date]
        if end_date:
            result = [r for r in result if str(r.get(profile.date_field) or '') <= end_date]

    return result


def search_records(records, keyword, fields):
    """不区分大小写的子串搜索，任一字段命中即可"""
    if not keyword:
        return list(records)

    keyword = keyword.lower()
    return [
        r for r in records
        if any(isinstance(r.get(f), str) and keyword in r[f].lower() for f in fields)
    ]


def parse_timestamp(value):
    """把日期或时间戳解析为 naive UTC datetime，缺失或无法解析时视为最早"""
    if isinstance(value, str) and len(value.strip()) > 10:
        try:
            parsed = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
        except ValueError:
            parsed = None
        if parsed is not None:
            if parsed.tzinfo is not None:
                parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
            return parsed

    day = parse_date(value)
    if day is None:
        return datetime.min
    return datetime(day.year, day.month, day.day)


def collation_key(text):
    """
    与语言无关的字符串排序键

    先忽略大小写和重音比较，再比较重音，最后同一字母小写排在大写前面
    （alice < Alice < bob < Bob）。
    """
    decomposed = unicodedata.normalize('NFKD', text)
    base = ''.join(c for c in decomposed if not unicodedata.combining(c))
    return (base.casefold(), decomposed.casefold(), tuple(c.isupper() for c in decomposed))


def _compare_generic(a, b):
    if a is None and b is None:
        return 0
    if a is None:
        return -1
    if b is None:
        return 1
    if isinstance(a, str) and isinstance(b, str):
        a, b = collation_key(a), collation_key(b)
        return (a > b) - (a < b)
    try:
        return (a > b) - (a < b)
    except TypeError:
        a, b = str(a), str(b)
        return (a > b) - (a < b)


def sort_key_for(field):
    """根据字段类型返回排序键函数"""
    if field in DATE_FIELDS or field.endswith('Date'):
        return lambda r: parse_timestamp(r.get(field))
    if field in NUMERIC_FIELDS:
        def numeric_key(r):
            value = parse_hours(r.get(field))
            return 0.0 if value is None else value
        return numeric_key
    return cmp_to_key(lambda a, b: _compare_generic(a.get(field), b.get(field)))


def sort_records(records, sort_by, sort_order='asc'):
    """稳定排序，相等的记录保持原有顺序"""
    if not sort_by:
        return list(records)
    return sorted(records, key=sort_key_for(sort_by), reverse=(sort_order == 'desc'))


def paginate_records(records, page=None, limit=None):
    """
    切片分页

    Args:
        records: 已排序的记录
        page: 页码（从 1 开始），仅在同时给出 limit 时生效
        limit: 每页数量

    Returns:
        (当前页记录, 分页信息)
    """
    total = len(records)

    if limit:
        if page:
            start = (page - 1) * limit
            items = records[start:start + limit]
        else:
            items = records[:limit]
        total_pages = math.ceil(total / limit)
    else:
        items = list(records)
        total_pages = 1

    pagination = {
        'total': total,
        'page': page or 1,
        'limit': limit or total,
        'totalPages': total_pages,
    }
    return items, pagination


def parse_positive_int(value, name):
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValidationError([f'{name} must be a positive integer'])
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError([f'{name} must be a positive integer'])
    if number < 1:
        raise ValidationError([f'{name} must be a positive integer'])
    return number


def normalize_query_args(args, profile):
    """把原始请求参数整理为查询配置，非法的分页或排序参数抛出 ValidationError"""
    options = {key: args.get(key) for key in profile.filter_keys if args.get(key)}

    sort_order = args.get('sortOrder') or profile.default_order
    if sort_order not in SORT_ORDERS:
        raise ValidationError([f'sortOrder must be one of: {", ".join(SORT_ORDERS)}'])

    options['sortBy'] = args.get('sortBy') or profile.default_sort
    options['sortOrder'] = sort_order
    options['page'] = parse_positive_int(args.get('page'), 'page')
    options['limit'] = parse_positive_int(args.get('limit'), 'limit')
    return options


def apply_filters(records, options, profile):
    records = filter_records(records, options, profile)
    return search_records(records, options.get('search'), profile.search_fields)


def run_query(records, args, profile):
    """
    执行完整查询：筛选 → 排序 → 分页

    Returns:
        {'items': 当前页记录, 'pagination': 分页信息}
    """
    options = normalize_query_args(args, profile)
    matched = apply_filters(records, options, profile)
    ordered = sort_records(matched, options['sortBy'], options['sortOrder'])
    items, pagination = paginate_records(ordered, options['page'], options['limit'])
    return {'items': items, 'pagination': pagination}
