"""
JSON 文件存储和通用模型

每个集合保存为一个完整的 JSON 数组文件，读取整个文件到内存，修改后整体覆盖写回。
没有文件锁和事务，多个写入者并发时以最后一次写入为准。
"""

import json
import logging
import os
import threading
import time
from datetime import datetime, timezone

from flask import current_app, has_app_context

from core.exceptions import NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

# 集合名 -> 配置中的文件名键
COLLECTION_FILE_KEYS = {
    'projects': 'PROJECTS_FILE',
    'progress': 'PROGRESS_FILE',
}

DEFAULT_FILE_NAMES = {
    'projects': 'projects.json',
    'progress': 'progress.json',
}


def utc_now_iso(now=None):
    """生成带毫秒和 Z 后缀的 UTC 时间戳"""
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class IdGenerator:
    """
    基于创建时间（毫秒）的 ID 生成器

    同一毫秒内多次调用时递增，保证同一进程内严格单调。
    """

    def __init__(self, clock=None):
        self._clock = clock or time.time
        self._last_id = 0
        self._lock = threading.Lock()

    def next_id(self, floor=0):
        """返回大于 floor 且大于上一次结果的新 ID"""
        with self._lock:
            candidate = int(self._clock() * 1000)
            candidate = max(candidate, self._last_id + 1, int(floor) + 1)
            self._last_id = candidate
            return candidate


class JsonStore:
    """按集合读写 JSON 数组文件"""

    def __init__(self, data_dir=None, app=None, file_names=None):
        self._data_dir = data_dir
        self._file_names = dict(file_names or DEFAULT_FILE_NAMES)
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """注册为 Flask 扩展"""
        app.config.setdefault('DATA_DIR', 'data')
        for collection, key in COLLECTION_FILE_KEYS.items():
            app.config.setdefault(key, DEFAULT_FILE_NAMES[collection])
        app.extensions['json_store'] = self

    @property
    def data_dir(self):
        if self._data_dir:
            return self._data_dir
        if has_app_context():
            return current_app.config['DATA_DIR']
        raise RuntimeError("JsonStore has no data directory outside of an application context")

    def path_for(self, collection):
        if collection not in COLLECTION_FILE_KEYS:
            raise ValueError(f"Unknown collection: {collection}")

        file_name = self._file_names[collection]
        if not self._data_dir and has_app_context():
            file_name = current_app.config.get(COLLECTION_FILE_KEYS[collection], file_name)
        return os.path.join(self.data_dir, file_name)

    def load(self, collection):
        """读取集合；文件缺失或损坏时记录日志并返回空列表"""
        path = self.path_for(collection)
        if not os.path.exists(path):
            logger.info(f"Data file not found, using empty collection: {path}")
            return []

        try:
            with open(path, 'r', encoding='utf-8') as f:
                records = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {path}: {e}")
            return []

        if not isinstance(records, list):
            logger.error(f"Error reading {path}: top-level JSON value is not an array")
            return []

        return records

    def save(self, collection, records):
        """整体覆盖写入集合，成功返回 True，失败记录日志并返回 False"""
        path = self.path_for(collection)
        try:
            directory = os.path.dirname(path)
            if directory and not os.path.exists(directory):
                os.makedirs(directory)

            content = json.dumps(list(records), indent=2, ensure_ascii=False)
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Error writing {path}: {e}")
            return False

    def ensure_collections(self):
        """创建缺失的数据文件"""
        for collection in COLLECTION_FILE_KEYS:
            if not os.path.exists(self.path_for(collection)):
                self.save(collection, [])

    def reset(self):
        """清空所有集合"""
        return all(self.save(collection, []) for collection in COLLECTION_FILE_KEYS)


# 全局存储与 ID 生成器（所有模型共享同一个数据访问入口）
store = JsonStore()
id_generator = IdGenerator()


class BaseModel:
    """
    基础模型类，记录以 dict 形式在内存和文件中流转

    子类设置 collection、fields（字段及默认值）和 string_fields（需要 trim 的字段）。
    """

    collection = None
    fields = {}
    string_fields = ()
    not_found_message = "Record not found"
    not_found_code = "NOT_FOUND"

    @classmethod
    def all(cls):
        return store.load(cls.collection)

    @classmethod
    def get(cls, record_id):
        for record in cls.all():
            if record.get('id') == record_id:
                return record
        return None

    @classmethod
    def get_or_404(cls, record_id):
        record = cls.get(record_id)
        if record is None:
            raise NotFoundError(cls.not_found_message, error_code=cls.not_found_code)
        return record

    @classmethod
    def normalize(cls, data):
        """只保留已知字段并去掉字符串字段两端空白"""
        result = {}
        for key, value in data.items():
            if key not in cls.fields:
                continue
            if key in cls.string_fields and isinstance(value, str):
                value = value.strip()
            result[key] = value
        return result

    @classmethod
    def build(cls, data, records):
        """按字段默认值构造新记录，分配 ID 和时间戳"""
        timestamp = utc_now_iso()
        record = {'id': id_generator.next_id(floor=cls._max_id(records))}
        for key, default in cls.fields.items():
            value = data.get(key)
            record[key] = default if value is None else value
        record['createdAt'] = timestamp
        record['updatedAt'] = timestamp
        return record

    @classmethod
    def merge(cls, record, changes):
        """合并修改（merge-patch），id 和 createdAt 不可修改"""
        updated = dict(record)
        for key, value in changes.items():
            if key in ('id', 'createdAt', 'updatedAt'):
                continue
            updated[key] = value
        updated['updatedAt'] = utc_now_iso()
        return updated

    @classmethod
    def persist(cls, records, failure_message):
        if not store.save(cls.collection, records):
            raise PersistenceError(failure_message)

    @classmethod
    def replace(cls, records, record):
        return [record if r.get('id') == record['id'] else r for r in records]

    @classmethod
    def delete(cls, record_id):
        """按 ID 删除，返回被删除的记录"""
        records = cls.all()
        target = next((r for r in records if r.get('id') == record_id), None)
        if target is None:
            raise NotFoundError(cls.not_found_message, error_code=cls.not_found_code)

        remaining = [r for r in records if r.get('id') != record_id]
        cls.persist(remaining, f"Failed to delete {cls.__name__.lower()}")
        logger.info(f"Deleted {cls.collection} record {record_id}")
        return target

    @classmethod
    def batch_update(cls, record_ids, changes):
        """
        批量更新指定 ID 的记录，不存在的 ID 直接跳过

        Returns:
            被更新的记录列表
        """
        wanted = {
            record_id for record_id in record_ids
            if isinstance(record_id, int) and not isinstance(record_id, bool)
        }

        records = cls.all()
        updated_records = []
        result = []
        for record in records:
            if record.get('id') in wanted:
                record = cls.merge(record, changes)
                updated_records.append(record)
            result.append(record)

        if updated_records:
            cls.persist(result, f"Failed to batch update {cls.collection}")
        logger.info(f"Batch updated {len(updated_records)} {cls.collection} records")
        return updated_records

    @staticmethod
    def _max_id(records):
        ids = [r.get('id') for r in records if isinstance(r.get('id'), int)]
        return max(ids) if ids else 0
