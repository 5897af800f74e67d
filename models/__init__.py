"""
Progress Tracker - 数据模型包

项目和进度回报两个集合，均以 JSON 数组文件保存。
"""

from .base import store, id_generator, JsonStore, IdGenerator, BaseModel
from .project import Project, ProjectStatus
from .progress_report import ProgressReport, NeedHelp

__all__ = [
    'store',
    'id_generator',
    'JsonStore',
    'IdGenerator',
    'BaseModel',
    'Project',
    'ProjectStatus',
    'ProgressReport',
    'NeedHelp',
]
