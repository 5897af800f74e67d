"""
进度回报API模块 - 拆分版本
遵循任务模块的拆分模式
"""

from flask import Blueprint
from . import list, detail, create, update, batch, stats, lookup

progress_bp = Blueprint('progress', __name__)

list.register_routes(progress_bp)
stats.register_routes(progress_bp)
lookup.register_routes(progress_bp)
batch.register_routes(progress_bp)
detail.register_routes(progress_bp)
create.register_routes(progress_bp)
update.register_routes(progress_bp)

__all__ = ['progress_bp']
