"""
核心模块：配置、日志、错误处理、验证、查询和统计
"""
