"""
common 模块

该模块提供各工具共享的基础设施（日志、通用工具）。
"""

from .logger import logger, logger_factory, initialize_logging

__all__ = [
    "logger",
    "logger_factory",
    "initialize_logging",
]
