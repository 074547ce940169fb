"""
common/logger 模块

该模块提供了基于loguru的日志系统。

主要特性：
- 基于loguru实现，统一的日志接口
- 支持从环境变量（LOG_前缀）读取配置
- 支持控制台和文件输出，文件输出支持轮转
- 延迟初始化，使用时自动创建

使用示例：
    # 程序启动时初始化（可选，也可以延迟初始化）
    from common.logger import initialize_logging
    initialize_logging(service_name="sqlrepo-gen", level="DEBUG")

    # 业务代码中使用
    from common.logger import logger
    logger.info("开始扫描模型目录")
"""

from .logger_config import LoggerConfig, LogLevel, RotationConfig
from .base_logger import BaseLogger
from .logger_factory import (
    LoggerFactory,
    logger_factory,
    initialize_logging,
)


class _LoggerProxy:
    """日志器代理类，实现延迟初始化"""

    def __getattr__(self, name):
        return getattr(logger_factory.get_logger("general"), name)


# 全局日志对象（使用代理实现延迟初始化）
logger = _LoggerProxy()

__all__ = [
    'LoggerConfig',
    'LogLevel',
    'RotationConfig',
    'BaseLogger',
    'LoggerFactory',
    'logger_factory',
    'logger',
    'initialize_logging',
]
