"""
日志工厂模块

该模块提供日志工厂类，负责创建和管理日志实例，
支持单例模式和延迟初始化。
"""

import threading
from typing import Dict, Optional

from ..utils.singleton import SingletonMeta
from .logger_config import LoggerConfig, LogLevel, config_manager
from .base_logger import BaseLogger


class LoggerFactory(metaclass=SingletonMeta):
    """
    日志工厂类

    负责按名称创建和缓存日志实例，首次使用时按环境变量延迟初始化。
    """

    def __init__(self):
        """初始化日志工厂"""
        self._loggers: Dict[str, BaseLogger] = {}
        self._config_manager = config_manager
        self._lock = threading.Lock()

    def initialize(self, service_name: str = "default", level: Optional[str] = None,
                   config: Optional[LoggerConfig] = None) -> None:
        """
        初始化日志工厂

        重复调用会覆盖之前的配置并重建已创建的日志器。

        Args:
            service_name: 服务（工具）名称
            level: 日志级别，为空时沿用环境变量或默认值
            config: 基础配置，为空时从环境变量读取

        Raises:
            ValueError: 日志级别无效
        """
        with self._lock:
            default_config = config if config is not None else LoggerConfig.from_env()
            default_config.service_name = service_name
            if level:
                default_config.level = LogLevel(level.upper())

            self._config_manager.reset()
            self._config_manager.set_default_config(default_config)

            for logger in self._loggers.values():
                logger.close()
                logger.config = default_config

    def get_logger(self, name: str = "general") -> BaseLogger:
        """
        获取日志器实例

        Args:
            name: 日志器名称

        Returns:
            BaseLogger: 日志器实例
        """
        if name in self._loggers:
            return self._loggers[name]

        with self._lock:
            # 双重检查锁定
            if name not in self._loggers:
                self._loggers[name] = BaseLogger(name, self._config_manager.get_default_config())
            return self._loggers[name]

    def cleanup(self) -> None:
        """关闭并清空所有日志器"""
        with self._lock:
            for logger in self._loggers.values():
                logger.close()
            self._loggers.clear()


# 全局日志工厂实例
logger_factory = LoggerFactory()


def initialize_logging(service_name: str = "default", level: Optional[str] = None,
                       config: Optional[LoggerConfig] = None) -> None:
    """初始化日志系统的便捷函数"""
    logger_factory.initialize(service_name, level, config)
