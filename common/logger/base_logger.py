"""
基础日志模块

该模块提供基础日志类，封装loguru功能，提供统一的日志接口和上下文信息管理。
"""

import sys
import threading
from typing import Any, Dict, List, Optional

from loguru import logger as loguru_logger

from .logger_config import LoggerConfig


class BaseLogger:
    """
    基础日志类

    封装loguru，所有日志器共享loguru的全局处理器，
    每个日志器只负责管理自己添加的处理器和绑定的上下文。
    """

    def __init__(self, name: str, config: LoggerConfig,
                 context: Optional[Dict[str, Any]] = None):
        """
        初始化基础日志器

        Args:
            name: 日志器名称
            config: 日志配置对象
            context: 绑定的上下文信息
        """
        self.name = name
        self.config = config
        self._context: Dict[str, Any] = dict(context or {})
        self._handler_ids: List[int] = []
        self._lock = threading.Lock()
        self._initialized = False

    def _setup_logger(self) -> None:
        """设置日志器的输出处理器"""
        with self._lock:
            if self._initialized:
                return

            # 移除loguru默认的stderr处理器
            loguru_logger.remove()

            if self.config.enable_console_logging:
                handler_id = loguru_logger.add(
                    sys.stderr,
                    level=self.config.level.value,
                    format=self.config.format_string,
                    colorize=self.config.colorize,
                    backtrace=self.config.backtrace,
                    diagnose=self.config.diagnose,
                )
                self._handler_ids.append(handler_id)

            if self.config.enable_file_logging:
                self.config.create_log_directory()
                handler_id = loguru_logger.add(**self.config.get_loguru_config(self.name))
                self._handler_ids.append(handler_id)

            self._context.setdefault('logger_name', self.name)
            if self.config.service_name:
                self._context.setdefault('service_name', self.config.service_name)

            self._initialized = True

    def bind(self, **kwargs) -> 'BaseLogger':
        """绑定上下文信息，返回共享处理器的新日志器"""
        self._setup_logger()
        new_logger = BaseLogger(self.name, self.config, {**self._context, **kwargs})
        new_logger._initialized = True
        return new_logger

    def _log(self, level: str, message: str, *args, **kwargs) -> None:
        """内部日志记录方法"""
        self._setup_logger()

        if args:
            message = message.format(*args)

        extra = {**self._context, **kwargs}
        # depth=2 将调用位置指向业务代码而不是本类
        loguru_logger.bind(**extra).opt(depth=2).log(level, message)

    def trace(self, message: str, *args, **kwargs) -> None:
        """记录TRACE级别日志"""
        self._log("TRACE", message, *args, **kwargs)

    def debug(self, message: str, *args, **kwargs) -> None:
        """记录DEBUG级别日志"""
        self._log("DEBUG", message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs) -> None:
        """记录INFO级别日志"""
        self._log("INFO", message, *args, **kwargs)

    def success(self, message: str, *args, **kwargs) -> None:
        """记录SUCCESS级别日志"""
        self._log("SUCCESS", message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs) -> None:
        """记录WARNING级别日志"""
        self._log("WARNING", message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs) -> None:
        """记录ERROR级别日志"""
        self._log("ERROR", message, *args, **kwargs)

    def critical(self, message: str, *args, **kwargs) -> None:
        """记录CRITICAL级别日志"""
        self._log("CRITICAL", message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs) -> None:
        """记录当前异常及其堆栈"""
        self._setup_logger()
        if args:
            message = message.format(*args)
        extra = {**self._context, **kwargs}
        loguru_logger.bind(**extra).opt(depth=1, exception=True).error(message)

    def close(self) -> None:
        """移除本日志器添加的处理器"""
        with self._lock:
            for handler_id in self._handler_ids:
                try:
                    loguru_logger.remove(handler_id)
                except ValueError:
                    # 处理器已被其他日志器移除
                    pass
            self._handler_ids.clear()
            self._initialized = False
