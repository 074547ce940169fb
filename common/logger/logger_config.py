"""
日志配置模块

该模块提供了日志系统的配置管理功能，支持从环境变量读取配置，
包括日志级别、格式、输出目标以及文件轮转策略等。
"""

import os
from typing import Dict, Any, Optional, Union
from pathlib import Path
from dataclasses import dataclass, field
from enum import Enum


class LogLevel(Enum):
    """日志级别枚举"""
    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class RotationConfig:
    """日志轮转配置"""
    # 按文件大小轮转
    size: Optional[str] = "10 MB"
    # 保留时长或文件数量
    retention: Union[str, int] = "7 days"
    # 压缩格式
    compression: Optional[str] = None


@dataclass
class LoggerConfig:
    """日志配置类"""
    # 基础配置
    level: LogLevel = LogLevel.INFO
    format_string: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"

    # 输出配置（命令行工具默认只输出到控制台）
    log_dir: str = "logs"
    enable_file_logging: bool = False
    enable_console_logging: bool = True

    # 轮转配置
    rotation: RotationConfig = field(default_factory=RotationConfig)

    # loguru选项
    colorize: bool = True
    backtrace: bool = False
    diagnose: bool = False

    # 上下文信息
    service_name: Optional[str] = None

    @classmethod
    def from_env(cls, prefix: str = "LOG_") -> 'LoggerConfig':
        """
        从环境变量创建配置

        Raises:
            ValueError: 日志级别无效
        """
        config: Dict[str, Any] = {}

        if level := os.getenv(f"{prefix}LEVEL"):
            config['level'] = LogLevel(level.upper())

        if log_dir := os.getenv(f"{prefix}DIR"):
            config['log_dir'] = log_dir

        if format_str := os.getenv(f"{prefix}FORMAT"):
            config['format_string'] = format_str

        # 布尔配置
        for key, env_key in [
            ('enable_file_logging', 'ENABLE_FILE'),
            ('enable_console_logging', 'ENABLE_CONSOLE'),
            ('colorize', 'COLORIZE'),
            ('backtrace', 'BACKTRACE'),
            ('diagnose', 'DIAGNOSE'),
        ]:
            if value := os.getenv(f"{prefix}{env_key}"):
                config[key] = value.lower() in ('true', '1', 'yes', 'on')

        if service_name := os.getenv(f"{prefix}SERVICE_NAME"):
            config['service_name'] = service_name

        # 轮转配置
        rotation_config = {}
        if rotation_size := os.getenv(f"{prefix}ROTATION_SIZE"):
            rotation_config['size'] = rotation_size
        if retention := os.getenv(f"{prefix}RETENTION"):
            rotation_config['retention'] = retention
        if compression := os.getenv(f"{prefix}COMPRESSION"):
            rotation_config['compression'] = compression

        if rotation_config:
            config['rotation'] = RotationConfig(**rotation_config)

        return cls(**config)

    def get_log_file_path(self, logger_name: str) -> str:
        """获取日志文件路径"""
        log_dir = Path(self.log_dir) / (self.service_name or "default")
        return str(log_dir / f"{logger_name}_{{time:YYYY-MM-DD}}.log")

    def get_loguru_config(self, logger_name: str = "general") -> Dict[str, Any]:
        """获取文件输出的loguru配置字典"""
        return {
            "sink": self.get_log_file_path(logger_name),
            "level": self.level.value,
            "format": self.format_string,
            "rotation": self.rotation.size,
            "retention": self.rotation.retention,
            "compression": self.rotation.compression,
            "backtrace": self.backtrace,
            "diagnose": self.diagnose,
        }

    def create_log_directory(self) -> None:
        """创建日志目录"""
        log_dir = Path(self.log_dir) / (self.service_name or "default")
        log_dir.mkdir(parents=True, exist_ok=True)


class LoggerConfigManager:
    """日志配置管理器，所有日志器共享同一份默认配置"""

    def __init__(self):
        self._default_config: Optional[LoggerConfig] = None

    def set_default_config(self, config: LoggerConfig) -> None:
        """设置默认配置"""
        self._default_config = config

    def get_default_config(self) -> LoggerConfig:
        """获取默认配置，未设置时从环境变量读取"""
        if self._default_config is None:
            self._default_config = LoggerConfig.from_env()
        return self._default_config

    def reset(self) -> None:
        """清空配置"""
        self._default_config = None


# 全局配置管理器实例
config_manager = LoggerConfigManager()
