"""
生成器配置模块

优先级：命令行参数 > 环境变量（SQLREPO_前缀） > 默认值
"""

import os
import codecs
from typing import Any, Dict, Optional
from dataclasses import dataclass

from .exceptions import ConfigurationError


@dataclass
class GeneratorConfig:
    """生成器配置"""
    input_dir: Optional[str] = None
    encoding: str = "utf-8"
    line_length: int = 88
    # 类名包含该标记即视为数据模型
    model_marker: str = "Model"
    # 生成代码依赖的存储访问模块
    storage_module: str = "sqlite3"
    verbose: bool = False

    @classmethod
    def from_env(cls, prefix: str = "SQLREPO_") -> 'GeneratorConfig':
        """从环境变量创建配置"""
        config: Dict[str, Any] = {}

        if encoding := os.getenv(f"{prefix}ENCODING"):
            config['encoding'] = encoding

        if line_length := os.getenv(f"{prefix}LINE_LENGTH"):
            try:
                config['line_length'] = int(line_length)
            except ValueError as e:
                raise ConfigurationError(f"{prefix}LINE_LENGTH 不是整数: {line_length}") from e

        if verbose := os.getenv(f"{prefix}VERBOSE"):
            config['verbose'] = verbose.lower() in ('true', '1', 'yes', 'on')

        return cls(**config)

    def validate(self) -> None:
        """
        验证配置

        Raises:
            ConfigurationError: 输入目录缺失、不存在或不是目录，编码未知，或行宽非法
        """
        if not self.input_dir:
            raise ConfigurationError("必须指定模型目录")

        if not os.path.exists(self.input_dir):
            raise ConfigurationError(f"模型目录不存在: {self.input_dir}")

        if not os.path.isdir(self.input_dir):
            raise ConfigurationError(f"不是目录: {self.input_dir}")

        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigurationError(f"未知的文件编码: {self.encoding}") from e

        if self.line_length <= 0:
            raise ConfigurationError(f"行宽必须为正数: {self.line_length}")
