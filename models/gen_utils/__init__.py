"""
models/gen_utils 模块

数据仓库生成工具模块，提供以下功能：
- 扫描类名包含Model的数据模型
- 按字段名区分系统字段和可变字段
- 自动生成对应的CRUD Repository类
- 合并回模型所在的源文件并格式化
"""

from .exceptions import GeneratorError, ConfigurationError, ConflictError, SynthesisError
from .config import GeneratorConfig
from .model_scanner import ModelScanner, ModelDefinition, FieldDefinition, FieldClassification, SourceUnit
from .column_classifier import ColumnClassifier, SYSTEM_COLUMNS
from .repository_generator import RepositoryGenerator, GenerationContext
from .source_writer import SourceWriter
from .generator_main import ModelRepositoryBuilder, GenerationReport, main

__all__ = [
    'GeneratorError', 'ConfigurationError', 'ConflictError', 'SynthesisError',
    'GeneratorConfig',
    'ModelScanner', 'ModelDefinition', 'FieldDefinition', 'FieldClassification', 'SourceUnit',
    'ColumnClassifier', 'SYSTEM_COLUMNS',
    'RepositoryGenerator', 'GenerationContext',
    'SourceWriter',
    'ModelRepositoryBuilder', 'GenerationReport', 'main',
]
