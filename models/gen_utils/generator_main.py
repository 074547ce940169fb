"""
Repository类生成工具主程序

扫描指定目录下的数据模型（类名包含"Model"），为每个模型生成
对应的Repository类并写回模型所在的源文件。

示例用法:
    sqlrepo-gen --dir ./models/example
    python -m models.gen_utils -d ./models/example --verbose
"""

import sys
import argparse
from typing import List, Optional, Tuple
from dataclasses import dataclass, field

from common.logger import logger, initialize_logging, LoggerConfig
from .config import GeneratorConfig
from .exceptions import ConfigurationError, ConflictError, SynthesisError
from .model_scanner import ModelScanner, ModelDefinition, SourceUnit
from .column_classifier import ColumnClassifier
from .repository_generator import RepositoryGenerator, GENERATOR_NAME
from .source_writer import SourceWriter


@dataclass
class GenerationReport:
    """一次生成的结果汇总"""
    generated: List[str] = field(default_factory=list)          # 生成的仓库类名
    conflicts: List[ConflictError] = field(default_factory=list)
    written_files: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> List[str]:
        return [conflict.model_name for conflict in self.conflicts]


class ModelRepositoryBuilder:
    """
    Repository生成流程

    先解析目录下的全部模块，再逐个模型生成代码，最后统一写回文件。
    冲突的模型被跳过；解析、格式化、写入失败会终止整个批次。
    """

    def __init__(self, config: GeneratorConfig):
        """
        初始化生成流程

        Args:
            config: 生成器配置
        """
        self.config = config
        self.logger = logger

        self.scanner = ModelScanner(model_marker=config.model_marker, encoding=config.encoding)
        self.classifier = ColumnClassifier()
        self.generator = RepositoryGenerator(storage_module=config.storage_module)
        self.writer = SourceWriter(
            storage_module=config.storage_module,
            encoding=config.encoding,
            line_length=config.line_length,
        )

    def run(self) -> GenerationReport:
        """
        执行生成

        Returns:
            GenerationReport: 生成结果

        Raises:
            ConfigurationError: 输入目录无效
            SynthesisError: 解析、格式化或写入失败
        """
        self.config.validate()

        self.logger.info(f"开始扫描模型目录: {self.config.input_dir}")
        units = self.scanner.scan_directory(self.config.input_dir)

        report = GenerationReport()
        rendered: List[Tuple[str, str]] = []

        for unit in units:
            blocks = self.generate_unit(unit, report)
            if not blocks:
                continue
            rendered.append((unit.path, self.writer.render(unit, blocks)))

        for path, text in rendered:
            self.writer.write(path, text)
            report.written_files.append(path)

        return report

    def generate_unit(self, unit: SourceUnit, report: GenerationReport) -> List[str]:
        """
        为单个模块中的所有模型生成代码块

        Args:
            unit: 已解析的模块
            report: 结果汇总

        Returns:
            List[str]: 按模型声明顺序排列的代码块
        """
        models = self.scanner.identify(
            unit.declarations,
            source=unit.source,
            file_path=unit.path,
            on_conflict=report.conflicts.append,
        )

        blocks = []
        for model in models:
            blocks.append(self.generate_model(model))
            report.generated.append(model.repository_name)
            self.logger.info(f"  ✓ {model.name} -> {model.repository_name}")

        return blocks

    def generate_model(self, model: ModelDefinition) -> str:
        """分类字段并生成单个模型的Repository代码"""
        mutable_fields, all_fields = self.classifier.classify(model.fields)
        return self.generator.generate(
            model.name,
            model.repository_name,
            model.table_name,
            mutable_fields,
            all_fields,
        )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    解析命令行参数

    缺少--dir时argparse打印用法并以状态码2退出。

    Returns:
        argparse.Namespace: 解析后的参数
    """
    parser = argparse.ArgumentParser(
        prog=GENERATOR_NAME,
        description="为数据模型生成CRUD Repository类",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  %(prog)s --dir ./models/example
  %(prog)s -d ./models/example --line-length 100
        """
    )

    parser.add_argument(
        "--dir", "-d",
        required=True,
        help="数据模型所在目录"
    )

    parser.add_argument(
        "--encoding",
        default=None,
        help="源文件编码 (默认: utf-8)"
    )

    parser.add_argument(
        "--line-length",
        type=int,
        default=None,
        help="格式化行宽 (默认: 88)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="详细输出"
    )

    return parser.parse_args(argv)


def create_config_from_args(args: argparse.Namespace) -> GeneratorConfig:
    """
    从命令行参数创建配置，未指定的项沿用环境变量或默认值

    Args:
        args: 命令行参数

    Returns:
        GeneratorConfig: 生成器配置
    """
    config = GeneratorConfig.from_env()
    config.input_dir = args.dir

    if args.encoding:
        config.encoding = args.encoding
    if args.line_length is not None:
        config.line_length = args.line_length
    if args.verbose:
        config.verbose = True

    return config


def setup_logging(config: GeneratorConfig) -> None:
    """
    初始化日志

    日志环境变量无效时改用默认日志配置，保证错误信息仍能输出。

    Raises:
        ConfigurationError: 日志配置无效
    """
    level = "DEBUG" if config.verbose else None
    try:
        initialize_logging(GENERATOR_NAME, level=level)
    except ValueError as e:
        initialize_logging(GENERATOR_NAME, level=level, config=LoggerConfig())
        raise ConfigurationError(f"日志配置无效: {e}") from e


def main(argv: Optional[List[str]] = None) -> int:
    """主程序入口"""
    args = parse_arguments(argv)

    try:
        config = create_config_from_args(args)
        setup_logging(config)
        report = ModelRepositoryBuilder(config).run()
    except ConfigurationError as e:
        logger.error(e.message)
        return e.error_code
    except SynthesisError as e:
        logger.error(e.message)
        return e.error_code

    logger.info("=" * 60)
    logger.info("Repository生成完成!")
    logger.info(f"  - 生成了 {len(report.generated)} 个Repository类")
    logger.info(f"  - 跳过了 {len(report.conflicts)} 个模型")
    logger.info(f"  - 写入了 {len(report.written_files)} 个文件")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
