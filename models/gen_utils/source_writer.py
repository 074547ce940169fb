"""
源文件输出模块

负责把生成的Repository代码合并回模型所在的源文件：
补充存储模块的导入、用black格式化、语法检查后写回原文件。
"""

import ast
from typing import Sequence

import black

from common.logger import logger
from .exceptions import SynthesisError
from .model_scanner import SourceUnit


class SourceWriter:
    """源文件输出器"""

    def __init__(self, storage_module: str = "sqlite3", encoding: str = "utf-8",
                 line_length: int = 88):
        """
        初始化输出器

        Args:
            storage_module: 需要确保已导入的存储访问模块
            encoding: 写文件使用的编码
            line_length: black格式化行宽
        """
        self.storage_module = storage_module
        self.encoding = encoding
        self.mode = black.Mode(line_length=line_length)
        self.logger = logger

    def has_import(self, tree: ast.Module) -> bool:
        """检查模块顶层是否已导入存储模块（且未改名）"""
        for node in tree.body:
            if isinstance(node, ast.Import):
                for alias in node.names:
                    if alias.name == self.storage_module and alias.asname in (None, self.storage_module):
                        return True
        return False

    def ensure_import(self, unit: SourceUnit) -> str:
        """
        返回补充了存储模块导入的源码

        导入语句插在开头的文档字符串和导入语句之后，已存在时原样返回。

        Args:
            unit: 已解析的模块

        Returns:
            str: 源码
        """
        if self.has_import(unit.tree):
            return unit.source

        insert_after = 0
        for index, node in enumerate(unit.tree.body):
            is_docstring = (index == 0 and isinstance(node, ast.Expr)
                            and isinstance(node.value, ast.Constant)
                            and isinstance(node.value.value, str))
            if not (is_docstring or isinstance(node, (ast.Import, ast.ImportFrom))):
                break
            insert_after = node.end_lineno

        lines = unit.source.splitlines(keepends=True)
        if insert_after == 0:
            # 保留开头的shebang、编码声明和注释
            while insert_after < len(lines) and lines[insert_after].startswith('#'):
                insert_after += 1

        if insert_after > 0 and not lines[insert_after - 1].endswith('\n'):
            lines[insert_after - 1] += '\n'

        lines.insert(insert_after, f"import {self.storage_module}\n")
        self.logger.debug(f"补充导入: import {self.storage_module} -> {unit.path}")
        return ''.join(lines)

    def merge(self, source: str, blocks: Sequence[str]) -> str:
        """把生成的代码块追加到源码末尾"""
        return source.rstrip('\n') + '\n\n\n' + '\n\n'.join(block.strip('\n') for block in blocks) + '\n'

    def format_source(self, text: str, path: str) -> str:
        """
        用black格式化源码

        Raises:
            SynthesisError: 格式化失败
        """
        try:
            return black.format_str(text, mode=self.mode)
        except black.InvalidInput as e:
            raise SynthesisError(path, f"格式化失败: {e}") from e

    def validate(self, text: str, path: str) -> None:
        """
        编译检查生成后的源码

        Raises:
            SynthesisError: 存在语法错误
        """
        try:
            compile(text, path, 'exec')
        except (SyntaxError, ValueError) as e:
            raise SynthesisError(path, f"生成的代码无法编译: {e}") from e

    def render(self, unit: SourceUnit, blocks: Sequence[str]) -> str:
        """合并、格式化并检查，返回最终写回的源码"""
        text = self.format_source(self.merge(self.ensure_import(unit), blocks), unit.path)
        self.validate(text, unit.path)
        return text

    def write(self, path: str, text: str) -> None:
        """
        写回源文件

        Raises:
            SynthesisError: 写入失败
        """
        try:
            with open(path, 'w', encoding=self.encoding) as f:
                f.write(text)
        except OSError as e:
            raise SynthesisError(path, f"写入失败: {e}") from e

        self.logger.info(f"写入文件: {path}")
