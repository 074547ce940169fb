"""
数据模型扫描器模块

负责扫描指定目录下的Python模块，识别类名中包含"Model"的数据模型类。
提取模型的字段名和类型注解原文，用于生成Repository类。
扫描只做静态AST分析，不会导入被扫描的模块。
"""

import os
import ast
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set
from dataclasses import dataclass, field

from common.logger import logger
from .exceptions import ConflictError, SynthesisError


# 注解为这些类型的类属性不是实例字段
PSEUDO_FIELD_TYPES = {'ClassVar', 'InitVar', 'KW_ONLY'}


class FieldClassification(Enum):
    """字段分类"""
    SYSTEM = "system"     # 由存储层维护的字段（主键、时间戳、软删除标记）
    MUTABLE = "mutable"   # 创建时由调用方提供值的字段


@dataclass
class FieldDefinition:
    """模型字段信息"""
    name: str                                            # 字段名
    declared_type: str                                   # 类型注解原文
    classification: Optional[FieldClassification] = None


@dataclass
class ModelDefinition:
    """数据模型信息"""
    name: str                       # 模型类名
    fields: List[FieldDefinition]   # 按声明顺序排列的字段
    repository_name: str            # 仓库类名
    table_name: str                 # 表名
    file_path: Optional[str] = None


@dataclass
class SourceUnit:
    """已解析的源文件"""
    path: str
    source: str
    tree: ast.Module = field(repr=False)

    @property
    def declarations(self) -> List[ast.stmt]:
        return self.tree.body


class ModelScanner:
    """
    数据模型扫描器

    扫描目录下的Python模块，识别数据模型类并提取字段
    """

    def __init__(self, model_marker: str = "Model", encoding: str = "utf-8"):
        """
        初始化扫描器

        Args:
            model_marker: 类名中包含该标记即视为数据模型
            encoding: 源文件编码
        """
        self.model_marker = model_marker
        self.encoding = encoding
        self.logger = logger

    def scan_directory(self, directory: str) -> List[SourceUnit]:
        """
        读取并解析目录下的所有Python模块

        任何一个文件解析失败都会终止整个扫描。

        Args:
            directory: 目录路径

        Returns:
            List[SourceUnit]: 按文件名排序的已解析模块

        Raises:
            SynthesisError: 文件无法读取或存在语法错误
        """
        python_files = sorted(
            os.path.join(directory, name)
            for name in os.listdir(directory)
            if name.endswith('.py') and not name.startswith('__')
            and os.path.isfile(os.path.join(directory, name))
        )

        self.logger.info(f"在目录{directory}中找到{len(python_files)}个Python文件")

        return [self.parse_file(path) for path in python_files]

    def parse_file(self, file_path: str) -> SourceUnit:
        """
        读取并解析单个Python文件

        Args:
            file_path: 文件路径

        Returns:
            SourceUnit: 已解析的模块
        """
        try:
            with open(file_path, 'r', encoding=self.encoding) as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise SynthesisError(file_path, f"读取失败: {e}") from e

        try:
            tree = ast.parse(source, filename=file_path)
        except SyntaxError as e:
            raise SynthesisError(file_path, f"解析失败: 第{e.lineno}行 {e.msg}") from e

        self.logger.debug(f"解析文件: {file_path}")
        return SourceUnit(path=file_path, source=source, tree=tree)

    def identify(self, declarations: Iterable[ast.stmt], source: Optional[str] = None,
                 file_path: Optional[str] = None,
                 on_conflict: Optional[Callable[[ConflictError], None]] = None) -> List[ModelDefinition]:
        """
        识别模块顶层声明中的数据模型

        本轮已通过检查的模型所推导的仓库名也视为已占用，
        因此同名仓库不会被生成两次。

        Args:
            declarations: 模块顶层语句
            source: 模块源码，用于保留类型注解原文
            file_path: 模块文件路径
            on_conflict: 冲突回调，被跳过的模型会传给它

        Returns:
            List[ModelDefinition]: 按声明顺序排列的模型
        """
        class_nodes = [node for node in declarations if isinstance(node, ast.ClassDef)]
        taken_names: Set[str] = {node.name for node in class_nodes}

        models = []
        for node in class_nodes:
            if self.model_marker not in node.name:
                continue

            try:
                model = self.inspect_class(node, taken_names, source)
            except ConflictError as e:
                self.logger.warning(e.message)
                if on_conflict:
                    on_conflict(e)
                continue

            model.file_path = file_path
            taken_names.add(model.repository_name)
            models.append(model)
            self.logger.debug(f"找到数据模型: {model.name} ({len(model.fields)}个字段)")

        return models

    def inspect_class(self, node: ast.ClassDef, taken_names: Set[str],
                      source: Optional[str] = None) -> ModelDefinition:
        """
        分析模型类AST节点

        Args:
            node: 类AST节点
            taken_names: 已占用的同级类名
            source: 模块源码

        Returns:
            ModelDefinition: 模型信息

        Raises:
            ConflictError: 仓库类已存在或无法推导仓库名
        """
        base_name = self.strip_marker(node.name)
        repository_name = f"{base_name}Repository"

        if not base_name:
            raise ConflictError(node.name, repository_name, reason="类名以模型标记开头，无法推导仓库名")

        if repository_name in taken_names:
            raise ConflictError(node.name, repository_name)

        return ModelDefinition(
            name=node.name,
            fields=self.extract_fields(node, source),
            repository_name=repository_name,
            table_name=base_name.lower(),
        )

    def strip_marker(self, class_name: str) -> str:
        """取模型标记之前的部分作为基础名称"""
        return class_name[:class_name.index(self.model_marker)]

    def extract_fields(self, node: ast.ClassDef, source: Optional[str] = None) -> List[FieldDefinition]:
        """
        按声明顺序提取带类型注解的字段

        Args:
            node: 类AST节点
            source: 模块源码

        Returns:
            List[FieldDefinition]: 字段列表
        """
        fields_info = []

        for item in node.body:
            if not (isinstance(item, ast.AnnAssign) and isinstance(item.target, ast.Name)):
                continue

            if self._is_pseudo_field(item.annotation):
                continue

            fields_info.append(FieldDefinition(
                name=item.target.id,
                declared_type=self._annotation_text(item.annotation, source),
            ))

        return fields_info

    def _annotation_text(self, annotation: ast.expr, source: Optional[str]) -> str:
        """获取类型注解原文，拿不到源码时退回到反解析"""
        if source is not None:
            segment = ast.get_source_segment(source, annotation)
            if segment is not None:
                return segment
        return ast.unparse(annotation)

    def _is_pseudo_field(self, annotation: ast.expr) -> bool:
        """检查是否为ClassVar/InitVar/KW_ONLY注解"""
        if isinstance(annotation, ast.Subscript):
            annotation = annotation.value

        if isinstance(annotation, ast.Name):
            return annotation.id in PSEUDO_FIELD_TYPES
        if isinstance(annotation, ast.Attribute):
            return annotation.attr in PSEUDO_FIELD_TYPES

        return False
