"""
Repository类生成器模块

负责根据扫描到的数据模型生成对应的Repository类源码。
生成的Repository类通过DB-API连接（默认sqlite3）执行增删改查，
SQL语句使用?占位符。
"""

import keyword
from typing import List, Sequence
from dataclasses import dataclass, field

from common.logger import logger
from .model_scanner import FieldDefinition


GENERATOR_NAME = "sqlrepo-gen"


@dataclass
class GenerationContext:
    """单个模型的生成上下文，只在一次生成调用内有效"""
    model_name: str
    repository_name: str
    table_name: str
    mutable_column_names: List[str] = field(default_factory=list)
    placeholder_masks: List[str] = field(default_factory=list)
    argument_names: List[str] = field(default_factory=list)
    typed_arguments: List[str] = field(default_factory=list)
    scan_targets: List[str] = field(default_factory=list)


class RepositoryGenerator:
    """
    Repository类生成器

    生成create/read/read_all/update/delete五个方法。
    update只生成需要手工补全的占位实现：生成器无法知道调用方要修改哪些列。
    """

    def __init__(self, storage_module: str = "sqlite3"):
        """
        初始化生成器

        Args:
            storage_module: 生成代码使用的存储访问模块，需提供Connection和Cursor类型
        """
        self.storage_module = storage_module
        self.logger = logger

    def build_context(self, model_name: str, repository_name: str, table_name: str,
                      mutable_fields: Sequence[FieldDefinition],
                      all_fields: Sequence[FieldDefinition]) -> GenerationContext:
        """
        计算生成所需的派生名称和列表

        Args:
            model_name: 模型类名
            repository_name: 仓库类名
            table_name: 表名
            mutable_fields: 可变字段
            all_fields: 全部字段

        Returns:
            GenerationContext: 生成上下文
        """
        context = GenerationContext(
            model_name=model_name,
            repository_name=repository_name,
            table_name=table_name,
        )

        for f in mutable_fields:
            argument_name = self._argument_name(f.name)
            context.mutable_column_names.append(f.name.lower())
            context.placeholder_masks.append("?")
            context.argument_names.append(argument_name)
            context.typed_arguments.append(f"{argument_name}: {f.declared_type}")

        context.scan_targets = [f"m.{self._attribute_name(model_name, f.name)}" for f in all_fields]
        return context

    def generate(self, model_name: str, repository_name: str, table_name: str,
                 mutable_fields: Sequence[FieldDefinition],
                 all_fields: Sequence[FieldDefinition]) -> str:
        """
        生成Repository类源码

        Returns:
            str: 未格式化的源码
        """
        context = self.build_context(model_name, repository_name, table_name,
                                     mutable_fields, all_fields)

        code_parts = [
            self._generate_header(context),
            self._generate_class_definition(context),
            self._generate_create(context),
            self._generate_read(context),
            self._generate_read_all(context),
            self._generate_update(context),
            self._generate_delete(context),
        ]

        self.logger.debug(f"生成Repository类: {repository_name} (表: {table_name})")
        return '\n\n'.join(code_parts) + '\n'

    def _argument_name(self, field_name: str) -> str:
        """字段名转换为create的参数名，避开关键字和self"""
        name = field_name.lower()
        if keyword.iskeyword(name) or name == 'self':
            name += '_'
        return name

    @staticmethod
    def _attribute_name(model_name: str, field_name: str) -> str:
        """
        回填目标的属性名

        生成的代码位于仓库类内部，__x形式的私有字段需要写成模型类改写后的名称，
        否则会被改写成仓库类的私有属性。
        """
        if field_name.startswith('__') and not field_name.endswith('__'):
            return f"_{model_name.lstrip('_')}{field_name}"
        return field_name

    def _generate_header(self, context: GenerationContext) -> str:
        return f'''# Code generated by {GENERATOR_NAME} (model: {context.model_name})
# This section is editable.
'''

    def _generate_class_definition(self, context: GenerationContext) -> str:
        return f'''class {context.repository_name}:
    def __init__(self, db_ctx: {self.storage_module}.Connection):
        self.db_ctx = db_ctx'''

    def _generate_create(self, context: GenerationContext) -> str:
        params = ''.join(f", {arg}" for arg in context.typed_arguments)
        columns = ','.join(context.mutable_column_names)
        masks = ','.join(context.placeholder_masks)
        values = self._tuple_literal(context.argument_names)

        return f'''    def create(self{params}) -> {self.storage_module}.Cursor:
        return self.db_ctx.cursor().execute("INSERT INTO {context.table_name}({columns}) VALUES({masks})", {values})'''

    def _generate_read(self, context: GenerationContext) -> str:
        model = context.model_name
        lines = [
            f"    def read(self, id: int) -> {model} | None:",
            f'        row = self.db_ctx.execute("SELECT * FROM {context.table_name} WHERE id = ?", (id,)).fetchone()',
            "        if row is None:",
            "            return None",
            f"        m = {model}.__new__({model})",
        ]
        lines.extend(self._scan_lines(context, indent=8))
        lines.append("        return m")
        return '\n'.join(lines)

    def _generate_read_all(self, context: GenerationContext) -> str:
        model = context.model_name
        lines = [
            f"    def read_all(self) -> list[{model}]:",
            "        res = []",
            f'        for row in self.db_ctx.execute("SELECT * FROM {context.table_name}"):',
            f"            m = {model}.__new__({model})",
        ]
        lines.extend(self._scan_lines(context, indent=12))
        lines.append("            res.append(m)")
        lines.append("        return res")
        return '\n'.join(lines)

    def _generate_update(self, context: GenerationContext) -> str:
        return f'''    def update(self, id: int) -> {self.storage_module}.Cursor:
        # FIXME Set your query
        return self.db_ctx.cursor().execute("UPDATE {context.table_name} SET ...YOUR_QUERY... WHERE id = ?", (id,))'''

    def _generate_delete(self, context: GenerationContext) -> str:
        return f'''    def delete(self, id: int) -> {self.storage_module}.Cursor:
        return self.db_ctx.execute("DELETE FROM {context.table_name} WHERE id = ?", (id,))'''

    def _scan_lines(self, context: GenerationContext, indent: int) -> List[str]:
        """把一行结果按声明顺序解包到模型属性上"""
        if not context.scan_targets:
            return []
        return [f"{' ' * indent}{self._target_list(context.scan_targets)} = row"]

    @staticmethod
    def _tuple_literal(names: Sequence[str]) -> str:
        if not names:
            return "()"
        if len(names) == 1:
            return f"({names[0]},)"
        return f"({', '.join(names)})"

    @staticmethod
    def _target_list(targets: Sequence[str]) -> str:
        if len(targets) == 1:
            return f"{targets[0]},"
        return ', '.join(targets)
