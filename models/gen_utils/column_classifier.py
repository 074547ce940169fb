"""
字段分类模块

按字段名把模型字段划分为系统字段和可变字段。
系统字段的值由存储层维护，不出现在create的参数和INSERT语句中，
但读取时仍然需要回填到模型上。
"""

from dataclasses import replace
from typing import List, Sequence, Tuple

from .model_scanner import FieldClassification, FieldDefinition


# 小写比较，同时包含不带下划线的写法
SYSTEM_COLUMNS = frozenset({
    'id',
    'created_at',
    'updated_at',
    'deleted_at',
    'createdat',
    'updatedat',
    'deletedat',
})


class ColumnClassifier:
    """字段分类器，只看字段名，不看类型和注解"""

    def __init__(self, system_columns=SYSTEM_COLUMNS):
        self.system_columns = frozenset(name.lower() for name in system_columns)

    def classify_field(self, field: FieldDefinition) -> FieldClassification:
        if field.name.lower() in self.system_columns:
            return FieldClassification.SYSTEM
        return FieldClassification.MUTABLE

    def classify(self, fields: Sequence[FieldDefinition]) -> Tuple[List[FieldDefinition], List[FieldDefinition]]:
        """
        划分字段

        Args:
            fields: 按声明顺序排列的字段

        Returns:
            Tuple[List[FieldDefinition], List[FieldDefinition]]:
                (可变字段, 全部字段)，两者都保持声明顺序
        """
        all_fields = [replace(f, classification=self.classify_field(f)) for f in fields]
        mutable_fields = [f for f in all_fields if f.classification is FieldClassification.MUTABLE]
        return mutable_fields, all_fields
