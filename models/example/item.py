"""
道具数据模型
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ItemModel:
    """道具"""
    id: int
    name: str
    description: Optional[str]
    created_at: datetime
    updated_at: datetime
