"""
账号数据模型
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class AccountModel:
    """账号"""
    id: int
    email: str
    name: str
    created_at: datetime
