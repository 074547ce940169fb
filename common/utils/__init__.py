"""
common/utils 模块

通用工具函数和类。
"""

from .singleton import SingletonMeta

__all__ = ['SingletonMeta']
