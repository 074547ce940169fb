"""
单例模式实现

该模块提供线程安全的单例元类。
"""

import threading
from typing import Any, Dict, Type


class SingletonMeta(type):
    """
    线程安全的单例元类

    同一个类无论实例化多少次都返回同一个实例。
    """

    _instances: Dict[Type, Any] = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            with cls._lock:
                # 双重检查锁定模式
                if cls not in cls._instances:
                    cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    @classmethod
    def remove_instance(mcs, cls: Type) -> None:
        """移除指定类的单例实例（主要用于测试）"""
        with mcs._lock:
            mcs._instances.pop(cls, None)
