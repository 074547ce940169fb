"""
仓库生成器异常模块

定义生成流程中的三类异常：
- ConfigurationError: 输入配置错误，生成开始前即终止
- ConflictError: 模型的仓库类已存在，跳过该模型继续处理
- SynthesisError: 解析、格式化或写入失败，终止整个批次
"""

from typing import Optional


class GeneratorError(Exception):
    """生成器基础异常"""

    # 是否允许跳过当前模型继续处理
    recoverable = False

    def __init__(self, message: str, error_code: Optional[int] = None):
        """
        初始化异常

        Args:
            message: 异常消息
            error_code: 错误代码
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class ConfigurationError(GeneratorError):
    """配置异常（输入目录缺失或无效等）"""

    def __init__(self, message: str):
        super().__init__(f"配置错误: {message}", error_code=2)


class ConflictError(GeneratorError):
    """仓库冲突异常"""

    recoverable = True

    def __init__(self, model_name: str, repository_name: str, reason: Optional[str] = None):
        """
        初始化异常

        Args:
            model_name: 模型类名
            repository_name: 推导出的仓库类名
            reason: 冲突原因，默认为仓库类已存在
        """
        reason = reason or f"仓库类已存在 -> {repository_name}"
        super().__init__(f"跳过模型 {model_name}: {reason}", error_code=409)
        self.model_name = model_name
        self.repository_name = repository_name
        self.reason = reason


class SynthesisError(GeneratorError):
    """生成异常（解析、格式化、写入失败）"""

    def __init__(self, path: str, reason: str):
        """
        初始化异常

        Args:
            path: 出错的文件路径
            reason: 失败原因
        """
        super().__init__(f"生成失败: {path} - {reason}", error_code=1)
        self.path = path
        self.reason = reason
