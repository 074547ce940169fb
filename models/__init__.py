"""
models 模块

数据模型相关工具，包括Repository代码生成器(gen_utils)和示例模型(example)。
"""
