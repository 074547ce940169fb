"""
示例数据模型

可以直接作为生成器的输入: sqlrepo-gen --dir models/example
"""
