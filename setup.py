"""
sqlrepo-gen 安装配置

该文件定义了项目的安装配置、依赖管理和脚本入口点。
"""

from setuptools import setup, find_packages
import os

# 读取版本信息
def get_version():
    """从版本文件获取版本号"""
    version_file = os.path.join(os.path.dirname(__file__), 'VERSION')
    if os.path.exists(version_file):
        with open(version_file, 'r', encoding='utf-8') as f:
            return f.read().strip()
    return '1.0.0'

# 读取README文件
def get_long_description():
    """获取长描述"""
    readme_file = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_file):
        with open(readme_file, 'r', encoding='utf-8') as f:
            return f.read()
    return ''

# 读取依赖文件
def get_requirements():
    """获取依赖列表"""
    requirements_file = os.path.join(os.path.dirname(__file__), 'requirements.txt')
    if os.path.exists(requirements_file):
        with open(requirements_file, 'r', encoding='utf-8') as f:
            requirements = []
            for line in f:
                line = line.strip()
                if line and not line.startswith('#'):
                    requirements.append(line)
            return requirements
    return []

# 开发依赖
dev_requirements = [
    'pytest>=7.4.0',
    'pytest-cov>=4.1.0',
    'flake8>=6.1.0',
    'mypy>=1.7.0',
]

setup(
    # 基本信息
    name='sqlrepo-gen',
    version=get_version(),
    description='为数据模型类生成CRUD Repository代码的工具',
    long_description=get_long_description(),
    long_description_content_type='text/markdown',

    # 分类信息
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Database',
        'Topic :: Software Development :: Code Generators',
    ],

    # 关键词
    keywords=['code generation', 'repository', 'crud', 'sqlite', 'ast'],

    # 许可证
    license='MIT',

    # Python版本要求
    python_requires='>=3.10',

    # 包信息
    packages=find_packages(exclude=['tests*', 'docs*']),
    include_package_data=True,

    # 依赖信息
    install_requires=get_requirements(),
    extras_require={
        'dev': dev_requirements,
        'test': ['pytest>=7.4.0'],
    },

    # 脚本入口点
    entry_points={
        'console_scripts': [
            'sqlrepo-gen=models.gen_utils.generator_main:main',
        ],
    },

    # ZIP安全
    zip_safe=False,
)
