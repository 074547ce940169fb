"""
Repository生成集成测试

生成代码后导入模型模块，在内存sqlite数据库上执行生成的增删改查方法。
"""

import importlib.util
import os
import shutil
import sqlite3
import tempfile
from unittest import TestCase

import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from models.gen_utils.config import GeneratorConfig
from models.gen_utils.generator_main import ModelRepositoryBuilder


USER_SOURCE = '''\
from dataclasses import dataclass


@dataclass
class UserModel:
    id: int
    name: str
    email: str
    created_at: str


@dataclass
class AuditModel:
    id: int
    created_at: str
'''

SCHEMA = '''
CREATE TABLE user (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE audit (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);
'''


class TestGeneratedRepository(TestCase):
    """测试生成的Repository在sqlite上的行为"""

    module_name = "generated_user_models"

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "user.py")
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(USER_SOURCE)

        ModelRepositoryBuilder(GeneratorConfig(input_dir=self.temp_dir)).run()
        self.module = self._load_module()

        self.conn = sqlite3.connect(":memory:")
        self.conn.executescript(SCHEMA)
        self.repo = self.module.UserRepository(self.conn)

    def tearDown(self):
        self.conn.close()
        sys.modules.pop(self.module_name, None)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _load_module(self):
        spec = importlib.util.spec_from_file_location(self.module_name, self.path)
        module = importlib.util.module_from_spec(spec)
        sys.modules[self.module_name] = module
        spec.loader.exec_module(module)
        return module

    def test_create_and_read(self):
        """测试创建后按id读取，系统字段也被回填"""
        cursor = self.repo.create("alice", "alice@example.com")

        self.assertIsInstance(cursor, sqlite3.Cursor)
        self.assertEqual(cursor.rowcount, 1)

        user = self.repo.read(cursor.lastrowid)
        self.assertIsInstance(user, self.module.UserModel)
        self.assertEqual(user.id, cursor.lastrowid)
        self.assertEqual(user.name, "alice")
        self.assertEqual(user.email, "alice@example.com")
        self.assertIsNotNone(user.created_at)

    def test_read_missing(self):
        """测试读取不存在的记录返回None"""
        self.assertIsNone(self.repo.read(42))

    def test_read_all(self):
        """测试读取全部记录"""
        self.repo.create("alice", "alice@example.com")
        self.repo.create("bob", "bob@example.com")

        users = self.repo.read_all()

        self.assertEqual([u.name for u in users], ["alice", "bob"])
        self.assertEqual([u.id for u in users], [1, 2])

    def test_read_all_propagates_scan_error(self):
        """测试结果列数与字段不一致时直接抛出异常"""
        self.repo.create("alice", "alice@example.com")
        self.conn.execute("ALTER TABLE user ADD COLUMN extra TEXT")

        with self.assertRaises(ValueError):
            self.repo.read_all()

    def test_delete(self):
        """测试删除"""
        user_id = self.repo.create("alice", "alice@example.com").lastrowid

        cursor = self.repo.delete(user_id)

        self.assertEqual(cursor.rowcount, 1)
        self.assertIsNone(self.repo.read(user_id))

    def test_update_requires_manual_query(self):
        """测试update占位实现在补全前无法执行"""
        user_id = self.repo.create("alice", "alice@example.com").lastrowid

        with self.assertRaises(sqlite3.OperationalError):
            self.repo.update(user_id)

    def test_all_system_model(self):
        """测试全部为系统字段的模型也能创建记录"""
        repo = self.module.AuditRepository(self.conn)

        # INSERT INTO audit() VALUES() 不是sqlite支持的语法
        with self.assertRaises(sqlite3.OperationalError):
            repo.create()

        self.conn.execute("INSERT INTO audit DEFAULT VALUES")
        self.assertEqual(len(repo.read_all()), 1)


PAGE_SOURCE = '''\
from dataclasses import dataclass


@dataclass
class PageModel:
    id: int
    cursor: str
    __secret: str
'''


class TestGeneratedRepositoryFieldNames(TestCase):
    """测试与方法体或类私有名称相关的字段名"""

    module_name = "generated_page_models"

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.path = os.path.join(self.temp_dir, "page.py")
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(PAGE_SOURCE)

        ModelRepositoryBuilder(GeneratorConfig(input_dir=self.temp_dir)).run()

        spec = importlib.util.spec_from_file_location(self.module_name, self.path)
        self.module = importlib.util.module_from_spec(spec)
        sys.modules[self.module_name] = self.module
        spec.loader.exec_module(self.module)

        self.conn = sqlite3.connect(":memory:")
        self.conn.execute(
            "CREATE TABLE page (id INTEGER PRIMARY KEY AUTOINCREMENT, cursor TEXT, __secret TEXT)"
        )
        self.repo = self.module.PageRepository(self.conn)

    def tearDown(self):
        self.conn.close()
        sys.modules.pop(self.module_name, None)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_create_binds_field_named_cursor(self):
        """测试字段名为cursor时写入调用方传入的值"""
        page_id = self.repo.create("abc", "s3").lastrowid

        row = self.conn.execute("SELECT cursor, __secret FROM page WHERE id = ?", (page_id,)).fetchone()
        self.assertEqual(row, ("abc", "s3"))

    def test_read_sets_private_model_attribute(self):
        """测试私有字段回填到模型自己的属性上"""
        page_id = self.repo.create("abc", "s3").lastrowid

        page = self.repo.read(page_id)
        pages = self.repo.read_all()

        self.assertEqual(vars(page), {'id': page_id, 'cursor': "abc", '_PageModel__secret': "s3"})
        self.assertEqual([vars(p) for p in pages], [vars(page)])
