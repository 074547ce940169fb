"""
测试日志模块

该模块包含日志系统的单元测试。
"""

import os
import shutil
import tempfile
from unittest import TestCase
from unittest.mock import patch

import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from loguru import logger as loguru_logger

from common.logger import (
    LoggerConfig, LogLevel, LoggerFactory, BaseLogger, RotationConfig,
    logger, logger_factory,
)
from common.logger.logger_config import config_manager
from common.utils.singleton import SingletonMeta


class TestLoggerConfig(TestCase):
    """测试日志配置类"""

    def test_default_config(self):
        """测试默认配置"""
        config = LoggerConfig()

        self.assertEqual(config.level, LogLevel.INFO)
        self.assertEqual(config.log_dir, "logs")
        self.assertFalse(config.enable_file_logging)
        self.assertTrue(config.enable_console_logging)

    def test_from_env(self):
        """测试从环境变量创建配置"""
        with patch.dict(os.environ, {
            'LOG_LEVEL': 'ERROR',
            'LOG_DIR': '/tmp/env_logs',
            'LOG_ENABLE_FILE': 'true',
            'LOG_COLORIZE': 'false',
            'LOG_SERVICE_NAME': 'env_service',
            'LOG_ROTATION_SIZE': '5 MB',
        }):
            config = LoggerConfig.from_env()

        self.assertEqual(config.level, LogLevel.ERROR)
        self.assertEqual(config.log_dir, '/tmp/env_logs')
        self.assertTrue(config.enable_file_logging)
        self.assertFalse(config.colorize)
        self.assertEqual(config.service_name, 'env_service')
        self.assertEqual(config.rotation.size, '5 MB')

    def test_get_log_file_path(self):
        """测试获取日志文件路径"""
        config = LoggerConfig(service_name='sqlrepo-gen', log_dir='/tmp/logs')

        path = config.get_log_file_path('general')

        self.assertEqual(path, os.path.join('/tmp/logs', 'sqlrepo-gen', 'general_{time:YYYY-MM-DD}.log'))

    def test_from_env_invalid_level(self):
        """测试环境变量中的日志级别无效"""
        with patch.dict(os.environ, {'LOG_LEVEL': 'LOUD'}):
            with self.assertRaises(ValueError):
                LoggerConfig.from_env()

    def test_file_sink_config(self):
        """测试文件输出的轮转配置"""
        config = LoggerConfig(service_name='svc', rotation=RotationConfig(size='1 MB', retention=3))

        loguru_config = config.get_loguru_config('general')

        self.assertEqual(loguru_config['sink'], config.get_log_file_path('general'))
        self.assertEqual(loguru_config['rotation'], '1 MB')
        self.assertEqual(loguru_config['retention'], 3)


class TestBaseLogger(TestCase):
    """测试基础日志器"""

    def setUp(self):
        """设置测试环境"""
        self.temp_dir = tempfile.mkdtemp()
        self.config = LoggerConfig(
            log_dir=self.temp_dir,
            service_name='test',
            enable_console_logging=False,
        )
        self.logger = BaseLogger('test', self.config)
        self.logger._setup_logger()

        self.records = []
        self.sink_id = loguru_logger.add(lambda message: self.records.append(message.record), level="TRACE")

    def tearDown(self):
        """清理测试环境"""
        try:
            loguru_logger.remove(self.sink_id)
        except ValueError:
            # 重建处理器时已被移除
            pass
        self.logger.close()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_logging_methods(self):
        """测试日志记录方法"""
        self.logger.debug("debug message")
        self.logger.info("info message")
        self.logger.warning("warning message")
        self.logger.error("error message")

        self.assertEqual(
            [(r["level"].name, r["message"]) for r in self.records],
            [
                ("DEBUG", "debug message"),
                ("INFO", "info message"),
                ("WARNING", "warning message"),
                ("ERROR", "error message"),
            ],
        )

    def test_message_arguments(self):
        """测试参数化消息，花括号原样保留"""
        self.logger.info("生成 {} 个仓库", 3)
        self.logger.info("class A: {x}")

        self.assertEqual([r["message"] for r in self.records], ["生成 3 个仓库", "class A: {x}"])

    def test_caller_location(self):
        """测试日志位置指向调用方"""
        self.logger.info("where")

        self.assertEqual(self.records[0]["function"], "test_caller_location")

    def test_context_binding(self):
        """测试上下文绑定"""
        bound_logger = self.logger.bind(file="user.py")
        bound_logger.info("bound")

        self.assertIsInstance(bound_logger, BaseLogger)
        self.assertEqual(self.records[0]["extra"]["file"], "user.py")
        self.assertEqual(self.records[0]["extra"]["logger_name"], "test")
        self.assertNotIn("file", self.logger._context)

    def test_exception(self):
        """测试异常记录"""
        try:
            raise ValueError("boom")
        except ValueError:
            self.logger.exception("failed")

        self.assertEqual(self.records[0]["level"].name, "ERROR")
        self.assertIs(self.records[0]["exception"].type, ValueError)

    def test_file_logging(self):
        """测试文件输出"""
        config = LoggerConfig(log_dir=self.temp_dir, service_name='file_test',
                              enable_console_logging=False, enable_file_logging=True)
        file_logger = BaseLogger('general', config)

        file_logger.info("to file")
        file_logger.close()

        log_dir = os.path.join(self.temp_dir, 'file_test')
        self.assertTrue(os.path.isdir(log_dir))
        self.assertEqual(len(os.listdir(log_dir)), 1)

    def test_level_methods(self):
        """测试其余级别方法"""
        self.logger.trace("t")
        self.logger.success("s")
        self.logger.critical("c")

        self.assertEqual([r["level"].name for r in self.records], ["TRACE", "SUCCESS", "CRITICAL"])


class TestLoggerFactory(TestCase):
    """测试日志工厂"""

    def setUp(self):
        """使用独立的工厂实例"""
        SingletonMeta.remove_instance(LoggerFactory)

    def tearDown(self):
        """恢复全局工厂实例"""
        LoggerFactory().cleanup()
        config_manager.reset()
        SingletonMeta._instances[LoggerFactory] = logger_factory

    def test_singleton(self):
        """测试单例模式"""
        self.assertIs(LoggerFactory(), LoggerFactory())

    def test_initialization(self):
        """测试工厂初始化"""
        factory = LoggerFactory()
        factory.initialize(service_name="sqlrepo-gen", level="debug")

        config = factory.get_logger("general").config
        self.assertEqual(config.service_name, 'sqlrepo-gen')
        self.assertEqual(config.level, LogLevel.DEBUG)

    def test_get_logger_cached(self):
        """测试同名日志器只创建一次"""
        factory = LoggerFactory()

        self.assertIs(factory.get_logger("general"), factory.get_logger("general"))
        self.assertIsNot(factory.get_logger("general"), factory.get_logger("other"))

    def test_reinitialize_updates_existing_loggers(self):
        """测试重复初始化时已创建的日志器使用新配置"""
        factory = LoggerFactory()
        general = factory.get_logger("general")

        factory.initialize(service_name="sqlrepo-gen", level="warning")

        self.assertEqual(general.config.level, LogLevel.WARNING)
        self.assertEqual(general.config.service_name, 'sqlrepo-gen')

    def test_initialize_with_explicit_config(self):
        """测试传入配置时不读取环境变量"""
        factory = LoggerFactory()

        with patch.dict(os.environ, {'LOG_LEVEL': 'LOUD'}):
            with self.assertRaises(ValueError):
                factory.initialize(service_name="sqlrepo-gen")
            factory.initialize(service_name="sqlrepo-gen", config=LoggerConfig())

        self.assertEqual(factory.get_logger("general").config.level, LogLevel.INFO)


class TestGlobalLogger(TestCase):
    """测试全局日志对象"""

    def test_proxy_delegates_to_general_logger(self):
        """测试代理转发到通用日志器"""
        self.assertEqual(logger.name, "general")
        self.assertIs(logger.config, logger_factory.get_logger("general").config)
