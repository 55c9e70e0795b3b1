"""
Core Tests

Exceptions, logging and configuration.

Run with: python -m pytest pymemfs/tests/test_core.py -v

Author: YSNRFD
Version: 1.0.0
"""

import errno
import json
import os
import sys
import tempfile
import unittest


class TestExceptions(unittest.TestCase):
    """Test the exception hierarchy."""

    def test_filesystem_exception(self):
        from pymemfs.exceptions import FileSystemException

        exc = FileSystemException("Test error", path='/x', error_code=4999)

        self.assertEqual(exc.message, "Test error")
        self.assertEqual(exc.error_code, 4999)
        self.assertEqual(exc.context['path'], '/x')
        self.assertEqual(str(exc), "[Error 4999] Test error (path=/x)")

    def test_errno_values(self):
        from pymemfs.exceptions import (
            EntryNotFoundError, EntryExistsError, NotDirectoryError,
            IsDirectoryError, DirectoryNotEmptyError, OperationNotPermittedError,
            InvalidArgumentError, SymlinkLoopError,
        )

        self.assertEqual(EntryNotFoundError('/x').errno, errno.ENOENT)
        self.assertEqual(EntryExistsError('/x').errno, errno.EEXIST)
        self.assertEqual(NotDirectoryError('/x').errno, errno.ENOTDIR)
        self.assertEqual(IsDirectoryError('/x').errno, errno.EISDIR)
        self.assertEqual(DirectoryNotEmptyError('/x').errno, errno.ENOTEMPTY)
        self.assertEqual(OperationNotPermittedError('/x').errno, errno.EPERM)
        self.assertEqual(InvalidArgumentError('bad').errno, errno.EINVAL)
        self.assertEqual(SymlinkLoopError('/x').errno, errno.ELOOP)

    def test_error_codes(self):
        from pymemfs.exceptions import EntryNotFoundError, SymlinkLoopError

        self.assertEqual(EntryNotFoundError('/x').error_code, 4001)

        exc = SymlinkLoopError('/x', hops=41)
        self.assertEqual(exc.error_code, 4006)
        self.assertEqual(exc.context['hops'], 41)

    def test_hierarchy(self):
        from pymemfs.exceptions import (
            FileSystemException, EntryNotFoundError,
            IOException, IOCapabilityError, ClosedResourceError,
        )

        self.assertTrue(issubclass(EntryNotFoundError, FileSystemException))
        self.assertTrue(issubclass(IOCapabilityError, IOException))
        self.assertTrue(issubclass(ClosedResourceError, IOException))
        self.assertFalse(issubclass(IOException, FileSystemException))

    def test_io_exceptions(self):
        from pymemfs.exceptions import IOCapabilityError, ClosedResourceError

        exc = IOCapabilityError('/f', operation='writing')
        self.assertEqual(exc.error_code, 5001)
        self.assertIn("not opened for writing", str(exc))

        exc = ClosedResourceError('/d', resource='directory')
        self.assertEqual(exc.error_code, 5002)
        self.assertIn("closed directory", str(exc))


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def setUp(self):
        from pymemfs.logger import Logger, LogLevel

        Logger.shutdown()
        Logger.initialize(level=LogLevel.DEBUG, console=False)

    def tearDown(self):
        from pymemfs.logger import Logger

        Logger.shutdown()

    def test_logger_singleton(self):
        from pymemfs.logger import Logger, get_logger

        log1 = Logger('test1')
        log2 = get_logger('test1')

        self.assertIs(log1, log2)
        self.assertEqual(log1.subsystem, 'test1')

    def test_log_levels(self):
        from pymemfs.logger import LogLevel

        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertTrue(LogLevel.DEBUG < LogLevel.WARNING)
        self.assertEqual(LogLevel.from_name('warning'), LogLevel.WARNING)

        with self.assertRaises(ValueError):
            LogLevel.from_name('loud')

    def test_trace_buffer(self):
        from pymemfs.logger import Logger

        Logger('test2').info("Hello", context={'key': 'value'})
        logs = Logger.get_trace_logs(subsystem='test2')

        self.assertEqual(len(logs), 1)
        self.assertEqual(logs[0]['message'], "Hello")
        self.assertEqual(logs[0]['level'], 'INFO')
        self.assertEqual(logs[0]['context'], {'key': 'value'})

    def test_filesystem_mutations_are_logged(self):
        from pymemfs.logger import Logger
        from pymemfs.core.config_loader import FilesystemConfig
        from pymemfs.filesystem import FileSystem, Identity

        fs = FileSystem(identity=Identity.of(1, 1), config=FilesystemConfig())
        fs.mkdir('/logged')
        fs.rmdir('/logged')

        logs = Logger.get_trace_logs(subsystem='filesystem', limit=1000)
        messages = [(entry['message'], entry['context'].get('path')) for entry in logs]

        self.assertIn(("Created directory", '/logged'), messages)
        self.assertIn(("Removed directory", '/logged'), messages)
        self.assertIn('Filesystem cleared', [entry['message'] for entry in logs])

    def test_formatter(self):
        import logging
        from pymemfs.logger import LogFormatter

        record = logging.LogRecord('pymemfs.filesystem', logging.DEBUG, __file__, 1, "Created", None, None)
        record.subsystem = 'filesystem'
        record.context = {'path': '/a'}

        line = LogFormatter(use_colors=False).format(record)

        self.assertIn('[filesystem] Created {path=/a}', line)

    def test_configure_logging(self):
        from pymemfs import configure_logging
        from pymemfs.core.config_loader import Config, LoggingConfig
        from pymemfs.logger import Logger

        Logger.shutdown()
        self.assertFalse(Logger._initialized)

        configure_logging(Config(logging=LoggingConfig(level='WARNING', console_output=False)))

        self.assertTrue(Logger._initialized)
        self.assertEqual(len(Logger._handlers), 1)

        Logger('test3').info("Below threshold")
        Logger('test3').warning("Kept")
        logs = Logger.get_trace_logs(subsystem='test3')

        self.assertEqual([entry['message'] for entry in logs], ["Kept"])

        Logger.shutdown()
        self.assertFalse(Logger._initialized)
        self.assertEqual(Logger._handlers, [])


class TestConfig(unittest.TestCase):
    """Test the configuration system."""

    def setUp(self):
        from pymemfs.core.config_loader import ConfigLoader

        ConfigLoader().reset()

    def tearDown(self):
        from pymemfs.core.config_loader import ConfigLoader

        ConfigLoader().reset()

    def _write_config(self, data):
        handle, path = tempfile.mkstemp(suffix='.json')
        with os.fdopen(handle, 'w') as f:
            f.write(data if isinstance(data, str) else json.dumps(data))
        self.addCleanup(os.remove, path)
        return path

    def test_default_config(self):
        from pymemfs.core.config_loader import Config

        config = Config()

        self.assertEqual(config.filesystem.umask, 0o022)
        self.assertEqual(config.filesystem.block_size, 4096)
        self.assertEqual(config.filesystem.tmp_dir, '/tmp')
        self.assertEqual(config.filesystem.max_symlink_hops, 40)
        self.assertEqual(config.logging.level, 'INFO')

    def test_config_loader_singleton(self):
        from pymemfs.core.config_loader import ConfigLoader, get_config

        self.assertIs(ConfigLoader(), ConfigLoader())
        self.assertIs(get_config(), ConfigLoader().config)

    def test_load(self):
        from pymemfs.core.config_loader import ConfigLoader

        path = self._write_config({
            'filesystem': {'umask': '077', 'block_size': 512},
            'logging': {'level': 'DEBUG'},
        })
        config = ConfigLoader().load(path)

        self.assertEqual(config.filesystem.umask, 0o077)
        self.assertEqual(config.filesystem.block_size, 512)
        self.assertEqual(config.logging.level, 'DEBUG')

    def test_loaded_config_reaches_filesystem(self):
        from pymemfs.core.config_loader import ConfigLoader
        from pymemfs.filesystem import FileSystem, Identity

        ConfigLoader().load(self._write_config({'filesystem': {'block_size': 1024, 'device': 9}}))
        fs = FileSystem(identity=Identity.of(1, 1))

        self.assertEqual(fs.stat('/').blksize, 1024)
        self.assertEqual(fs.stat('/').dev, 9)

    def test_load_errors(self):
        from pymemfs.core.config_loader import ConfigLoader
        from pymemfs.exceptions import ConfigLoadError, ConfigValidationError

        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load('/definitely/not/here.json')
        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(self._write_config('{not json'))
        with self.assertRaises(ConfigValidationError):
            ConfigLoader().load(self._write_config({'filesystem': {'colour': 'red'}}))

    def test_get_and_set(self):
        from pymemfs.core.config_loader import ConfigLoader
        from pymemfs.exceptions import ConfigValidationError

        loader = ConfigLoader()
        loader.set('filesystem.tmp_dir', '/var/tmp')

        self.assertEqual(loader.get('filesystem.tmp_dir'), '/var/tmp')
        self.assertEqual(loader.get('filesystem.nope', 'fallback'), 'fallback')
        with self.assertRaises(ConfigValidationError):
            loader.set('filesystem.nope', 1)

    def test_to_dict(self):
        from pymemfs.core.config_loader import ConfigLoader

        data = ConfigLoader().to_dict()

        self.assertEqual(data['filesystem']['block_size'], 4096)
        self.assertEqual(data['logging']['console_output'], True)


def run_tests():
    """Run all tests."""
    loader = unittest.TestLoader()
    suite = loader.loadTestsFromModule(sys.modules[__name__])

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
