#!/usr/bin/env python3
"""
Exceptions, Logger, Configuration and Bootstrap Tests

Author: YSNRFD
Version: 1.0.0
"""

import json
import logging
import os
import re
import shutil
import tempfile
import unittest

from pyfiles.core.bootstrap import bootstrap, init_logging
from pyfiles.core.config_loader import Config, ConfigLoader, get_config
from pyfiles.exceptions import (
    Error,
    IOError,
    MissingTargetError,
    UnknownNodeError,
    NotAFileError,
    ConfigValidationError,
)
from pyfiles.filesystem import MemoryFileSystem
from pyfiles.logger import EventLogHandler, LogFormatter, Logger, LogLevel, get_logger


class TestExceptions(unittest.TestCase):
    """Test the exception hierarchy."""

    def test_error(self):
        """Test Error creation and properties."""
        exc = Error("mode should be an integer", context={'path': 'bin/run'})

        self.assertEqual(exc.message, "mode should be an integer")
        self.assertEqual(exc.error_code, 5000)
        self.assertEqual(str(exc), "[Error 5000] mode should be an integer (path=bin/run)")
        self.assertIn("Error(", repr(exc))

    def test_io_error(self):
        """IOError keeps the original OSError."""
        cause = FileNotFoundError(2, "No such file or directory", "a.txt")
        exc = IOError(cause)

        self.assertIsInstance(exc, Error)
        self.assertFalse(isinstance(exc, OSError))
        self.assertIs(exc.cause, cause)
        self.assertEqual(exc.errno, 2)
        self.assertEqual(exc.filename, "a.txt")
        self.assertEqual(exc.error_code, 5001)
        self.assertEqual(exc.context['path'], "a.txt")

    def test_missing_target_error(self):
        exc = MissingTargetError("configure do", "config/app.rb")

        self.assertEqual(exc.target, "configure do")
        self.assertEqual(exc.path, "config/app.rb")
        self.assertEqual(exc.error_code, 5002)
        self.assertIn("cannot find `configure do' in `config/app.rb'", str(exc))

    def test_missing_target_error_with_pattern(self):
        regex = re.compile(r"^\s+end$")
        exc = MissingTargetError(regex, "app.rb")

        self.assertIs(exc.target, regex)
        self.assertIn(regex.pattern, exc.message)

    def test_memory_node_errors(self):
        exc = UnknownNodeError("missing.rb")
        self.assertEqual(exc.segment, "missing.rb")
        self.assertEqual(exc.error_code, 5003)
        self.assertIn("unknown memory node `missing.rb'", str(exc))

        exc = NotAFileError("lib")
        self.assertEqual(exc.segment, "lib")
        self.assertEqual(exc.error_code, 5004)
        self.assertIn("not a memory file `lib'", str(exc))

    def test_config_validation_error(self):
        exc = ConfigValidationError("bad value", key="files.memory")

        self.assertEqual(exc.key, "files.memory")
        self.assertEqual(exc.error_code, 5005)
        self.assertEqual(exc.context['key'], "files.memory")


class TestLogger(unittest.TestCase):
    """Test the logging system."""

    def setUp(self):
        Logger.shutdown()

    def tearDown(self):
        Logger.shutdown()

    def test_logger_creation(self):
        """Test logger creation and singleton."""
        log1 = Logger('test1')
        log2 = get_logger('test1')

        self.assertIs(log1, log2)
        self.assertEqual(log1.subsystem, 'test1')

    def test_log_levels(self):
        """Test log level ordering and lookup."""
        self.assertTrue(LogLevel.ERROR > LogLevel.INFO)
        self.assertTrue(LogLevel.DEBUG < LogLevel.WARNING)
        self.assertIs(LogLevel.from_name("debug"), LogLevel.DEBUG)

        with self.assertRaises(ValueError):
            LogLevel.from_name("loud")

    def test_quiet_until_initialized(self):
        get_logger('test2').error("nobody listens")
        self.assertEqual(Logger.get_event_logs(), [])

    def test_event_logs(self):
        Logger.initialize(level=LogLevel.INFO, console_output=False)
        log = get_logger('test3')

        log.debug("hidden")
        log.info("shown", context={'path': 'a.rb'})

        logs = Logger.get_event_logs(subsystem='test3')
        self.assertEqual([l['message'] for l in logs], ["shown"])
        self.assertEqual(logs[0]['context'], {'path': 'a.rb'})
        self.assertEqual(logs[0]['level'], "INFO")

    def test_initialize_is_idempotent(self):
        Logger.initialize(level=LogLevel.INFO, console_output=False)
        Logger.initialize(level=LogLevel.DEBUG, console_output=False)

        get_logger('test4').debug("hidden")
        self.assertEqual(Logger.get_event_logs(subsystem='test4'), [])

    def test_log_file(self):
        tmp = tempfile.mkdtemp(prefix="pyfiles-")
        self.addCleanup(shutil.rmtree, tmp, True)
        log_file = os.path.join(tmp, "logs", "pyfiles.log")

        Logger.initialize(level=LogLevel.DEBUG, log_file=log_file, console_output=False)
        get_logger('editor').debug("Removed line", context={'path': 'a.rb', 'line': 3})
        Logger.shutdown()

        with open(log_file, encoding='utf-8') as f:
            output = f.read()

        self.assertIn("[editor] Removed line {path=a.rb line=3}", output)
        self.assertIn("DEBUG", output)


class TestLogFormatter(unittest.TestCase):
    """Test log record formatting."""

    def make_record(self, **extra):
        record = logging.LogRecord(
            'pyfiles.memory_fs', logging.WARNING, __file__, 1, "Wrote file", None, None
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_format(self):
        formatter = LogFormatter(use_colors=False)
        line = formatter.format(self.make_record(subsystem='memory_fs', context={'size': 3}))

        self.assertRegex(line, r"^\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d\.\d{3}\] WARNING ")
        self.assertTrue(line.endswith("[memory_fs] Wrote file {size=3}"))

    def test_format_without_extra(self):
        line = LogFormatter(use_colors=False).format(self.make_record())
        self.assertTrue(line.endswith("WARNING  Wrote file"))


class TestEventLogHandler(unittest.TestCase):
    """Test the in-memory log buffer."""

    def test_buffer_is_bounded(self):
        handler = EventLogHandler(max_entries=2)
        for message in ("a", "b", "c"):
            handler.emit(logging.LogRecord('pyfiles', logging.INFO, __file__, 1, message, None, None))

        self.assertEqual([l['message'] for l in handler.get_logs()], ["b", "c"])

        handler.clear()
        self.assertEqual(handler.get_logs(), [])


class ConfigTestCase(unittest.TestCase):
    """Base class: a scratch directory and a clean loader."""

    def setUp(self):
        self.tmp = tempfile.mkdtemp(prefix="pyfiles-")
        self.loader = ConfigLoader()
        self.loader.reset()

    def tearDown(self):
        self.loader.reset()
        shutil.rmtree(self.tmp, ignore_errors=True)

    def config_file(self, data, name="pyfiles.json"):
        path = os.path.join(self.tmp, name)
        with open(path, 'w', encoding='utf-8') as f:
            if isinstance(data, str):
                f.write(data)
            else:
                json.dump(data, f)
        return path


class TestConfig(ConfigTestCase):
    """Test the configuration system."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()

        self.assertFalse(config.files.memory)
        self.assertEqual(config.files.indentation, 2)
        self.assertEqual(config.logging.level, "INFO")
        self.assertIsNone(config.logging.log_file)

    def test_singleton(self):
        self.assertIs(ConfigLoader(), self.loader)
        self.assertIs(get_config(), self.loader.config)

    def test_load(self):
        path = self.config_file({
            'files': {'memory': True, 'indentation': 4},
            'logging': {'level': 'DEBUG'},
        })
        config = self.loader.load(path)

        self.assertTrue(config.files.memory)
        self.assertEqual(config.files.indentation, 4)
        self.assertEqual(config.logging.level, "DEBUG")
        self.assertTrue(config.logging.console_output)
        self.assertIs(get_config(), config)

    def test_load_missing_file(self):
        with self.assertRaises(ConfigValidationError):
            self.loader.load(os.path.join(self.tmp, "missing.json"))

    def test_load_invalid_json(self):
        with self.assertRaises(ConfigValidationError):
            self.loader.load(self.config_file("{files"))

    def test_load_invalid_values(self):
        cases = [
            ({'files': {'memory': 'yes'}}, "files.memory"),
            ({'files': {'indentation': -1}}, "files.indentation"),
            ({'files': {'indentation': True}}, "files.indentation"),
        ]

        for data, key in cases:
            with self.assertRaises(ConfigValidationError) as ctx:
                self.loader.load(self.config_file(data))

            self.assertEqual(ctx.exception.key, key)

        self.assertEqual(self.loader.config, Config())

    def test_load_invalid_root(self):
        with self.assertRaises(ConfigValidationError):
            self.loader.load(self.config_file([1, 2]))

    def test_get_and_set(self):
        self.assertEqual(self.loader.get('files.indentation'), 2)
        self.assertEqual(self.loader.get('files.missing', 7), 7)

        self.loader.set('files.indentation', 4)
        self.assertEqual(self.loader.get('files.indentation'), 4)

        with self.assertRaises(ConfigValidationError):
            self.loader.set('files.missing', 1)

        with self.assertRaises(ConfigValidationError):
            self.loader.set('missing.key', 1)

    def test_set_validates_values(self):
        """An invalid value is rejected and the previous one kept."""
        with self.assertRaises(ConfigValidationError) as ctx:
            self.loader.set('files.memory', 'yes')

        self.assertEqual(ctx.exception.key, "files.memory")
        self.assertIs(self.loader.get('files.memory'), False)

        with self.assertRaises(ConfigValidationError):
            self.loader.set('files.indentation', -2)

        self.assertEqual(self.loader.get('files.indentation'), 2)

    def test_to_dict(self):
        self.assertEqual(self.loader.to_dict()['files'], {'memory': False, 'indentation': 2})


class TestBootstrap(ConfigTestCase):
    """Test one call setup."""

    def setUp(self):
        super().setUp()
        Logger.shutdown()

    def tearDown(self):
        Logger.shutdown()
        super().tearDown()

    def test_bootstrap(self):
        path = self.config_file({
            'files': {'memory': True, 'indentation': 4},
            'logging': {'level': 'DEBUG', 'console_output': False},
        })
        files = bootstrap(path)
        files.write("app.rb", ["configure do", "end"])
        files.inject_line_at_block_bottom("app.rb", "configure", "root __dir__")

        self.assertIsInstance(files.adapter, MemoryFileSystem)
        self.assertEqual(files.read("app.rb"), "configure do\n    root __dir__\nend\n")

        logs = Logger.get_event_logs(subsystem='bootstrap')
        self.assertEqual(logs[-1]['message'], "pyfiles ready")

    def test_bootstrap_defaults(self):
        self.loader.set('logging.console_output', False)
        files = bootstrap()

        self.assertNotIsInstance(files.adapter, MemoryFileSystem)

    def test_bootstrap_missing_file(self):
        with self.assertRaises(ConfigValidationError):
            bootstrap(os.path.join(self.tmp, "missing.json"))

    def test_init_logging_unknown_level(self):
        config = Config()
        config.logging.level = "LOUD"

        with self.assertRaises(ValueError):
            init_logging(config)


if __name__ == '__main__':
    unittest.main()
