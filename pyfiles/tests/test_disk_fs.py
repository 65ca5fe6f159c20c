#!/usr/bin/env python3
"""
Disk File System Tests

Every test works inside its own temporary directory.

Author: YSNRFD
Version: 1.0.0
"""

import errno
import os
import shutil
import stat
import tempfile
import unittest

from pyfiles.exceptions import IOError
from pyfiles.filesystem import FileSystem


class DiskTestCase(unittest.TestCase):
    """Base class: a FileSystem and a scratch directory."""

    def setUp(self):
        self.fs = FileSystem()
        self.tmp = tempfile.mkdtemp(prefix="pyfiles-")

    def tearDown(self):
        shutil.rmtree(self.tmp, ignore_errors=True)

    def path(self, *tokens):
        return os.path.join(self.tmp, *tokens)


class TestDiskReadWrite(DiskTestCase):
    """Test reading and writing files."""

    def test_write_then_readlines(self):
        path = self.path("app.rb")
        self.fs.write(path, ["class App\n", "end"])

        self.assertEqual(self.fs.readlines(path), ["class App\n", "end\n"])
        self.assertEqual(self.fs.read(path), "class App\nend\n")

    def test_write_creates_directories(self):
        path = self.path("path", "to", "file.rb")
        self.fs.write(path, "x")

        self.assertTrue(os.path.isdir(self.path("path", "to")))
        self.assertEqual(self.fs.read(path), "x")

    def test_read_missing(self):
        """Host failures surface as IOError keeping the original cause."""
        path = self.path("missing.rb")

        with self.assertRaises(IOError) as ctx:
            self.fs.read(path)

        self.assertEqual(ctx.exception.errno, errno.ENOENT)
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)
        self.assertIs(ctx.exception.__cause__, ctx.exception.cause)
        self.assertEqual(ctx.exception.context["path"], path)

    def test_touch_preserves_content(self):
        path = self.path("app.rb")
        self.fs.write(path, "x")
        self.fs.touch(path)

        self.assertEqual(self.fs.read(path), "x")

    def test_touch_creates_directories(self):
        path = self.path("path", "to", "file.rb")
        self.fs.touch(path)

        self.assertEqual(self.fs.read(path), "")

    def test_touch_directory(self):
        with self.assertRaises(IOError) as ctx:
            self.fs.touch(self.tmp)

        self.assertEqual(ctx.exception.errno, errno.EISDIR)

    def test_open(self):
        path = self.path("lib", "app.rb")

        with self.fs.open(path, "w") as f:
            f.write("class App\nend\n")

        self.assertEqual(self.fs.read(path), "class App\nend\n")


class TestDiskDirectories(DiskTestCase):
    """Test directory operations."""

    def test_mkdir(self):
        self.fs.mkdir(self.path("a", "b"))
        self.assertTrue(self.fs.directory(self.path("a", "b")))

    def test_mkdir_p(self):
        path = self.path("a", "b", "file.rb")
        self.fs.mkdir_p(path)

        self.assertTrue(self.fs.directory(self.path("a", "b")))
        self.assertFalse(self.fs.exist(path))

    def test_entries(self):
        self.fs.write(self.path("lib", "app.rb"), "")
        self.fs.mkdir(self.path("lib", "models"))

        self.assertEqual(
            sorted(self.fs.entries(self.path("lib"))),
            sorted([".", "..", "app.rb", "models"])
        )

    def test_chdir_restores_on_failure(self):
        previous = os.getcwd()

        with self.assertRaises(RuntimeError):
            with self.fs.chdir(self.tmp):
                self.assertEqual(
                    os.path.realpath(self.fs.pwd()),
                    os.path.realpath(self.tmp)
                )
                raise RuntimeError("boom")

        self.assertEqual(os.getcwd(), previous)

    def test_chdir_missing(self):
        previous = os.getcwd()

        with self.assertRaises(IOError):
            with self.fs.chdir(self.path("missing")):
                pass

        self.assertEqual(os.getcwd(), previous)

    def test_expand_path(self):
        self.assertEqual(self.fs.expand_path("app.rb", self.tmp), self.path("app.rb"))
        self.assertEqual(self.fs.expand_path(self.path("x"), "/elsewhere"), self.path("x"))

    def test_join(self):
        self.assertEqual(self.fs.join("a", ["b", "c"]), os.path.join("a", "b", "c"))


class TestDiskCopyAndRemove(DiskTestCase):
    """Test cp, rm and rm_rf."""

    def setUp(self):
        super().setUp()
        self.source = self.path("lib", "app.rb")
        self.fs.write(self.source, ["class App", "end"])

    def test_cp(self):
        destination = self.path("backup", "lib", "app.rb")
        self.fs.cp(self.source, destination)

        self.assertEqual(self.fs.read(destination), "class App\nend\n")
        self.assertEqual(self.fs.read(self.source), "class App\nend\n")

    def test_rm(self):
        self.fs.rm(self.source)
        self.assertFalse(self.fs.exist(self.source))

    def test_rm_missing(self):
        with self.assertRaises(IOError):
            self.fs.rm(self.path("missing.rb"))

    def test_rm_rf(self):
        self.fs.rm_rf(self.path("lib"))
        self.assertFalse(self.fs.exist(self.path("lib")))

    def test_rm_rf_missing(self):
        with self.assertRaises(IOError):
            self.fs.rm_rf(self.path("missing"))


@unittest.skipIf(os.name == "nt", "POSIX permissions only")
class TestDiskPermissions(DiskTestCase):
    """Test chmod and executable."""

    def test_chmod(self):
        path = self.path("bin", "run")
        self.fs.write(path, "#!/bin/sh\n")
        self.fs.chmod(path, 0o755)

        self.assertEqual(stat.S_IMODE(os.stat(path).st_mode), 0o755)
        self.assertEqual(self.fs.mode(path), 0o755)
        self.assertTrue(self.fs.executable(path))

    def test_chmod_missing(self):
        with self.assertRaises(IOError):
            self.fs.chmod(self.path("missing"), 0o755)


if __name__ == '__main__':
    unittest.main()
