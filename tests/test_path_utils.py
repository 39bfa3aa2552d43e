#!/usr/bin/env python3
"""
Unit tests for common/path_utils.py
"""

import unittest
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.path_utils import sanitize, resolve_in_root, relative_wire_path


class TestSanitize(unittest.TestCase):
    """Test cases for client path sanitization."""

    def test_plain_path_unchanged(self):
        self.assertEqual(sanitize("docs/report.pdf"), "docs/report.pdf")

    def test_parent_segments_removed(self):
        """Test that traversal paths lose every '..' and the leading separator."""
        cases = [
            "../etc/passwd",
            "../../secret.txt",
            "a/../../b.txt",
            "..\\..\\windows\\system.ini",
            "/../x",
            "....//y",
        ]
        for raw in cases:
            with self.subTest(raw=raw):
                result = sanitize(raw)
                self.assertNotIn("..", result.split("/"))
                self.assertNotIn("..", result)
                self.assertFalse(result.startswith("/"))
                self.assertFalse(result.startswith("\\"))

    def test_removes_dots_anywhere(self):
        """Test that '..' is removed even inside a name."""
        self.assertEqual(sanitize("my..file.txt"), "myfile.txt")

    def test_leading_separators_stripped(self):
        self.assertEqual(sanitize("///abs/path.txt"), "abs/path.txt")
        self.assertEqual(sanitize("\\\\share\\f.txt"), "share/f.txt")

    def test_backslashes_normalized(self):
        self.assertEqual(sanitize("folder\\sub\\a.txt"), "folder/sub/a.txt")

    def test_traversal_result(self):
        self.assertEqual(sanitize("../../escape.txt"), "escape.txt")


class TestResolve(unittest.TestCase):
    """Test cases for joining paths to the storage root."""

    def test_resolves_inside_root(self):
        root = Path("/srv/cloud-data")
        self.assertEqual(resolve_in_root(root, "../../etc/passwd"), root / "etc/passwd")

    def test_relative_wire_path_uses_forward_slashes(self):
        root = Path("/srv/cloud-data")
        self.assertEqual(relative_wire_path(root, root / "a" / "b.txt"), "a/b.txt")


if __name__ == '__main__':
    unittest.main()
