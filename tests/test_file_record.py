#!/usr/bin/env python3
"""
Unit tests for client/files/file_record.py

Covers the observable record and the display helpers used by the GUI.
"""

import unittest
from unittest.mock import Mock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from client.files.file_record import (
    ClientFileRecord, TransferStatus, StatusColor,
    format_size, icon_for, progress_percent, build_rename_target
)
from common.protocol_definitions import FileEntry


class TestDisplayHelpers(unittest.TestCase):
    """Test cases for size text, icons and percentages."""

    def test_format_size(self):
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(1023), "1023 B")
        self.assertEqual(format_size(1024), "1 KB")
        self.assertEqual(format_size(1024 * 1024 - 1), "1023 KB")
        self.assertEqual(format_size(5 * 1024 * 1024 + 7), "5 MB")

    def test_icon_for(self):
        self.assertEqual(icon_for("photo.PNG"), '🖼')
        self.assertEqual(icon_for("a/b/pic.jpg"), '🖼')
        self.assertEqual(icon_for("backup.rar"), '📦')
        self.assertEqual(icon_for("notes.txt"), '📄')
        self.assertEqual(icon_for("Makefile"), '📄')

    def test_progress_percent_floors(self):
        self.assertEqual(progress_percent(4096, 10000), 40)
        self.assertEqual(progress_percent(9999, 10000), 99)
        self.assertEqual(progress_percent(10000, 10000), 100)
        self.assertEqual(progress_percent(0, 0), 100)


class TestRenameTarget(unittest.TestCase):
    """Test cases for building rename destinations."""

    def test_keeps_folder(self):
        self.assertEqual(build_rename_target("docs/a.txt", "b.txt"), "docs/b.txt")

    def test_appends_old_extension(self):
        self.assertEqual(build_rename_target("docs/report.pdf", "final"), "docs/final.pdf")

    def test_root_level(self):
        self.assertEqual(build_rename_target("a.txt", "b.md"), "b.md")

    def test_blank_name_cancels(self):
        self.assertIsNone(build_rename_target("a.txt", "   "))
        self.assertIsNone(build_rename_target("a.txt", None))


class TestClientFileRecord(unittest.TestCase):
    """Test cases for the observable record."""

    def test_from_entry(self):
        record = ClientFileRecord.from_entry(FileEntry("pics/cat.png", 2048))

        self.assertEqual(record.name, "cat.png")
        self.assertEqual(record.size_text, "2 KB")
        self.assertEqual(record.icon, '🖼')
        self.assertEqual(record.status, TransferStatus.STORED)
        self.assertEqual(record.color, StatusColor.STORED)
        self.assertEqual(record.progress, 100)

    def test_for_upload(self):
        record = ClientFileRecord.for_upload("a.zip", 10)
        self.assertEqual(record.status, TransferStatus.UPLOADING)
        self.assertEqual(record.progress, 0)
        self.assertEqual(record.icon, '📦')

    def test_update_notifies_changed_fields(self):
        """Test that listeners get the record and only the fields that changed."""
        record = ClientFileRecord(path="a.txt")
        listener = Mock()
        record.subscribe(listener)

        changed = record.update(status=TransferStatus.UPLOADING, progress=0)

        self.assertEqual(changed, ['status'])
        listener.assert_called_once_with(record, ['status'])

    def test_update_without_change_is_silent(self):
        record = ClientFileRecord(path="a.txt")
        listener = Mock()
        record.subscribe(listener)

        record.update(progress=0)

        listener.assert_not_called()

    def test_unsubscribe(self):
        record = ClientFileRecord(path="a.txt")
        listener = Mock()
        unsubscribe = record.subscribe(listener)
        unsubscribe()

        record.update(progress=50)

        listener.assert_not_called()

    def test_unknown_field_rejected(self):
        record = ClientFileRecord(path="a.txt")
        with self.assertRaises(AttributeError):
            record.update(colour="Red")
        with self.assertRaises(AttributeError):
            record.update(_listeners=[])

    def test_set_progress_adapter(self):
        record = ClientFileRecord(path="a.txt")
        record.set_progress(8192, 10000)
        self.assertEqual(record.progress, 81)

    def test_name_defaults_to_basename(self):
        self.assertEqual(ClientFileRecord(path="x/y/z.bin").name, "z.bin")


if __name__ == '__main__':
    unittest.main()
