#!/usr/bin/env python3
"""
Unit tests for common/protocol_definitions.py

Tests encoding of every command and response form and parsing of
well-formed and malformed lines.
"""

import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from common.exceptions import ProtocolViolation
from common.protocol_definitions import (
    ListCommand, UploadCommand, DownloadCommand, DeleteCommand, RenameCommand,
    FileEntry, EndOfList, DataHeader, ErrorResponse,
    create_list_message, create_upload_message, create_download_message,
    create_delete_message, create_rename_message, create_file_entry_message,
    create_end_message, create_data_message, create_error_message,
    encode_command, parse_command, parse_response
)


class TestCommandEncoding(unittest.TestCase):
    """Test cases for command lines."""

    def test_command_lines(self):
        self.assertEqual(create_list_message(), "LIST")
        self.assertEqual(create_upload_message("a/b.txt", 10), "UPLOAD|a/b.txt|10")
        self.assertEqual(create_download_message("a/b.txt"), "DOWNLOAD|a/b.txt")
        self.assertEqual(create_delete_message("a.txt"), "DELETE|a.txt")
        self.assertEqual(create_rename_message("a.txt", "b/a.txt"), "RENAME|a.txt|b/a.txt")

    def test_negative_upload_size_rejected(self):
        with self.assertRaises(ValueError):
            create_upload_message("a.txt", -1)

    def test_encode_command_dataclasses(self):
        self.assertEqual(encode_command(ListCommand()), "LIST")
        self.assertEqual(encode_command(UploadCommand("x", 0)), "UPLOAD|x|0")
        self.assertEqual(encode_command(RenameCommand("x", "y")), "RENAME|x|y")
        with self.assertRaises(TypeError):
            encode_command(FileEntry("x", 1))


class TestCommandParsing(unittest.TestCase):
    """Test cases for decoding commands on the server."""

    def test_parse_each_command(self):
        self.assertEqual(parse_command("LIST"), ListCommand())
        self.assertEqual(parse_command("UPLOAD|a/b.txt|10"), UploadCommand("a/b.txt", 10))
        self.assertEqual(parse_command("DOWNLOAD|a.txt"), DownloadCommand("a.txt"))
        self.assertEqual(parse_command("DELETE|a.txt"), DeleteCommand("a.txt"))
        self.assertEqual(parse_command("RENAME|a.txt|b/a.txt"), RenameCommand("a.txt", "b/a.txt"))

    def test_unknown_command(self):
        with self.assertRaises(ProtocolViolation):
            parse_command("STAT|a.txt")

    def test_keywords_are_case_sensitive(self):
        with self.assertRaises(ProtocolViolation):
            parse_command("list")

    def test_missing_fields(self):
        for line in ("UPLOAD|a.txt", "DOWNLOAD", "DELETE", "RENAME|a.txt"):
            with self.subTest(line=line):
                with self.assertRaises(ProtocolViolation):
                    parse_command(line)

    def test_bad_sizes(self):
        for line in ("UPLOAD|a.txt|-5", "UPLOAD|a.txt|ten", "UPLOAD|a.txt|", "UPLOAD|a.txt|+3"):
            with self.subTest(line=line):
                with self.assertRaises(ProtocolViolation):
                    parse_command(line)


class TestResponses(unittest.TestCase):
    """Test cases for response lines."""

    def test_response_lines(self):
        self.assertEqual(create_file_entry_message("a/b.txt", 10), "FILE|a/b.txt|10")
        self.assertEqual(create_end_message(), "END")
        self.assertEqual(create_data_message(4096), "DATA|4096")
        self.assertEqual(create_error_message(), "ERROR|NOT_FOUND")

    def test_parse_each_response(self):
        self.assertEqual(parse_response("FILE|a/b.txt|10"), FileEntry("a/b.txt", 10))
        self.assertEqual(parse_response("END"), EndOfList())
        self.assertEqual(parse_response("DATA|0"), DataHeader(0))
        self.assertEqual(parse_response("ERROR|NOT_FOUND"), ErrorResponse("NOT_FOUND"))

    def test_malformed_responses(self):
        for line in ("", "FILE|a.txt", "FILE|a.txt|big", "DATA", "OK", "ERROR"):
            with self.subTest(line=line):
                with self.assertRaises(ProtocolViolation):
                    parse_response(line)


if __name__ == '__main__':
    unittest.main()
