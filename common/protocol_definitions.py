"""
Protocol definitions for the LAN remote file store.

This module defines the command and response structures exchanged between
client and server, and their pipe-delimited text encoding. Fields are not
escaped, so a path containing '|' cannot be represented.
"""

from dataclasses import dataclass
from typing import List, Union

from common.constants import Commands, Responses, FIELD_SEPARATOR, NOT_FOUND
from common.exceptions import ProtocolViolation


@dataclass
class ListCommand:
    """Request a listing of every stored file."""


@dataclass
class UploadCommand:
    """Store `size` bytes, sent right after the command line, at `path`."""
    path: str
    size: int


@dataclass
class DownloadCommand:
    """Request the contents of `path`."""
    path: str


@dataclass
class DeleteCommand:
    """Remove `path` if it exists."""
    path: str


@dataclass
class RenameCommand:
    """Move `old_path` to `new_path`, overwriting the destination."""
    old_path: str
    new_path: str


@dataclass
class FileEntry:
    """One LIST result line."""
    path: str
    size: int


@dataclass
class EndOfList:
    """Terminates a LIST response."""


@dataclass
class DataHeader:
    """Announces `size` raw bytes of file content."""
    size: int


@dataclass
class ErrorResponse:
    """Explicit error answer, currently only NOT_FOUND for downloads."""
    reason: str


Command = Union[ListCommand, UploadCommand, DownloadCommand, DeleteCommand, RenameCommand]
Response = Union[FileEntry, EndOfList, DataHeader, ErrorResponse]


def _join(*fields) -> str:
    return FIELD_SEPARATOR.join(str(field) for field in fields)


def _parse_size(text: str) -> int:
    """Parse a non-negative base-10 byte count."""
    if not text.isascii() or not text.isdigit():
        raise ProtocolViolation(f"Invalid size field: {text!r}")
    return int(text)


# Commands

def create_list_message() -> str:
    """Create a LIST command line."""
    return Commands.LIST


def create_upload_message(path: str, size: int) -> str:
    """Create an UPLOAD command line."""
    if size < 0:
        raise ValueError(f"Upload size must be non-negative, got {size}")
    return _join(Commands.UPLOAD, path, size)


def create_download_message(path: str) -> str:
    """Create a DOWNLOAD command line."""
    return _join(Commands.DOWNLOAD, path)


def create_delete_message(path: str) -> str:
    """Create a DELETE command line."""
    return _join(Commands.DELETE, path)


def create_rename_message(old_path: str, new_path: str) -> str:
    """Create a RENAME command line."""
    return _join(Commands.RENAME, old_path, new_path)


# Responses

def create_file_entry_message(path: str, size: int) -> str:
    """Create a FILE listing line."""
    return _join(Responses.FILE, path, size)


def create_end_message() -> str:
    """Create the END line closing a listing."""
    return Responses.END


def create_data_message(size: int) -> str:
    """Create a DATA header line."""
    return _join(Responses.DATA, size)


def create_error_message(reason: str = NOT_FOUND) -> str:
    """Create an ERROR line."""
    return _join(Responses.ERROR, reason)


def encode_command(command: Command) -> str:
    """Encode any command dataclass as its wire line."""
    if isinstance(command, ListCommand):
        return create_list_message()
    if isinstance(command, UploadCommand):
        return create_upload_message(command.path, command.size)
    if isinstance(command, DownloadCommand):
        return create_download_message(command.path)
    if isinstance(command, DeleteCommand):
        return create_delete_message(command.path)
    if isinstance(command, RenameCommand):
        return create_rename_message(command.old_path, command.new_path)
    raise TypeError(f"Not a command: {command!r}")


def parse_command(line: str) -> Command:
    """
    Decode a command line received by the server.

    Extra trailing fields are ignored. Raises ProtocolViolation for an
    unknown keyword, a missing field or a malformed size.
    """
    parts: List[str] = line.split(FIELD_SEPARATOR)
    keyword = parts[0]

    try:
        if keyword == Commands.LIST:
            return ListCommand()
        if keyword == Commands.UPLOAD:
            return UploadCommand(parts[1], _parse_size(parts[2]))
        if keyword == Commands.DOWNLOAD:
            return DownloadCommand(parts[1])
        if keyword == Commands.DELETE:
            return DeleteCommand(parts[1])
        if keyword == Commands.RENAME:
            return RenameCommand(parts[1], parts[2])
    except IndexError:
        raise ProtocolViolation(f"Missing field in command: {line!r}")

    raise ProtocolViolation(f"Unknown command: {keyword!r}")


def parse_response(line: str) -> Response:
    """Decode a response line received by the client."""
    parts: List[str] = line.split(FIELD_SEPARATOR)
    keyword = parts[0]

    try:
        if keyword == Responses.FILE:
            return FileEntry(parts[1], _parse_size(parts[2]))
        if keyword == Responses.END:
            return EndOfList()
        if keyword == Responses.DATA:
            return DataHeader(_parse_size(parts[1]))
        if keyword == Responses.ERROR:
            return ErrorResponse(parts[1])
    except IndexError:
        raise ProtocolViolation(f"Missing field in response: {line!r}")

    raise ProtocolViolation(f"Unexpected response: {line!r}")
