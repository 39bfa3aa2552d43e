"""
File server module.

This module handles one client session: read a single command, run it
against the storage root, stream the result and close the connection.
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

from common.constants import CHUNK_SIZE, PROGRESS_LOG_INTERVAL, NOT_FOUND
from common.exceptions import ConnectionClosed
from common.line_channel import read_line, write_line
from common.path_utils import resolve_in_root, relative_wire_path, sanitize
from common.protocol_definitions import (
    ListCommand, UploadCommand, DownloadCommand, DeleteCommand, RenameCommand,
    parse_command, create_file_entry_message, create_end_message,
    create_data_message, create_error_message
)
from server.utils.logger import logger


class FileServer:
    """Server-side session handling over a shared storage root."""

    def __init__(self, storage_dir: str, chunk_size: int = CHUNK_SIZE):
        self.storage_root = Path(storage_dir).resolve()
        self.storage_root.mkdir(parents=True, exist_ok=True)  # Create storage root
        self.chunk_size = chunk_size

    async def handle_session(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Run exactly one command for an accepted connection, then close it."""
        addr = writer.get_extra_info('peername')
        logger.log_connection(addr)

        try:
            line = await read_line(reader)
            if not line:
                logger.debug(f"Empty command line from {addr}")
                return

            command = parse_command(line)
            logger.debug(f"Received from {addr}: {line}")

            # Dispatch command to its handler
            if isinstance(command, ListCommand):
                await self.handle_list(writer, addr)
            elif isinstance(command, UploadCommand):
                await self.handle_upload(reader, command, addr)
            elif isinstance(command, DownloadCommand):
                await self.handle_download(writer, command, addr)
            elif isinstance(command, DeleteCommand):
                await self.handle_delete(command, addr)
            elif isinstance(command, RenameCommand):
                await self.handle_rename(command, addr)

        except ConnectionClosed:
            # Connectivity probes connect and hang up without a command
            logger.debug(f"Connection from {addr} closed before a command")
        except asyncio.CancelledError:
            logger.info(f"Session cancelled for {addr}")
            raise
        except Exception as e:
            logger.log_error(f"session from {addr}", e)
        finally:
            await self._close(writer, addr)

    def list_files(self):
        """Yield (relative_path, size) for every file under the storage root."""
        for file_path in self.storage_root.rglob('*'):
            try:
                if not file_path.is_file():
                    continue
                size = file_path.stat().st_size
            except FileNotFoundError:
                # Removed by another session while walking
                continue
            yield relative_wire_path(self.storage_root, file_path), size

    async def handle_list(self, writer: asyncio.StreamWriter, addr: tuple):
        """Send one FILE line per stored file, then END."""
        count = 0
        for path, size in self.list_files():
            await write_line(writer, create_file_entry_message(path, size))
            count += 1
        await write_line(writer, create_end_message())
        logger.log_list(count, addr)

    async def handle_upload(self, reader: asyncio.StreamReader, command: UploadCommand, addr: tuple):
        """Copy `command.size` bytes from the stream into the target file."""
        safe_path = sanitize(command.path)
        file_path = resolve_in_root(self.storage_root, command.path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        expected_size = command.size
        bytes_received = 0

        with open(file_path, 'wb') as f:
            while bytes_received < expected_size:
                # Read in chunks
                chunk_size = min(self.chunk_size, expected_size - bytes_received)
                data = await reader.read(chunk_size)

                if not data:
                    logger.warning(f"Connection closed before upload complete: {bytes_received}/{expected_size} bytes")
                    break

                f.write(data)
                bytes_received += len(data)

                # Log progress every 1MB
                if bytes_received % PROGRESS_LOG_INTERVAL < len(data):
                    progress = (bytes_received / expected_size) * 100
                    logger.debug(f"Upload progress [{safe_path}]: {bytes_received}/{expected_size} bytes ({progress:.1f}%)")

        logger.log_upload(safe_path, bytes_received, expected_size, addr)

    async def handle_download(self, writer: asyncio.StreamWriter, command: DownloadCommand, addr: tuple):
        """Send DATA|size and the file bytes, or ERROR|NOT_FOUND."""
        safe_path = sanitize(command.path)
        file_path = resolve_in_root(self.storage_root, command.path)

        if not file_path.is_file():
            await write_line(writer, create_error_message(NOT_FOUND))
            logger.warning(f"DOWNLOAD not found: '{safe_path}'")
            return

        bytes_sent = 0
        with open(file_path, 'rb') as f:
            file_size = os.fstat(f.fileno()).st_size
            await write_line(writer, create_data_message(file_size))

            while True:
                data = f.read(self.chunk_size)
                if not data:
                    break

                writer.write(data)
                await writer.drain()
                bytes_sent += len(data)

        logger.log_download(safe_path, bytes_sent, addr)

    async def handle_delete(self, command: DeleteCommand, addr: tuple):
        """Remove the file if present; a missing file is not an error."""
        safe_path = sanitize(command.path)
        file_path = resolve_in_root(self.storage_root, command.path)

        if file_path.is_file():
            file_path.unlink()
            logger.log_delete(safe_path, addr)
        else:
            logger.debug(f"DELETE of missing file ignored: '{safe_path}'")

    async def handle_rename(self, command: RenameCommand, addr: tuple):
        """Move old_path to new_path, replacing any existing destination."""
        old_safe = sanitize(command.old_path)
        new_safe = sanitize(command.new_path)
        old_file = resolve_in_root(self.storage_root, command.old_path)
        new_file = resolve_in_root(self.storage_root, command.new_path)

        if not old_file.is_file():
            logger.warning(f"RENAME not found: '{old_safe}'")
            return

        new_file.parent.mkdir(parents=True, exist_ok=True)
        os.replace(old_file, new_file)
        logger.log_rename(old_safe, new_safe, addr)

    async def _close(self, writer: asyncio.StreamWriter, addr: Optional[tuple]):
        """Close the session connection."""
        try:
            writer.close()
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Error closing connection from {addr}: {e}")
