"""
File client module.

This module handles client-side file store operations. Every operation opens
a fresh connection, performs one request/response exchange and closes it.
"""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, List, Optional

from common.constants import (
    DEFAULT_HOST, DEFAULT_PORT, CHUNK_SIZE, PROBE_TIMEOUT, PROGRESS_LOG_INTERVAL, Commands
)
from common.exceptions import ConnectFailed, ConnectionClosed, ConnectionLost, NotFound, ProtocolViolation
from common.line_channel import read_line, write_line
from common.protocol_definitions import (
    FileEntry, EndOfList, DataHeader, ErrorResponse, parse_response,
    create_list_message, create_upload_message, create_download_message,
    create_delete_message, create_rename_message
)
from client.utils.logger import logger

ProgressCallback = Callable[[int, int], None]  # (bytes_transferred, total_bytes)

# Failures of the connection itself. Local disk errors are plain OSErrors
# outside this tuple and reach the caller unchanged.
STREAM_ERRORS = (ConnectionError, TimeoutError, asyncio.IncompleteReadError, ConnectionClosed, ProtocolViolation)


class FileClient:
    """Client-side operation driver."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT,
                 chunk_size: int = CHUNK_SIZE, probe_timeout: float = PROBE_TIMEOUT):
        self.host = host
        self.port = port
        self.chunk_size = chunk_size
        self.probe_timeout = probe_timeout

    def set_server(self, host: str, port: int):
        """Set the server address for later operations."""
        self.host = host
        self.port = port

    @asynccontextmanager
    async def _connection(self, operation: str):
        """Open a connection for one operation and map stream failures to ConnectionLost."""
        try:
            reader, writer = await asyncio.open_connection(self.host, self.port)
        except OSError as e:
            raise ConnectFailed(operation, str(e) or type(e).__name__) from e

        try:
            yield reader, writer
        except STREAM_ERRORS as e:
            raise ConnectionLost(operation, str(e) or type(e).__name__) from e
        finally:
            writer.close()
            try:
                await writer.wait_closed()
            except (ConnectionError, OSError) as e:
                logger.debug(f"Error closing {operation} connection: {e}")

    @staticmethod
    async def _wait_for_server_close(reader: asyncio.StreamReader):
        """Drain until the server hangs up, which marks a silent command as done."""
        while await reader.read(CHUNK_SIZE):
            pass

    async def probe(self) -> bool:
        """Return True if a connection to the server opens within the probe timeout."""
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.probe_timeout
            )
        except (OSError, asyncio.TimeoutError) as e:
            logger.debug(f"Probe of {self.host}:{self.port} failed: {e}")
            logger.log_connection(self.host, self.port, False)
            return False

        writer.close()
        try:
            await writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug(f"Error closing probe connection: {e}")
        logger.log_connection(self.host, self.port, True)
        return True

    async def list_files(self) -> List[FileEntry]:
        """Fetch the full listing of the storage root."""
        entries = []
        async with self._connection(Commands.LIST) as (reader, writer):
            await write_line(writer, create_list_message())

            while True:
                response = parse_response(await read_line(reader))
                if isinstance(response, EndOfList):
                    break
                if not isinstance(response, FileEntry):
                    raise ProtocolViolation(f"Unexpected response in listing: {response}")
                entries.append(response)

        logger.debug(f"LIST returned {len(entries)} files")
        return entries

    async def upload_file(self, local_path: str, remote_path: Optional[str] = None,
                          progress: Optional[ProgressCallback] = None) -> int:
        """
        Upload a local file.

        The file is stored under `remote_path`, or under its base name at
        the storage root when none is given. Returns the number of bytes sent.
        """
        path = Path(local_path)
        if remote_path is None:
            remote_path = path.name

        with open(path, 'rb') as f:
            size = path.stat().st_size
            bytes_sent = 0

            async with self._connection(Commands.UPLOAD) as (reader, writer):
                await write_line(writer, create_upload_message(remote_path, size))

                while bytes_sent < size:
                    data = f.read(min(self.chunk_size, size - bytes_sent))
                    if not data:
                        break

                    writer.write(data)
                    await writer.drain()
                    bytes_sent += len(data)

                    if progress:
                        progress(bytes_sent, size)
                    if bytes_sent % PROGRESS_LOG_INTERVAL < len(data):
                        logger.debug(f"Upload progress [{remote_path}]: {bytes_sent}/{size} bytes")

                # The file shrank while being read. Half-close so the server
                # stops waiting for the declared size and keeps what it got.
                if bytes_sent < size:
                    writer.write_eof()

                await self._wait_for_server_close(reader)

        logger.log_upload(remote_path, bytes_sent, size)
        return bytes_sent

    async def download_file(self, remote_path: str, save_path: str,
                            progress: Optional[ProgressCallback] = None) -> int:
        """
        Download a stored file to `save_path`.

        Raises NotFound when the server reports the file missing. A partial
        local file is removed if the transfer fails. Returns the byte count.
        """
        save_file = Path(save_path)
        bytes_received = 0
        created = False

        try:
            async with self._connection(Commands.DOWNLOAD) as (reader, writer):
                await write_line(writer, create_download_message(remote_path))
                response = parse_response(await read_line(reader))

                if isinstance(response, ErrorResponse):
                    raise NotFound(remote_path)
                if not isinstance(response, DataHeader):
                    raise ProtocolViolation(f"Unexpected download response: {response}")

                size = response.size
                save_file.parent.mkdir(parents=True, exist_ok=True)
                with open(save_file, 'wb') as f:
                    created = True
                    while bytes_received < size:
                        data = await reader.read(min(self.chunk_size, size - bytes_received))
                        if not data:
                            raise ConnectionClosed(f"Incomplete download: {bytes_received}/{size} bytes")

                        f.write(data)
                        bytes_received += len(data)

                        if progress:
                            progress(bytes_received, size)
        except (ConnectionLost, OSError):
            if created:
                save_file.unlink(missing_ok=True)
            raise

        logger.log_download(remote_path, save_file, bytes_received)
        return bytes_received

    async def delete_file(self, remote_path: str):
        """Delete a stored file. Deleting a missing file is not an error."""
        async with self._connection(Commands.DELETE) as (reader, writer):
            await write_line(writer, create_delete_message(remote_path))
            await self._wait_for_server_close(reader)
        logger.log_delete(remote_path)

    async def rename_file(self, old_path: str, new_path: str):
        """Rename a stored file. The server gives no answer when old_path is missing."""
        async with self._connection(Commands.RENAME) as (reader, writer):
            await write_line(writer, create_rename_message(old_path, new_path))
            await self._wait_for_server_close(reader)
        logger.log_rename(old_path, new_path)
