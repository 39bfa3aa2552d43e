#!/usr/bin/env python3
"""
LAN Remote File Store Server

Accepts connections and hands each one to its own session task. Every
session runs exactly one command against the shared storage root.
"""

import asyncio
from typing import Optional

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from common.constants import LOG_DIR
from server.files.file_server import FileServer
from server.utils.config import ServerConfig
from server.utils.logger import logger


class StorageServer:
    """Connection acceptor for the file store."""

    def __init__(self, host: str = '0.0.0.0', port: int = 9000, storage_dir: str = 'cloud-data',
                 logs_dir: str = LOG_DIR):
        self.config = ServerConfig(host, port, storage_dir, logs_dir)
        logger.set_logs_dir(self.config.logs_dir)
        self.file_server = FileServer(storage_dir, self.config.chunk_size)
        self.server: Optional[asyncio.AbstractServer] = None
        self.sessions = set()  # in-flight session tasks
        logger.info(f"Save path: {self.file_server.storage_root}")

    @property
    def is_running(self) -> bool:
        return self.server is not None and self.server.is_serving()

    @property
    def port(self) -> int:
        """Port actually bound, useful when configured with port 0."""
        if self.server and self.server.sockets:
            return self.server.sockets[0].getsockname()[1]
        return self.config.port

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Handle individual client connection."""
        task = asyncio.current_task()
        self.sessions.add(task)
        try:
            await self.file_server.handle_session(reader, writer)
        finally:
            self.sessions.discard(task)

    async def start(self):
        """Bind the listening socket and begin accepting."""
        if self.is_running:
            logger.warning("Server already running")
            return

        self.server = await asyncio.start_server(self.handle_client, self.config.host, self.config.port)
        logger.info(f"Server started on {self.config.host}:{self.port}")

    async def serve_forever(self):
        """Start if needed and accept until stopped."""
        await self.start()
        try:
            await self.server.serve_forever()
        except asyncio.CancelledError:
            logger.info("Accept loop cancelled")

    async def stop(self):
        """Stop accepting and release the port; running sessions are left alone."""
        if self.server is None:
            return

        # close() releases the listening sockets at once. wait_closed() is not
        # awaited: on 3.12+ it also waits for every open connection.
        self.server.close()
        self.server = None
        logger.info(f"Server stopped ({len(self.sessions)} sessions still in flight)")

    async def wait_for_sessions(self):
        """Wait until every in-flight session has finished."""
        if self.sessions:
            await asyncio.gather(*list(self.sessions), return_exceptions=True)
