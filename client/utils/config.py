"""
Client configuration module.

This module handles client-side configuration settings.
"""

from common.constants import DEFAULT_HOST, DEFAULT_PORT, CHUNK_SIZE, PROBE_TIMEOUT, DOWNLOAD_DIR


class ClientConfig:
    """Client configuration class."""

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        self.host = host
        self.port = port

        # File transfer settings
        self.chunk_size = CHUNK_SIZE
        self.download_dir = DOWNLOAD_DIR

        # Connection settings
        self.probe_timeout = PROBE_TIMEOUT  # seconds, probe only

    def update_server(self, host: str = None, port: int = None):
        """Point the client at another server."""
        if host is not None:
            self.host = host
        if port is not None:
            self.port = port

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_transfer_settings(self):
        """Get file transfer settings."""
        return {
            'chunk_size': self.chunk_size,
            'download_dir': self.download_dir,
            'probe_timeout': self.probe_timeout
        }
