"""
Server configuration module.

This module handles server-side configuration settings.
"""

from pathlib import Path

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, STORAGE_DIR, LOG_DIR, CHUNK_SIZE


class ServerConfig:
    """Server configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 storage_dir: str = STORAGE_DIR, logs_dir: str = LOG_DIR):
        self.host = host
        self.port = port
        self.storage_dir = storage_dir

        # Logging configuration
        self.logs_dir = logs_dir

        # File transfer settings
        self.chunk_size = CHUNK_SIZE

    @property
    def storage_root(self) -> Path:
        """Absolute path of the storage root."""
        return Path(self.storage_dir).resolve()

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_storage_settings(self):
        """Get storage and transfer settings."""
        return {
            'storage_dir': self.storage_dir,
            'chunk_size': self.chunk_size
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'logs_dir': self.logs_dir
        }
