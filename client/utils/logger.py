"""
Client logging module.

This module handles client-side logging functionality.
"""

import logging
import sys


class ClientLogger:
    """Client logging class."""

    def __init__(self, log_level: int = logging.INFO):
        self.logger = logging.getLogger('cloudstore_client')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_connection(self, host: str, port: int, success: bool):
        """Log connection attempt."""
        status = "Connected" if success else "Failed to connect"
        self.info(f"{status} to {host}:{port}")

    def log_upload(self, remote_path: str, sent: int, size: int):
        """Log a finished upload, flagging one cut short by a shrinking file."""
        if sent == size:
            self.info(f"Uploaded '{remote_path}' ({sent} bytes)")
        else:
            self.warning(f"Uploaded '{remote_path}' short: local file gave {sent}/{size} bytes")

    def log_download(self, remote_path: str, save_path, size: int):
        """Log a finished download."""
        self.info(f"Downloaded '{remote_path}' to {save_path} ({size} bytes)")

    def log_delete(self, remote_path: str):
        self.info(f"Deleted '{remote_path}'")

    def log_rename(self, old_path: str, new_path: str):
        self.info(f"Renamed '{old_path}' -> '{new_path}'")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")


# Global logger instance
logger = ClientLogger()
