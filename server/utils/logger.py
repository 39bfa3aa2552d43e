"""
Server logging module.

This module handles server-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path

from common.constants import LOG_DIR, TRANSFER_LOG_FILE


class ServerLogger:
    """Server logging class."""

    def __init__(self, logs_dir: str = LOG_DIR, log_level: int = logging.INFO):
        self.logs_dir = Path(logs_dir)

        # Set up main logger
        self.logger = logging.getLogger('cloudstore_server')
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        # Create console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)

        # Create formatter
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        # Add handler to logger
        self.logger.addHandler(console_handler)

        # Set up file paths
        self.transfer_log_path = self.logs_dir / TRANSFER_LOG_FILE

    def set_logs_dir(self, logs_dir: str):
        """Redirect the transfer audit log to another directory."""
        self.logs_dir = Path(logs_dir)
        self.transfer_log_path = self.logs_dir / TRANSFER_LOG_FILE

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

    def log_connection(self, addr: tuple):
        """Log client connection."""
        self.debug(f"New connection from {addr}")

    def log_list(self, count: int, addr: tuple):
        """Log a listing."""
        self.info(f"LIST sent: {count} files to {addr}")

    def log_upload(self, path: str, received: int, expected: int, addr: tuple):
        """Log a finished upload, short or complete."""
        if received == expected:
            self.info(f"✓ UPLOAD saved: '{path}' ({received} bytes)")
        else:
            self.warning(f"UPLOAD saved short: '{path}' ({received}/{expected} bytes)")
        self._write_to_file(f"{datetime.now().isoformat()} | UPLOAD | {path} | SIZE: {received} bytes | PEER: {addr}")

    def log_download(self, path: str, size: int, addr: tuple):
        """Log a served download."""
        self.info(f"✓ DOWNLOAD sent: '{path}' ({size} bytes)")
        self._write_to_file(f"{datetime.now().isoformat()} | DOWNLOAD | {path} | SIZE: {size} bytes | PEER: {addr}")

    def log_delete(self, path: str, addr: tuple):
        """Log a deletion."""
        self.info(f"Deleted: '{path}'")
        self._write_to_file(f"{datetime.now().isoformat()} | DELETE | {path} | PEER: {addr}")

    def log_rename(self, old_path: str, new_path: str, addr: tuple):
        """Log a rename."""
        self.info(f"Renamed: '{old_path}' -> '{new_path}'")
        self._write_to_file(f"{datetime.now().isoformat()} | RENAME | {old_path} -> {new_path} | PEER: {addr}")

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")

    def _write_to_file(self, content: str):
        """Append a line to the transfer audit log."""
        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            with open(self.transfer_log_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except Exception as e:
            self.error(f"Failed to write to log file {self.transfer_log_path}: {e}")


# Global logger instance
logger = ServerLogger()
