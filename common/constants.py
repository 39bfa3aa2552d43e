"""
Shared constants for the LAN remote file store.

This module contains all constants used across client and server components.
"""

# Network Configuration
DEFAULT_HOST = 'localhost'
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 9000

# Buffer Sizes
CHUNK_SIZE = 4096
PROGRESS_LOG_INTERVAL = 1024 * 1024  # Log progress every 1MB

# Timeouts
PROBE_TIMEOUT = 2.0  # seconds, connectivity probe only

# Storage
STORAGE_DIR = 'cloud-data'
DOWNLOAD_DIR = 'downloads'

# Logging
LOG_DIR = 'logs'
TRANSFER_LOG_FILE = 'file_transfers.log'

# Wire format
FIELD_SEPARATOR = '|'
LINE_TERMINATOR = b'\n'
NOT_FOUND = 'NOT_FOUND'


# Command keywords (client to server)
class Commands:
    LIST = 'LIST'
    UPLOAD = 'UPLOAD'
    DOWNLOAD = 'DOWNLOAD'
    DELETE = 'DELETE'
    RENAME = 'RENAME'


# Response keywords (server to client)
class Responses:
    FILE = 'FILE'
    END = 'END'
    DATA = 'DATA'
    ERROR = 'ERROR'
