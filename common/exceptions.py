"""
Error types shared by client and server.
"""


class CloudStoreError(Exception):
    """Base class for all file store errors."""


class ConnectionClosed(CloudStoreError):
    """The stream ended before any byte of a line was read."""


class ProtocolViolation(CloudStoreError):
    """A line did not match any known command or response form."""


class NotFound(CloudStoreError):
    """The server answered a download with ERROR|NOT_FOUND."""

    def __init__(self, path: str):
        super().__init__(f"File not found on server: {path}")
        self.path = path


class ConnectionLost(CloudStoreError):
    """An operation failed because of the connection."""

    prefix = "Server connection lost"

    def __init__(self, operation: str, reason: str = ''):
        message = f"{self.prefix} ({operation})"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.operation = operation
        self.reason = reason


class ConnectFailed(ConnectionLost):
    """The server was unreachable when the operation tried to connect."""

    prefix = "Could not connect to server"
