"""
Line channel for the file store protocol.

Control messages are newline-terminated UTF-8 lines. Bulk file bytes are
never framed by this module; after a control line the caller reads or writes
the declared number of raw bytes on the same stream.
"""

import asyncio

from common.constants import LINE_TERMINATOR
from common.exceptions import ConnectionClosed, ProtocolViolation


async def read_line(reader: asyncio.StreamReader) -> str:
    """Read one line and return it without terminator or trailing CRs.

    Raises ConnectionClosed if the stream ends before any byte was read.
    A final unterminated line is returned as-is.
    """
    try:
        data = await reader.readuntil(LINE_TERMINATOR)
    except asyncio.IncompleteReadError as e:
        if not e.partial:
            raise ConnectionClosed("Stream ended before a line was received")
        data = e.partial
    except asyncio.LimitOverrunError as e:
        raise ProtocolViolation(f"Control line too long: {e}")

    if data.endswith(LINE_TERMINATOR):
        data = data[:-1]
    try:
        return data.rstrip(b'\r').decode('utf-8')
    except UnicodeDecodeError as e:
        raise ProtocolViolation(f"Control line is not valid UTF-8: {e}")


async def write_line(writer: asyncio.StreamWriter, text: str):
    """Write one line followed by a single newline and flush it."""
    writer.write(text.encode('utf-8') + LINE_TERMINATOR)
    await writer.drain()
