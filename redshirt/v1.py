"""Redshirt 1 utilities.

A Redshirt 1 stream is the 9-byte marker ``REDSHIRT\\0`` followed by the
payload, each byte stored with its high bit flipped. There is no checksum,
so both the reader and the writer support seeking.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

from .base import StreamReader, StreamWriter, read_exact, write_exact
from .constants import MARKER_V1, HEADER_LEN_V1
from .cursor import ObfuscatingCursor
from .errors import BadHeaderError


logger = logging.getLogger(__name__)


class Reader(StreamReader):
    """Reads Redshirt 1-protected data from an input stream."""

    def __init__(self, src: BinaryIO):
        marker = read_exact(src, HEADER_LEN_V1)
        if marker != MARKER_V1:
            raise BadHeaderError()
        logger.debug("redshirt1 header validated")
        super().__init__(ObfuscatingCursor(src))


class Writer(StreamWriter):
    """Writes Redshirt 1-protected data to an output stream."""

    def __init__(self, dst: BinaryIO):
        write_exact(dst, MARKER_V1)
        super().__init__(ObfuscatingCursor(dst))

    def seekable(self) -> bool:
        return True

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self.cursor.seek(offset, whence)


def encode(data: bytes) -> bytes:
    buf = io.BytesIO()
    with Writer(buf) as w:
        w.write_all(data)
    return buf.getvalue()


def decode(blob: bytes) -> bytes:
    with Reader(io.BytesIO(blob)) as r:
        return r.read()
