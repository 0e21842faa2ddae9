"""Redshirt 2 utilities.

A Redshirt 2 stream is the 9-byte marker ``REDSHRT2\\0``, a 20-byte SHA-1
digest of the stored payload (each 4-byte word byte-swapped), then the
payload, each byte stored with its high bit flipped.

Readers verify the digest over the whole stream before exposing any
payload. Writers leave a placeholder digest and patch it in ``finalize()``;
since the digest must cover the complete stream, writers cannot seek.
"""

from __future__ import annotations

import io
import logging
import warnings
from typing import BinaryIO, Optional

from .base import StreamReader, StreamWriter, read_exact, write_exact, wrap_io_error
from .checksum import ChecksumAccumulator
from .constants import BUFFER_LEN, DIGEST_LEN, HEADER_LEN_V2, MARKER_LEN, MARKER_V2
from .cursor import ObfuscatingCursor
from .errors import BadChecksumError, BadHeaderError
from .transform import obfuscate


logger = logging.getLogger(__name__)


def _checksum_remainder(src: BinaryIO) -> bytes:
    checksum = ChecksumAccumulator()
    buf = bytearray(BUFFER_LEN)
    view = memoryview(buf)
    while True:
        try:
            n = src.readinto(buf)
        except InterruptedError:
            continue
        except OSError as e:
            raise wrap_io_error(e) from e
        if not n:
            break
        checksum.update(view[:n])
    return checksum.finish()


class Reader(StreamReader):
    """Reads Redshirt 2-protected data from a seekable input stream."""

    def __init__(self, src: BinaryIO):
        header = read_exact(src, HEADER_LEN_V2)
        if header[:MARKER_LEN] != MARKER_V2:
            raise BadHeaderError()
        try:
            payload_start = src.seek(0, io.SEEK_CUR)
        except OSError as e:
            raise wrap_io_error(e) from e
        stored = header[MARKER_LEN:]
        computed = _checksum_remainder(src)
        if stored != computed:
            logger.debug("redshirt2 checksum mismatch: stored %s, computed %s", stored.hex(), computed.hex())
            raise BadChecksumError()
        try:
            src.seek(payload_start, io.SEEK_SET)
        except OSError as e:
            raise wrap_io_error(e) from e
        logger.debug("redshirt2 checksum verified (%s)", computed.hex())
        super().__init__(ObfuscatingCursor(src))


class Writer(StreamWriter):
    """Writes Redshirt 2-protected data to a seekable output stream.

    Call ``finalize()`` (or use the writer as a context manager) to write the
    digest and get the stream back. A writer dropped without finalizing
    leaves the placeholder digest in place; nothing is written on its behalf.
    """

    def __init__(self, dst: BinaryIO):
        write_exact(dst, MARKER_V2 + bytes(DIGEST_LEN))
        super().__init__(ObfuscatingCursor(dst))
        self._checksum = ChecksumAccumulator()
        self.incomplete = False

    def write(self, data) -> int:
        chunk = obfuscate(memoryview(data).cast("B")[:BUFFER_LEN])
        n = self.cursor.write_raw(chunk)
        self._checksum.update(chunk[:n])
        return n

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        raise io.UnsupportedOperation("redshirt2 writers are not seekable")

    def finalize(self) -> Optional[BinaryIO]:
        """Patch the digest into the header and return the wrapped stream.

        Returns ``None`` if the writer was already finalized.
        """
        if self._cursor is None:
            return None
        cursor = self._cursor
        inner = cursor.inner
        resume = cursor.offset
        try:
            base = cursor.ensure_base()
            inner.seek(base - DIGEST_LEN, io.SEEK_SET)
        except OSError as e:
            raise wrap_io_error(e) from e
        digest = self._checksum.copy().finish()
        try:
            write_exact(inner, digest)
        finally:
            # Back to the end of the payload even if the digest write failed
            try:
                inner.seek(base + resume, io.SEEK_SET)
            except OSError as e:
                raise wrap_io_error(e) from e
        logger.debug("redshirt2 digest written (%s) over %d payload bytes", digest.hex(), resume)
        return self.detach()

    def abandon(self) -> BinaryIO:
        """Release the stream without writing the digest."""
        self.incomplete = True
        logger.warning("redshirt2 writer abandoned before finalize(); stream has no valid digest")
        return self.detach()

    def __exit__(self, exc_type, exc, tb):
        if self._cursor is None:
            return
        if exc_type is None:
            self.finalize()
        else:
            self.abandon()

    def __del__(self):
        if getattr(self, "_cursor", None) is None:
            return
        self.incomplete = True
        logger.warning("redshirt2 writer discarded without finalize(); digest was not written")
        warnings.warn(
            "redshirt2 Writer discarded without finalize(); the stream is incomplete",
            ResourceWarning,
            stacklevel=2,
        )


def encode(data: bytes) -> bytes:
    buf = io.BytesIO()
    with Writer(buf) as w:
        w.write_all(data)
    return buf.getvalue()


def decode(blob: bytes) -> bytes:
    with Reader(io.BytesIO(blob)) as r:
        return r.read()


def verify(src: BinaryIO) -> bool:
    """Check a Redshirt 2 stream's marker and digest without decoding it."""
    try:
        Reader(src).detach()
    except (BadHeaderError, BadChecksumError):
        return False
    return True
