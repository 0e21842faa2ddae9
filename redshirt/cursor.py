from __future__ import annotations

import io
from typing import BinaryIO, Optional

from .constants import BUFFER_LEN, MAX_POSITION, MIN_DELTA
from .errors import InvalidSeekError
from .transform import obfuscate, obfuscate_into


class ObfuscatingCursor:
    """Seekable view over the payload of a Redshirt stream.

    Every byte read is de-obfuscated and every byte written is obfuscated.
    Positions are logical: offset 0 is the first payload byte, wherever the
    header left the wrapped stream. The absolute position of offset 0
    (``base``) is only queried on the first seek, so purely sequential I/O
    never asks the wrapped stream where it is.
    """

    def __init__(self, inner: BinaryIO):
        self._inner: Optional[BinaryIO] = inner
        self._base: Optional[int] = None
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def base(self) -> Optional[int]:
        return self._base

    @property
    def inner(self) -> BinaryIO:
        if self._inner is None:
            raise ValueError("raw stream has been detached")
        return self._inner

    def detach(self) -> BinaryIO:
        inner = self.inner
        self._inner = None
        return inner

    # reading
    def readinto(self, buf) -> int:
        n = self.inner.readinto(buf)
        if not n:
            return 0
        obfuscate_into(buf, n)
        self._offset += n
        return n

    def read(self, size: int = -1) -> bytes:
        data = self.inner.read(size)
        if not data:
            return b""
        self._offset += len(data)
        return obfuscate(data)

    # writing
    def write(self, data) -> int:
        """Obfuscate and write at most one chunk of ``data``.

        Returns the number of bytes the wrapped stream accepted; callers
        with more than ``BUFFER_LEN`` bytes must call again.
        """
        chunk = obfuscate(memoryview(data).cast("B")[:BUFFER_LEN])
        return self.write_raw(chunk)

    def write_raw(self, chunk) -> int:
        # No transform: `chunk` is already in its stored form
        chunk = memoryview(chunk).cast("B")[:BUFFER_LEN]
        if not chunk:
            return 0
        written = self.inner.write(chunk)
        if written is None:
            written = 0
        self._offset += written
        return written

    def flush(self) -> None:
        flush = getattr(self.inner, "flush", None)
        if flush is not None:
            flush()

    # seeking
    def ensure_base(self) -> int:
        """Absolute position of logical offset 0, queried once and memoized."""
        if self._base is None:
            self._base = self.inner.seek(0, io.SEEK_CUR) - self._offset
        return self._base

    def _seek_inner(self, offset: int, whence: int) -> int:
        try:
            return self.inner.seek(offset, whence)
        except OverflowError as e:
            raise InvalidSeekError() from e

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        base = self.ensure_base()
        if whence == io.SEEK_SET:
            if offset < 0 or base + offset > MAX_POSITION:
                raise InvalidSeekError()
            pos = self._seek_inner(base + offset, io.SEEK_SET)
        elif whence == io.SEEK_CUR:
            if not MIN_DELTA <= offset <= MAX_POSITION:
                raise InvalidSeekError()
            target = self._offset + offset
            if target < 0 or base + target > MAX_POSITION:
                raise InvalidSeekError()
            pos = self._seek_inner(offset, io.SEEK_CUR)
        elif whence == io.SEEK_END:
            if not MIN_DELTA <= offset <= MAX_POSITION:
                raise InvalidSeekError()
            pos = self._seek_inner(offset, io.SEEK_END)
            if pos < base or pos > MAX_POSITION:
                self.inner.seek(base + self._offset, io.SEEK_SET)
                raise InvalidSeekError()
        else:
            raise ValueError(f"invalid whence ({whence!r})")
        self._offset = pos - base
        return self._offset

    def tell(self) -> int:
        return self._offset
