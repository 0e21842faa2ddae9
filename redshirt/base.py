from __future__ import annotations

import io
from typing import BinaryIO, Optional

from .cursor import ObfuscatingCursor
from .errors import RedshirtIOError


def wrap_io_error(e: OSError) -> RedshirtIOError:
    if isinstance(e, RedshirtIOError):
        return e
    if e.errno is None:
        return RedshirtIOError(str(e))
    return RedshirtIOError(e.errno, e.strerror or str(e))


def read_exact(f: BinaryIO, n: int) -> bytes:
    """Read exactly ``n`` bytes from ``f`` or raise ``RedshirtIOError``."""
    buf = bytearray()
    try:
        while len(buf) < n:
            chunk = f.read(n - len(buf))
            if not chunk:
                raise RedshirtIOError("failed to fill whole buffer")
            buf += chunk
    except RedshirtIOError:
        raise
    except OSError as e:
        raise wrap_io_error(e) from e
    return bytes(buf)


def write_exact(f: BinaryIO, data: bytes) -> None:
    view = memoryview(data)
    try:
        while view:
            n = f.write(view)
            if not n:
                raise RedshirtIOError("failed to write whole buffer")
            view = view[n:]
    except RedshirtIOError:
        raise
    except OSError as e:
        raise wrap_io_error(e) from e


class _CursorStream:
    def __init__(self, cursor: ObfuscatingCursor):
        self._cursor: Optional[ObfuscatingCursor] = cursor

    @property
    def cursor(self) -> ObfuscatingCursor:
        if self._cursor is None:
            raise ValueError("I/O operation on a detached stream")
        return self._cursor

    @property
    def detached(self) -> bool:
        return self._cursor is None

    def tell(self) -> int:
        return self.cursor.tell()

    def detach(self) -> BinaryIO:
        """Release the wrapped stream; this object is unusable afterwards."""
        inner = self.cursor.detach()
        self._cursor = None
        return inner

    def readable(self) -> bool:
        return False

    def writable(self) -> bool:
        return False

    def seekable(self) -> bool:
        return False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._cursor is not None:
            self.detach()


class StreamReader(_CursorStream):
    """Read + seek capability shared by the format-1 and format-2 readers."""

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, buf) -> int:
        return self.cursor.readinto(buf)

    def read(self, size: int = -1) -> bytes:
        return self.cursor.read(size)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        return self.cursor.seek(offset, whence)


class StreamWriter(_CursorStream):
    """Write capability shared by the format-1 and format-2 writers."""

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        return self.cursor.write(data)

    def write_all(self, data) -> None:
        view = memoryview(data).cast("B")
        while view:
            n = self.write(view)
            if not n:
                raise RedshirtIOError("failed to write whole buffer")
            view = view[n:]

    def flush(self) -> None:
        self.cursor.flush()
