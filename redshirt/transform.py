from __future__ import annotations

from .constants import XOR_MASK


_FLIP_TABLE = bytes(b ^ XOR_MASK for b in range(256))


def flip_byte(b: int) -> int:
    return b ^ XOR_MASK


def obfuscate(data: bytes) -> bytes:
    """Flip the high bit of every byte in ``data``.

    The transform is its own inverse, so the same call decodes.
    """
    return bytes(data).translate(_FLIP_TABLE)


deobfuscate = obfuscate


def obfuscate_into(buf, length: int) -> None:
    # In place over the first `length` bytes of a writable buffer
    view = memoryview(buf).cast("B")
    view[:length] = bytes(view[:length]).translate(_FLIP_TABLE)
