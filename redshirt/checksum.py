from __future__ import annotations

import struct
from typing import Optional

from Cryptodome.Hash import SHA1

from .constants import DIGEST_LEN


_WORDS = DIGEST_LEN // 4
_WORDS_LE = struct.Struct(f"<{_WORDS}I")
_WORDS_BE = struct.Struct(f">{_WORDS}I")


def swap_words(digest: bytes) -> bytes:
    """Reverse the byte order inside each 4-byte word of a SHA-1 digest.

    Redshirt 2 headers store the digest this way; the word order itself is
    unchanged.
    """
    if len(digest) != DIGEST_LEN:
        raise ValueError(f"expected a {DIGEST_LEN}-byte digest, got {len(digest)}")
    return _WORDS_BE.pack(*_WORDS_LE.unpack(digest))


class ChecksumAccumulator:
    """Running SHA-1 over the stored (obfuscated) payload bytes."""

    def __init__(self, state: Optional[SHA1.SHA1Hash] = None):
        self._hash: Optional[SHA1.SHA1Hash] = state if state is not None else SHA1.new()

    def _live_hash(self) -> SHA1.SHA1Hash:
        if self._hash is None:
            raise RuntimeError("checksum already finished")
        return self._hash

    def update(self, data) -> None:
        self._live_hash().update(data)

    def copy(self) -> "ChecksumAccumulator":
        return ChecksumAccumulator(self._live_hash().copy())

    def finish(self) -> bytes:
        # One-shot: the accumulator is unusable afterwards
        digest = self._live_hash().digest()
        self._hash = None
        return swap_words(digest)

    def hexdigest(self) -> str:
        return self.copy().finish().hex()

    def __repr__(self) -> str:
        if self._hash is None:
            return "ChecksumAccumulator(<finished>)"
        return f"ChecksumAccumulator({self.hexdigest()})"


def checksum(data: bytes) -> bytes:
    acc = ChecksumAccumulator()
    acc.update(data)
    return acc.finish()
