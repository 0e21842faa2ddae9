"""
Redshirt: readers and writers for the Redshirt 1 and Redshirt 2 encodings.

Both encodings prefix a stream with a short literal marker and store every
payload byte with its high bit flipped. Redshirt 2 additionally embeds a
SHA-1 digest of the stored payload in the header.

- ``redshirt.v1``: Reader/Writer with full seek support.
- ``redshirt.v2``: Reader that verifies the digest before exposing any data,
  and a Writer that patches the digest in on ``finalize()``.

The obfuscation offers no confidentiality; it only matches the on-disk
format of the original application.
"""

__version__ = "0.1"

__all__ = [
    "constants",
    "errors",
    "transform",
    "cursor",
    "checksum",
    "v1",
    "v2",
]
