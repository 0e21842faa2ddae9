# Header markers (9 bytes each, NUL terminated)
MARKER_V1 = b"REDSHIRT\x00"   # "REDSHIRT\0"
MARKER_V2 = b"REDSHRT2\x00"   # "REDSHRT2\0"
MARKER_LEN = 9

# SHA-1 output size; format-2 stores the digest right after the marker
DIGEST_LEN = 20

HEADER_LEN_V1 = MARKER_LEN
HEADER_LEN_V2 = MARKER_LEN + DIGEST_LEN

# Scratch buffer size for transformed writes and the verification pass
BUFFER_LEN = 16384

# Every payload byte is stored with its high bit flipped
XOR_MASK = 0x80

# Stream positions and seek deltas are signed 64-bit (off_t)
MAX_POSITION = (1 << 63) - 1
MIN_DELTA = -(1 << 63)
