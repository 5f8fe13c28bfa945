"""Bzip2 compression of buffers with a length header.

A compressed buffer is the uncompressed length as a big-endian 32-bit
unsigned integer followed by a bzip2 stream at level 9.
"""

import bz2
import struct

_HEADER = struct.Struct(">I")


class CompressionError(ValueError):
    """Raised when a compressed buffer cannot be decoded."""


def compress(data: bytes) -> bytes:
    """Compress ``data`` and prefix it with its length."""
    raw = bytes(data)
    return _HEADER.pack(len(raw)) + bz2.compress(raw, 9)


def decompress(data: bytes) -> bytes:
    """Decode a buffer produced by :func:`compress`."""
    raw = bytes(data)
    if len(raw) < _HEADER.size:
        raise CompressionError("buffer too short for length header")
    (size,) = _HEADER.unpack_from(raw)
    decoder = bz2.BZ2Decompressor()
    try:
        out = decoder.decompress(raw[_HEADER.size:], max_length=size + 1)
    except (OSError, EOFError) as exc:
        raise CompressionError("decompress failed") from exc
    if not decoder.eof or len(out) > size:
        raise CompressionError("decompress failed")
    return out