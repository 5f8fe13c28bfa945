"""Files opened through the game filesystem.

A :class:`GameFile` wraps a binary file object and may expose only a
window of it, which is how files stored inside a mounted image appear.
Integers are stored big-endian, four bytes each.
"""

from __future__ import annotations

import bz2
import os
import struct
from typing import BinaryIO, Iterable, Optional

from darnitkit.compression import CompressionError

_INT = struct.Struct(">I")
_CHUNK = 4096
_WHITESPACE = (b" ", b"\t")


class GameFile:
    """A file, or a region of a container file, with its own position.

    ``size`` is -1 when the length is not known, as for files opened for
    writing. ``offset`` is where the file starts inside ``fp`` and
    ``parent`` names the container it lives in, if any.
    """

    def __init__(
        self,
        fp: BinaryIO,
        name: str,
        mode: str = "rb",
        size: int = -1,
        offset: int = 0,
        parent: Optional[str] = None,
    ) -> None:
        self._fp = fp
        self.name = name
        self.mode = mode
        self.size = size
        self.offset = offset
        self.parent = parent
        self.pos = 0
        self.temporary = False
        self._closed = False
        fp.seek(offset)

    @property
    def fp(self) -> BinaryIO:
        return self._fp

    @property
    def closed(self) -> bool:
        return self._closed

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes, never past the end of the file."""
        if n <= 0:
            return b""
        if self.size >= 0 and self.pos + n > self.size:
            n = max(self.size - self.pos, 0)
        data = self._fp.read(n)
        self.pos += len(data)
        return data

    def read_ints(self, count: int) -> list[int]:
        """Read up to ``count`` big-endian unsigned 32-bit integers."""
        data = self.read(count * _INT.size)
        whole = len(data) // _INT.size
        return [value for (value,) in _INT.iter_unpack(data[: whole * _INT.size])]

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        raw = bytes(data)
        written = self._fp.write(raw)
        self.pos += len(raw)
        return written if written is not None else len(raw)

    def write_ints(self, values: Iterable[int]) -> int:
        """Write integers as big-endian 32-bit words; return how many were written."""
        packed = b"".join(_INT.pack(value & 0xFFFFFFFF) for value in values)
        return self.write(packed) // _INT.size

    def gets(self, limit: int) -> bytes:
        """Read one line of at most ``limit - 1`` bytes, newline included."""
        if limit <= 0:
            return b""
        lim = limit if self.size < 0 else min(limit, self.size - self.pos)
        line = self._fp.readline(lim - 1) if lim > 1 else b""
        self.pos += len(line)
        if not line and self.size >= 0 and self.pos != self.size:
            self.pos = self.size
        return line

    def get_line(self, limit: int) -> bytes:
        """Like :meth:`gets`, without the trailing newline."""
        line = self.gets(limit)
        if line.endswith(b"\n"):
            line = line[:-1]
        return line

    def skip_whitespace(self) -> None:
        """Advance past spaces and tabs."""
        while True:
            char = self.read(1)
            if self.eof() or char not in _WHITESPACE:
                break
        self.seek(-1, os.SEEK_CUR)

    def tell(self) -> int:
        """Return the position relative to the start of the file."""
        return self.pos

    def eof(self) -> bool:
        """Return True at the end of the file."""
        if self.pos == self.size:
            return True
        if self.size == -1:
            current = self._fp.tell()
            end = self._fp.seek(0, os.SEEK_END)
            self._fp.seek(current)
            return current >= end
        return False

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> None:
        """Move the position; raise ValueError if it would leave the file."""
        size = self.size
        if whence == os.SEEK_SET:
            if (size < offset and size > 0) or offset < 0:
                raise ValueError("seek outside file")
            self.pos = offset
            self._fp.seek(self.pos + self.offset)
        elif whence == os.SEEK_CUR:
            target = self.pos + offset
            if (target > size and size > 0) or target < 0:
                raise ValueError("seek outside file")
            self.pos = target
            self._fp.seek(self.pos + self.offset)
        elif whence == os.SEEK_END:
            if (size + offset > size and size > 0) or (size + offset < 0 and size >= 0):
                raise ValueError("seek outside file")
            if self.parent is None:
                self._fp.seek(offset, os.SEEK_END)
                self.pos = self._fp.tell()
            else:
                self.pos = size + offset
                self._fp.seek(self.pos + self.offset)
        else:
            raise ValueError(f"invalid whence: {whence}")

    def set_size(self, size: int) -> None:
        """Truncate or extend the file; only files opened with 'w' and '+'."""
        if "w" not in self.mode or "+" not in self.mode:
            return
        try:
            self.seek(size, os.SEEK_SET)
        except ValueError:
            pass
        self._fp.truncate(size)

    def read_compressed(self, length: int) -> bytes:
        """Decode a bzip2 stream at the current position.

        The stream must decode to at most ``length`` bytes. The position
        ends just after the stream.
        """
        decoder = bz2.BZ2Decompressor()
        out = bytearray()
        try:
            while not decoder.eof:
                chunk = self._fp.read(_CHUNK)
                if not chunk:
                    raise CompressionError("compressed stream ends early")
                out += decoder.decompress(chunk)
                if len(out) > length:
                    raise CompressionError("compressed stream longer than expected")
        except (OSError, EOFError) as exc:
            raise CompressionError("decompress failed") from exc
        unused = len(decoder.unused_data)
        if unused:
            self._fp.seek(-unused, os.SEEK_CUR)
        self.pos = self._fp.tell() - self.offset
        return bytes(out)

    def write_compressed(self, data: bytes) -> None:
        """Write ``data`` as a bzip2 stream at level 9."""
        self._fp.write(bz2.compress(bytes(data), 9))
        self.pos = self._fp.tell() - self.offset

    def close(self) -> None:
        """Close the file, deleting it if it is temporary."""
        if self._closed:
            return
        self._closed = True
        self._fp.close()
        if self.temporary:
            try:
                os.unlink(self.name)
            except FileNotFoundError:
                pass

    def __enter__(self) -> "GameFile":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()