"""Sound resources that the mixer can play.

A sound is opened once and may be played many times. :meth:`play`
returns the object that is then decoded. Decoding yields raw signed
16-bit little-endian samples, interleaved when the sound has two
channels.
"""

from __future__ import annotations

from typing import Any, Callable

DecodeCallback = Callable[[int, int, Any], bytes]


class PreloadedSound:
    """A sound whose samples are already decoded and kept in memory.

    Every playback shares the same buffer; ``usage`` counts how many
    playbacks have been started from it.
    """

    def __init__(self, data: bytes, channels: int) -> None:
        if channels < 0:
            raise ValueError("channel count must not be negative")
        self.data = bytes(data)
        self.channels = channels
        self.usage = 0

    @property
    def size(self) -> int:
        """Length of the sample data in bytes."""
        return len(self.data)

    def play(self) -> "PreloadedSound":
        """Start a playback; the sound itself serves as the playback handle."""
        self.usage += 1
        return self

    def decode(self, length: int, pos: int) -> bytes:
        """Return up to ``length`` bytes of samples starting at byte ``pos``."""
        if length < 0:
            raise ValueError("length must not be negative")
        if pos < 0:
            raise ValueError("position must not be negative")
        end = min(pos + length, len(self.data))
        if pos >= end:
            return b""
        return self.data[pos:end]


class CallbackSound:
    """A sound whose samples are produced on demand by a function.

    The callback is called as ``callback(length, pos, data)`` and returns
    at most ``length`` bytes of samples for byte position ``pos``; ``data``
    is the value given when the sound was created.
    """

    def __init__(self, callback: DecodeCallback, channels: int, data: Any = None) -> None:
        if not callable(callback):
            raise TypeError("callback must be callable")
        if channels < 0:
            raise ValueError("channel count must not be negative")
        self.callback = callback
        self.channels = channels
        self.data = data

    def play(self) -> "CallbackSound":
        """Return a new playback handle that shares callback and data."""
        return CallbackSound(self.callback, self.channels, self.data)

    def decode(self, length: int, pos: int) -> bytes:
        """Ask the callback for up to ``length`` bytes at byte ``pos``."""
        if length < 0:
            raise ValueError("length must not be negative")
        produced = self.callback(length, pos, self.data)
        if produced is None:
            return b""
        return bytes(produced)[:length]