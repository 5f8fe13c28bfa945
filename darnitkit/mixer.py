"""Software mixing of playing sounds into a stereo 16-bit stream.

Up to :data:`CHANNELS` sounds play at once. Each is mixed with its own
left and right volume, where 128 is full volume. An optional compressor
scales the mix down when it would clip, and a master volume is applied
last.
"""

from __future__ import annotations

import struct
import threading
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

CHANNELS = 16
SAMPLE_RATE = 44100
FULL_VOLUME = 128

_SAMPLE = struct.Struct("<h")


def _to_short(value: int) -> int:
    """Wrap an integer to a signed 16-bit value."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def _samples(data: bytes, count: int) -> list[int]:
    return [value for (value,) in _SAMPLE.iter_unpack(data[: count * _SAMPLE.size])]


def sample_mix(s1: int, s2: int) -> int:
    """Mix two signed 16-bit samples, softening the sum by the quieter one."""
    quieter = min(abs(s1), abs(s2))
    out = s1 + s2
    out -= (out * quieter) >> 16
    return _to_short(out)


def frame_mix(source1: Sequence[int], source2: Sequence[int]) -> list[int]:
    """Mix two equally long sample sequences with :func:`sample_mix`."""
    if len(source1) != len(source2):
        raise ValueError("sources must have the same length")
    return [sample_mix(a, b) for a, b in zip(source1, source2)]


@dataclass
class _Playback:
    key: int
    handle: Any
    lvol: int
    rvol: int
    pos: int = 0


class Mixer:
    """Mixes the sounds being played into interleaved stereo samples."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._slots: list[Optional[_Playback]] = [None] * CHANNELS
        self._next_key = 0
        self.compression = 1
        self.compression_enabled = True
        self.master_volume = FULL_VOLUME

    def _find(self, key: int) -> Optional[int]:
        return next(
            (i for i, slot in enumerate(self._slots) if slot is not None and slot.key == key),
            None,
        )

    def play(self, sound: Any, vol_l: int, vol_r: int) -> int:
        """Start playing ``sound`` and return its playback key.

        Raises RuntimeError when every playback channel is busy.
        """
        if sound is None:
            raise ValueError("no sound to play")
        with self._lock:
            index = next((i for i, slot in enumerate(self._slots) if slot is None), None)
            if index is None:
                raise RuntimeError("no free playback channel")
            handle = sound.play()
            if handle is None:
                raise RuntimeError("sound could not be started")
            key = self._next_key
            self._next_key += 1
            self._slots[index] = _Playback(key, handle, vol_l, vol_r)
            return key

    def stop(self, key: int) -> None:
        """Stop the playback with ``key``; unknown keys are ignored."""
        if key == -1:
            return
        with self._lock:
            index = self._find(key)
            if index is not None:
                self._slots[index] = None

    def stop_all(self) -> None:
        """Stop every playback."""
        with self._lock:
            self._slots = [None] * CHANNELS

    def is_playing(self, key: int) -> bool:
        """Return True while the playback with ``key`` is active."""
        with self._lock:
            return self._find(key) is not None

    def set_volume(self, key: int, vol_l: int, vol_r: int) -> None:
        """Change the left and right volume of a playback."""
        with self._lock:
            index = self._find(key)
            if index is not None:
                slot = self._slots[index]
                slot.lvol, slot.rvol = vol_l, vol_r

    def set_master_volume(self, volume: int) -> None:
        """Set the master volume, clamped to 0..128."""
        self.master_volume = max(0, min(FULL_VOLUME, volume))

    def enable_compression(self) -> None:
        """Scale the mix down when it would clip."""
        self.compression_enabled = True

    def disable_compression(self) -> None:
        """Let the mix wrap around when it would clip."""
        self.compression_enabled = False

    def _accumulate(self, frames: int) -> list[int]:
        total = [0] * (frames * 2)
        for slot in list(self._slots):
            if slot is None:
                continue
            handle = slot.handle
            if handle.channels == 1:
                data = handle.decode(frames * 2, slot.pos)
                decoded = len(data)
                for j, sample in enumerate(_samples(data, decoded >> 1)):
                    total[2 * j] += (sample * slot.lvol) >> 7
                    total[2 * j + 1] += (sample * slot.rvol) >> 7
            else:
                data = handle.decode(frames * 4, slot.pos)
                decoded = len(data)
                values = _samples(data, (decoded >> 2) * 2)
                for j in range(decoded >> 2):
                    total[2 * j] += (values[2 * j] * slot.lvol) >> 7
                    total[2 * j + 1] += (values[2 * j + 1] * slot.rvol) >> 7
            slot.pos += decoded
            if decoded < frames:
                self.stop(slot.key)
        return total

    def _update_compression(self, total: list[int]) -> None:
        if self.compression_enabled:
            peak = max((abs(s) for s in total), default=0)
            deflection = (peak >> 8) + 1 if peak > 0x7FFF else 1
            if self.compression != deflection:
                if self.compression > deflection:
                    self.compression += ((deflection - self.compression) >> 6) - 1
                else:
                    self.compression += deflection - self.compression
                if deflection > self.compression:
                    self.compression = deflection
        else:
            self.compression = 1
        if self.compression < 128:
            self.compression = 1

    def mix(self, frames: int) -> list[int]:
        """Mix ``frames`` stereo frames and return interleaved 16-bit samples."""
        if frames < 0:
            raise ValueError("frame count must not be negative")
        with self._lock:
            total = self._accumulate(frames)
            self._update_compression(total)
            if self.compression > 1:
                out = [_to_short(_trunc_div(s << 7, self.compression)) for s in total]
            else:
                out = [_to_short(s) for s in total]
            if self.master_volume != FULL_VOLUME:
                out = [_to_short((s * self.master_volume) >> 7) for s in out]
            return out

    def mix_bytes(self, frames: int) -> bytes:
        """Like :meth:`mix`, packed as little-endian 16-bit samples."""
        return _pack(self.mix(frames))


def _pack(samples: Iterable[int]) -> bytes:
    return b"".join(_SAMPLE.pack(s) for s in samples)