"""Pixel format reduction for 32-bit RGBA images.

Pixels are unsigned 32-bit integers holding red in the lowest byte,
then green, blue and alpha in the highest byte, the way RGBA bytes read
as a little-endian word.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable


class PixelFormat(IntEnum):
    """Texture pixel formats."""

    RGBA8 = 0
    RGBA4 = 1
    RGB5A1 = 2
    A8 = 3


def _to_rgba4(pixel: int) -> int:
    out = (pixel & 0xF0) << 8
    out |= (pixel & 0xF000) >> 4
    out |= (pixel & 0xF00000) >> 16
    out |= (pixel & 0xF0000000) >> 28
    return out & 0xFFFF


def _to_rgb5a1(pixel: int) -> int:
    out = (pixel & 0xF8) << 8
    out |= (pixel & 0xF800) >> 5
    out |= (pixel & 0xF80000) >> 18
    out |= (pixel & 0x80000000) >> 31
    return out & 0xFFFF


def downsample(pixels: Iterable[int], target_format: int) -> list[int]:
    """Convert 32-bit RGBA pixels to a 16-bit ``target_format``.

    RGBA4 and RGB5A1 give 16-bit values; any other format leaves the
    pixels as they are.
    """
    values = [pixel & 0xFFFFFFFF for pixel in pixels]
    if target_format == PixelFormat.RGBA4:
        return [_to_rgba4(pixel) for pixel in values]
    if target_format == PixelFormat.RGB5A1:
        return [_to_rgb5a1(pixel) for pixel in values]
    return values