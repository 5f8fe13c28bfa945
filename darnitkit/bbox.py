"""A list of axis-aligned bounding boxes with overlap queries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

_TARGET_FILTER = 8


class SortMode(IntEnum):
    """Axis along which boxes are kept sorted for queries."""

    X = 0
    Y = 1


@dataclass
class _Entry:
    slot_key: int
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0
    xb: int = -1
    yb: int = -1
    key: Optional[int] = None

    @property
    def used(self) -> bool:
        return self.key is not None


class BBoxList:
    """Boxes identified by integer keys that can be queried for overlap.

    Keys are either a running counter starting at the initial size, or,
    after :meth:`use_index_keys`, the slot number the box occupies.
    """

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._entries = [_Entry(slot) for slot in range(size)]
        self._sortmode = SortMode.X
        self._count = 0
        self._next_key = size
        self._index_keys = False
        self._dirty = False

    def __len__(self) -> int:
        return self._count

    @property
    def sortmode(self) -> SortMode:
        return self._sortmode

    def _find(self, key: int) -> Optional[_Entry]:
        return next((e for e in self._entries if e.used and e.key == key), None)

    def add(self, x: int, y: int, w: int, h: int) -> int:
        """Add a box and return its key."""
        if w < 0 or h < 0:
            raise ValueError("width and height must not be negative")
        entry = next((e for e in self._entries if not e.used), None)
        if entry is None:
            entry = _Entry(len(self._entries))
            self._entries.append(entry)
        entry.x, entry.y, entry.w, entry.h = x, y, w, h
        entry.xb, entry.yb = x + w, y + h
        if self._index_keys:
            entry.key = entry.slot_key
        else:
            entry.key = self._next_key
            self._next_key += 1
        self._count += 1
        self._dirty = True
        return entry.key

    def delete(self, key: int) -> None:
        """Remove the box with ``key``; unknown keys are ignored."""
        entry = self._find(key)
        if entry is None:
            return
        entry.key = None
        self._dirty = True
        self._count -= 1

    def move(self, key: int, x: int, y: int) -> None:
        """Move the box with ``key`` so its corner is at (x, y)."""
        entry = self._find(key)
        if entry is None:
            return
        entry.x, entry.y = x, y
        entry.xb, entry.yb = x + entry.w, y + entry.h
        self._dirty = True

    def resize(self, key: int, w: int, h: int) -> None:
        """Change the size of the box with ``key``."""
        if w < 0 or h < 0:
            raise ValueError("width and height must not be negative")
        entry = self._find(key)
        if entry is None:
            return
        entry.xb, entry.yb = entry.x + w, entry.y + h
        entry.w, entry.h = w, h

    def sort(self) -> None:
        """Order used boxes along the sort axis, free slots last."""
        used = [e for e in self._entries if e.used]
        free = [e for e in self._entries if not e.used]
        if self._sortmode == SortMode.X:
            used.sort(key=lambda e: (e.x, e.y))
        else:
            used.sort(key=lambda e: e.y)
        self._entries = used + free
        self._dirty = False

    def clear(self) -> None:
        """Remove every box."""
        for entry in self._entries:
            entry.key = None
        self._count = 0
        self._next_key = len(self._entries)
        self._dirty = False

    def _start_index(self, x: int, y: int) -> int:
        entries = self._entries
        if self._sortmode == SortMode.X:
            def edge(e: _Entry) -> int:
                return e.xb
            target = x
        else:
            def edge(e: _Entry) -> int:
                return e.yb
            target = y
        test = self._count >> 1
        step = test >> 1
        while step > _TARGET_FILTER:
            if edge(entries[test + step]) > target:
                test += step
            elif edge(entries[test]) > target:
                pass
            else:
                test -= step
            step >>= 1
        if edge(entries[test]) > target or not entries[test].used:
            test = 0
        return test

    def test(self, x: int, y: int, w: int, h: int, limit: Optional[int] = None) -> list[int]:
        """Return keys of boxes overlapping the given rectangle.

        At most ``limit`` keys are returned when it is given.
        """
        if self._dirty:
            self.sort()
        if self._count == 0:
            return []
        found: list[int] = []
        start = self._start_index(x, y)
        for entry in self._entries[start:self._count]:
            if self._sortmode == SortMode.X and entry.x > x + w:
                break
            if self._sortmode == SortMode.Y and entry.y > y + h:
                break
            if entry.xb <= x or entry.x >= x + w:
                continue
            if entry.yb <= y or entry.y >= y + h:
                continue
            if limit is not None and len(found) >= limit:
                break
            found.append(entry.key)
        return found

    def set_sortmode(self, mode: int) -> None:
        """Sort along X for ``SortMode.X``, along Y for anything else."""
        self._sortmode = SortMode.X if mode == SortMode.X else SortMode.Y
        self._dirty = True

    def use_index_keys(self) -> None:
        """Give boxes added from now on their slot number as key."""
        self._index_keys = True