"""Simple shape collision tests."""


def circles_separate(x1: int, y1: int, x2: int, y2: int, r1: int, r2: int) -> bool:
    """Return True when two circles do not touch.

    Circles whose edges just meet count as touching.
    """
    dx = x1 - x2
    dy = y1 - y2
    reach = r1 + r2
    return dx * dx + dy * dy > reach * reach