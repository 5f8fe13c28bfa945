"""Power-of-two helpers for 32-bit unsigned values."""

_LIMIT = 0x80000000


def round_up_to_pow2(val: int) -> int:
    """Return the smallest power of two not below ``val``.

    Values above 2**31 cannot be rounded within 32 bits and give 0.
    Zero rounds up to 1.
    """
    if val < 0:
        raise ValueError("value must not be negative")
    if val > _LIMIT:
        return 0
    result = 1
    while result < val:
        result <<= 1
    return result


def get_power(val: int) -> int:
    """Return the exponent of ``round_up_to_pow2(val)``, or 0 if it overflows."""
    power = round_up_to_pow2(val)
    if power == 0:
        return 0
    return power.bit_length() - 1