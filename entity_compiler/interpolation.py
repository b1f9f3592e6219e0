"""
Linear range mapping used by the attribute derivation curves.
"""

from __future__ import annotations


def map_range(
    value: float,
    in_min: float,
    in_max: float,
    out_min: float,
    out_max: float,
    clamp: bool = False,
) -> float:
    """
    Linearly map a value from one range onto another.

    Args:
        value: Input value.
        in_min: Input value mapped to out_min.
        in_max: Input value mapped to out_max.
        out_min: Output at in_min.
        out_max: Output at in_max.
        clamp: Keep the result within the output range, whichever way
            the output range runs (out_min may exceed out_max).

    Returns:
        The mapped value.

    A degenerate input range (in_min == in_max) saturates: values at or
    below in_min map to out_min, everything else to out_max.
    """
    if in_max == in_min:
        return float(out_min if value <= in_min else out_max)

    factor = (value - in_min) / (in_max - in_min)
    result = out_min + factor * (out_max - out_min)

    if clamp:
        low, high = min(out_min, out_max), max(out_min, out_max)
        result = min(max(result, low), high)

    return float(result)
