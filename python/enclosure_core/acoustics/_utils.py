"""Sweep construction and curve helpers shared by the response generator."""

from __future__ import annotations

from collections.abc import Sequence


def frequency_sweep(start_hz: float, stop_hz: float, count: int) -> list[float]:
    """Return ``count`` evenly spaced frequencies from ``start_hz`` to ``stop_hz`` inclusive."""

    if count < 2:
        raise ValueError("A frequency sweep needs at least two samples")
    if not 0 < start_hz < stop_hz:
        raise ValueError("Sweep bounds must satisfy 0 < start < stop")
    step = (stop_hz - start_hz) / (count - 1)
    sweep = [start_hz + i * step for i in range(count - 1)]
    sweep.append(stop_hz)
    return sweep


def lower_cutoff(
    frequencies: Sequence[float],
    levels: Sequence[float],
    drop_db: float = 3.0,
) -> float | None:
    """Return the frequency below the peak where ``levels`` first fall ``drop_db`` under it.

    ``frequencies`` must be sorted ascending. The crossing is linearly
    interpolated between neighbouring samples. ``None`` means the response
    never drops that far inside the sampled band.
    """

    if len(frequencies) != len(levels) or not frequencies:
        return None

    peak = max(levels)
    threshold = peak - drop_db
    idx = list(levels).index(peak)

    while idx > 0:
        hi_f, hi_v = frequencies[idx], levels[idx]
        lo_f, lo_v = frequencies[idx - 1], levels[idx - 1]
        if lo_v <= threshold:
            if hi_v == lo_v:
                return lo_f
            ratio = (threshold - lo_v) / (hi_v - lo_v)
            return lo_f + ratio * (hi_f - lo_f)
        idx -= 1
    return None


__all__ = ["frequency_sweep", "lower_cutoff"]
