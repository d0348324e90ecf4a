"""Deterministic 64-bit integer mixer used as the generators' randomness source."""

from __future__ import annotations

MASK64 = (1 << 64) - 1


def mix(x: int) -> int:
    """Scramble ``x`` into another 64-bit unsigned value.

    Pure and stateless: feeding the previous output back in (``h = mix(h)``)
    yields a reproducible pseudo-random stream.
    """

    v = ((x & MASK64) * 3935559000370003845 + 2691343689449507681) & MASK64
    v ^= v >> 21
    v ^= (v << 37) & MASK64
    v ^= v >> 4
    v = (v * 4768777513237032717) & MASK64
    v ^= (v << 20) & MASK64
    v ^= v >> 41
    v ^= (v << 5) & MASK64
    return v


def derive_seed(session_seed: int, index: int) -> int:
    """Per-trial seed derived from a session seed and a trial index."""

    return mix(mix(session_seed) ^ (index & MASK64))


__all__ = ["MASK64", "derive_seed", "mix"]
