"""Exact equality over ordered result sequences."""

from __future__ import annotations

from typing import Optional, Sequence


def same_sequence(xs: Sequence[object], ys: Sequence[object]) -> bool:
    if len(xs) != len(ys):
        return False
    for x, y in zip(xs, ys):
        if x != y:
            return False
    return True


def first_mismatch(xs: Sequence[object], ys: Sequence[object]) -> Optional[int]:
    """Index of the first differing position, ``min(len)`` on a length mismatch."""

    for idx, (x, y) in enumerate(zip(xs, ys)):
        if x != y:
            return idx
    if len(xs) != len(ys):
        return min(len(xs), len(ys))
    return None


def describe_mismatch(xs: Sequence[object], ys: Sequence[object]) -> str:
    idx = first_mismatch(xs, ys)
    if idx is None:
        return "sequences match"
    if len(xs) != len(ys) and idx == min(len(xs), len(ys)):
        return f"length mismatch: trusted={len(xs)} candidate={len(ys)}"
    return f"value mismatch at index {idx}: trusted={xs[idx]!r} candidate={ys[idx]!r}"


__all__ = ["describe_mismatch", "first_mismatch", "same_sequence"]
