"""
Log-space arithmetic for Boltzmann-weighted scores.

Scores live in the additive log domain: adding two scores multiplies the
underlying Boltzmann factors, and `logadd` adds them. `NEG_INF` marks a
forbidden configuration. It absorbs under `+` and is the identity of
`logadd`, so a DP can treat "forbidden" as an ordinary score.
"""
from __future__ import annotations
import math
import sys
from typing import Final, Iterable

import numpy as np

NEG_INF: Final[float] = float("-inf")

# Anything at or below the most negative finite float is treated as the sentinel.
_IMPOSSIBLE_BOUND: Final[float] = -sys.float_info.max


def neg_inf() -> float:
    """Return the forbidden-configuration score."""
    return NEG_INF


def impossible(score: float) -> bool:
    """
    Check whether a score denotes a forbidden configuration.

    Parameters
    ----------
    score : float
        A log-space score.

    Returns
    -------
    bool
        True for `NEG_INF` (and the most negative finite float, which cannot
        be told apart from it once exponentiated); False for any other value.
    """
    return score <= _IMPOSSIBLE_BOUND


def logadd(acc: float, value: float) -> float:
    """
    Accumulate `value` into `acc` in log space.

    Returns `log(exp(acc) + exp(value))`, computed as
    `max + log1p(exp(min - max))` so that neither term is ever exponentiated
    above zero. Callers accumulate with ``acc = logadd(acc, value)``.

    Parameters
    ----------
    acc : float
        Running log-space sum.
    value : float
        Log-space term to add.

    Returns
    -------
    float
        The updated accumulator. If either operand is forbidden the other one
        is returned unchanged; two forbidden operands stay forbidden.
    """
    if impossible(value):
        return acc
    if impossible(acc):
        return value

    if acc < value:
        acc, value = value, acc

    return acc + math.log1p(math.exp(value - acc))


def log_sum_exp(scores: Iterable[float]) -> float:
    """
    Log-space sum of many scores.

    Parameters
    ----------
    scores : Iterable[float]
        Log-space scores; forbidden entries contribute nothing.

    Returns
    -------
    float
        `log(sum(exp(s)))`, or `NEG_INF` when `scores` is empty or every entry
        is forbidden.
    """
    values = np.fromiter(scores, dtype=np.float64)
    if values.size == 0:
        return NEG_INF

    peak = float(values.max())
    if impossible(peak):
        return NEG_INF

    return peak + float(np.log(np.exp(values - peak).sum()))


def boltz(score: float) -> float:
    """Boltzmann factor `exp(score)`; exactly 0.0 for a forbidden score."""
    if impossible(score):
        return 0.0

    return math.exp(score)
