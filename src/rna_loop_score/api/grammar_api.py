from __future__ import annotations

from rna_loop_score.rules.constraint_model import ConstraintModelProtocol
from rna_loop_score.scoring import log_space


class GrammarApi:
    """
    Constraint view a DP consults before attempting a pair or a loop.

    Borrows `pm` for its whole lifetime; the predicates are forwarded
    unchanged and always return plain booleans. The log-space primitives
    are re-exported so a DP can depend on this facade alone.

    Parameters
    ----------
    pm : ConstraintModelProtocol
        The constraint provider.
    """
    __slots__ = ("_pm",)

    def __init__(self, pm: ConstraintModelProtocol) -> None:
        self._pm = pm

    def allow_pair(self, i: int, j: int) -> bool:
        return bool(self._pm.allow_pair(i, j))

    def allow_inner_loop(self, i: int, j: int) -> bool:
        return bool(self._pm.allow_inner_loop(i, j))

    def allow_outer_loop(self, i: int, j: int) -> bool:
        return bool(self._pm.allow_outer_loop(i, j))

    @staticmethod
    def neg_inf() -> float:
        return log_space.neg_inf()

    @staticmethod
    def impossible(score: float) -> bool:
        return log_space.impossible(score)

    @staticmethod
    def logadd(acc: float, value: float) -> float:
        """Returns the accumulated value; use as ``acc = GrammarApi.logadd(acc, v)``."""
        return log_space.logadd(acc, value)
