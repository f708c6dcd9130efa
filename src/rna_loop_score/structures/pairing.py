from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pair:
    """
    Immutable (i, j) index pair naming two paired nucleotides.

    Used in closed-pair coordinates, i.e. positions of the padded sequence
    (raw 1-origin positions).

    Parameters
    ----------
    base_i : int
        5' position.
    base_j : int
        3' position, `base_j > base_i` in valid uses.
    """
    base_i: int
    base_j: int

    @property
    def span(self) -> int:
        """Inclusive span length, ``j - i + 1``."""
        return self.base_j - self.base_i + 1

