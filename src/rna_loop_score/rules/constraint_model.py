from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Protocol, Tuple

import numpy as np

from rna_loop_score.rules.constraints import MIN_HAIRPIN_UNPAIRED, can_pair, is_min_hairpin_size
from rna_loop_score.structures.padded_sequence import PaddedSequence
from rna_loop_score.structures.pairing import Pair

logger = logging.getLogger(__name__)


class ConstraintModelProtocol(Protocol):
    """
    Pairing/loop predicates consulted by a DP before it attempts a pair or loop.

    All three predicates take DP coordinates: a pair `(i, j)` names padded
    nucleotides `i + 1` and `j`; a region `[i, j)` names padded nucleotides
    `i + 1 .. j`.
    """
    def allow_pair(self, i: int, j: int) -> bool: ...

    def allow_inner_loop(self, i: int, j: int) -> bool: ...

    def allow_outer_loop(self, i: int, j: int) -> bool: ...


@dataclass(frozen=True, slots=True)
class FoldingConstraints:
    """
    User-supplied folding constraints, in padded (raw 1-origin) positions.

    Attributes
    ----------
    max_span : int, optional
        Maximum inclusive span `j - i + 1` of any base pair. Also bounds the
        length of unpaired regions inside closed loops.
    unpaired : FrozenSet[int]
        Positions that must stay unpaired.
    paired : FrozenSet[int]
        Positions that must be paired, hence never part of an unpaired region.
    forbidden_pairs : FrozenSet[Pair]
        Specific pairs that may not form.
    """
    max_span: Optional[int] = None
    unpaired: FrozenSet[int] = frozenset()
    paired: FrozenSet[int] = frozenset()
    forbidden_pairs: FrozenSet[Pair] = frozenset()

    def __post_init__(self) -> None:
        if self.max_span is not None and self.max_span < 2:
            raise ValueError(f"max_span must be at least 2, got {self.max_span}.")
        clash = self.unpaired & self.paired
        if clash:
            raise ValueError(f"Positions forced both paired and unpaired: {sorted(clash)}.")


@dataclass(slots=True)
class ConstraintModel:
    """
    Concrete constraint provider: canonical/wobble pairing, minimum hairpin
    separation and optional user folding constraints.

    Call :meth:`set_seq` before querying. Predicates are read-only, so one
    instance may be shared by concurrent DP workers once the sequence is bound.

    Attributes
    ----------
    constraints : FoldingConstraints
        User constraints; unconstrained by default.
    min_hairpin : int
        Minimum number of unpaired nucleotides enclosed by any pair.
    """
    constraints: FoldingConstraints = field(default_factory=FoldingConstraints)
    min_hairpin: int = MIN_HAIRPIN_UNPAIRED
    _seq: Optional[PaddedSequence] = field(default=None, init=False, repr=False)
    _paired_prefix: Tuple[int, ...] = field(default=(), init=False, repr=False)

    def set_seq(self, seq: str) -> None:
        """
        Bind a sequence, replacing any previously bound one.

        Raises
        ------
        ValueError
            If the sequence has invalid characters or a constrained position
            lies outside it.
        """
        padded = PaddedSequence.from_raw(seq)
        positions = self.constraints.unpaired | self.constraints.paired
        for pair in self.constraints.forbidden_pairs:
            positions = positions | {pair.base_i, pair.base_j}
        out_of_range = sorted(p for p in positions if not 1 <= p <= padded.length)
        if out_of_range:
            raise ValueError(f"Constrained positions outside 1..{padded.length}: {out_of_range}.")

        # Prefix count of forced-paired positions over padded indices 0..n+1.
        mask = np.zeros(padded.length + 2, dtype=np.int64)
        for pos in self.constraints.paired:
            mask[pos] = 1
        self._paired_prefix = tuple(np.cumsum(mask).tolist())
        self._seq = padded
        logger.debug(f"Constraint model bound to sequence of length {padded.length}")

    def seqlen(self) -> int:
        """Length of the bound sequence, padding excluded."""
        return self._require_seq().length

    def allow_pair(self, i: int, j: int) -> bool:
        """True if padded nucleotides `i + 1` and `j` may form a base pair."""
        padded = self._require_seq()
        left, right = i + 1, j
        seq = padded.check(left, right)
        pair = Pair(left, right)
        if left < 1 or right > padded.length:
            return False
        if not is_min_hairpin_size(left, right, self.min_hairpin):
            return False
        max_span = self.constraints.max_span
        if max_span is not None and pair.span > max_span:
            return False
        if left in self.constraints.unpaired or right in self.constraints.unpaired:
            return False
        if pair in self.constraints.forbidden_pairs:
            return False

        return can_pair(seq[left], seq[right])

    def allow_inner_loop(self, i: int, j: int) -> bool:
        """True if region `[i, j)` may stay unpaired inside a closed loop."""
        padded = self._require_seq()
        padded.check(i, j)
        if j < i:
            return False
        max_span = self.constraints.max_span
        if max_span is not None and j - i > max_span:
            return False

        return self._paired_prefix[j] == self._paired_prefix[i]

    def allow_outer_loop(self, i: int, j: int) -> bool:
        """True if region `[i, j)` may stay unpaired in the exterior loop."""
        padded = self._require_seq()
        padded.check(i, j)
        if j < i:
            return False

        return self._paired_prefix[j] == self._paired_prefix[i]

    def _require_seq(self) -> PaddedSequence:
        if self._seq is None:
            raise RuntimeError("set_seq() must be called before querying constraints.")
        return self._seq
