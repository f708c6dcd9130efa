from __future__ import annotations
from typing import Final

from rna_loop_score.utils.nucleotide_utils import normalize_base

# Minimum number of unpaired nucleotides required in a hairpin loop.
MIN_HAIRPIN_UNPAIRED: Final[int] = 3

# Maximum number of unpaired nucleotides in a bulge/interior loop.
MAX_LOOP_UNPAIRED: Final[int] = 30

# ---- Pairing rules (RNA) -----------------------------------------------------

# Canonical Watson–Crick pairs plus GU wobble, both orientations.
_RNA_ALLOWED_PAIRS: Final[frozenset[str]] = frozenset(
    {"AU", "UA", "GC", "CG", "GU", "UG"}
)

# Pairs that carry the terminal AU/GU helix-end penalty.
_WEAK_PAIRS: Final[frozenset[str]] = frozenset({"AU", "UA", "GU", "UG"})


def can_pair(base_i: str, base_j: str) -> bool:
    """
    Return True if nucleotides `base_i` and `base_j` can base pair in RNA.

    We allow canonical Watson–Crick pairs (AU, GC) and GU wobble pairs.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides, case-insensitive. Padding sentinels and
        ambiguity codes never pair.

    Returns
    -------
    bool
        True if (a,b) is in {AU, UA, GC, CG, GU, UG}; False otherwise.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    return (normalize_base(base_i) + normalize_base(base_j)) in _RNA_ALLOWED_PAIRS


def is_weak_pair(base_i: str, base_j: str) -> bool:
    """True for AU/UA/GU/UG pairs."""
    return (normalize_base(base_i) + normalize_base(base_j)) in _WEAK_PAIRS


def hairpin_size(i: int, j: int) -> int:
    """
    Number of unpaired nucleotides inside a hairpin closed by `(i, j)`,
    i.e. `j - i - 1`.
    """
    return j - i - 1


def is_min_hairpin_size(i: int, j: int, min_unpaired: int = MIN_HAIRPIN_UNPAIRED) -> bool:
    """
    Check whether a candidate closing pair `(i, j)` satisfies the minimum hairpin size.

    Returns
    -------
    bool
        True if `j - i - 1 >= min_unpaired`, else False.
    """
    return hairpin_size(i, j) >= min_unpaired


def interior_size(i: int, j: int, k: int, l: int) -> int:
    """
    Unpaired nucleotides of the interior loop between outer pair `(i, j)` and
    inner pair `(k, l)`, counting both strands.
    """
    return (k - i - 1) + (j - l - 1)


def is_max_loop_size(i: int, j: int, k: int, l: int, max_unpaired: int = MAX_LOOP_UNPAIRED) -> bool:
    """True if the interior loop `(i, j) > (k, l)` has at most `max_unpaired` unpaired nts."""
    return interior_size(i, j, k, l) <= max_unpaired
