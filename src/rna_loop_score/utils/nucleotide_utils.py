from __future__ import annotations
from typing import Final, Optional

# Alphabet accepted for scoring after normalisation. `N` is kept so that
# ambiguous positions simply never pair.
VALID_BASES: Final[frozenset[str]] = frozenset({"A", "C", "G", "U", "N"})


def normalize_base(base_raw: str) -> str:
    """
    Upper-case a nucleotide base and map T->U so RNA logic can be applied uniformly.

    Parameters
    ----------
    base_raw : str
        Raw single-character nucleotide base.

    Returns
    -------
    str
        Normalized base. Non-nucleotide characters (e.g. padding sentinels)
        are returned upper-cased and otherwise untouched.
    """
    if not isinstance(base_raw, str):
        return base_raw

    if len(base_raw) != 1:
        return base_raw

    base_norm = base_raw.upper()

    return "U" if base_norm == "T" else base_norm


def normalize_sequence(seq: str) -> str:
    """
    Normalise a whole sequence and validate its alphabet.

    Parameters
    ----------
    seq : str
        Raw nucleotide sequence (DNA or RNA, any case).

    Returns
    -------
    str
        Upper-case RNA sequence.

    Raises
    ------
    ValueError
        If the sequence contains a character outside {A, C, G, U/T, N}.
    """
    normalized = "".join(normalize_base(base) for base in seq)
    for pos, base in enumerate(normalized, start=1):
        if base not in VALID_BASES:
            raise ValueError(f"Invalid nucleotide '{seq[pos - 1]}' at position {pos}.")

    return normalized


def pair_key(base_a: str, base_b: str) -> str:
    """
    Build a two-letter base-pair key (RNA-normalized), e.g. ``"AU"`` or ``"GC"``.
    """
    return normalize_base(base_a) + normalize_base(base_b)


def pair_str(seq: str, base_i: int, base_j: int) -> str:
    """Two-letter key of the pair formed by `seq[base_i]` and `seq[base_j]`."""
    return pair_key(seq[base_i], seq[base_j])


def stack_key(seq: str, base_i: int, base_j: int, base_k: int, base_l: int) -> Optional[str]:
    """
    Build the nearest-neighbour stack key "XY/ZW" for an outer pair `(i, j)`
    stacked on an inner pair `(k, l)`.

    The left dimer is the outer pair read across strands (X = seq[i],
    Y = seq[j]); the right dimer is the inner pair reversed (Z = seq[l],
    W = seq[k]). For adjacent pairs `k = i + 1` and `l = j - 1`; the pairs
    may also be separated, as for stacking across a one-nucleotide bulge.

    Returns
    -------
    str or None
        The "XY/ZW" key, or `None` if the indices do not describe two nested
        pairs inside the sequence.
    """
    if not (0 <= base_i < base_k < base_l < base_j < len(seq)):
        return None

    base_x = normalize_base(seq[base_i])
    base_y = normalize_base(seq[base_j])
    base_z = normalize_base(seq[base_l])
    base_w = normalize_base(seq[base_k])

    return f"{base_x}{base_y}/{base_z}{base_w}"


def mismatch_key(left_base: str, pair: str, right_base: str) -> str:
    """Terminal-mismatch key "LX/YR" for pair "XY" flanked by `L` and `R`."""
    return f"{left_base}{pair[0]}/{pair[1]}{right_base}"


def dangle5_key(base: str, pair: str) -> str:
    """Key of a 5' dangling nucleotide on pair "XY", e.g. "A./GC"."""
    return f"{base}./{pair}"


def dangle3_key(pair: str, base: str) -> str:
    """Key of a 3' dangling nucleotide on pair "XY", e.g. "GC/.A"."""
    return f"{pair}/.{base}"
