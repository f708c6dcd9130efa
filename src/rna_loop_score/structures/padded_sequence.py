from __future__ import annotations
from dataclasses import dataclass
from typing import Final

from rna_loop_score.utils.nucleotide_utils import normalize_sequence

# Sentinel placed before the first and after the last nucleotide. It never pairs.
PAD_BASE: Final[str] = "$"


@dataclass(frozen=True, slots=True)
class PaddedSequence:
    """
    A normalised RNA sequence with one sentinel at each end.

    Raw 1-origin nucleotide `k` sits at padded position `k`; padded positions
    run from `0` (leading sentinel) to `length + 1` (trailing sentinel).

    Attributes
    ----------
    text : str
        The padded string, e.g. ``"$GGAAACC$"``.
    length : int
        Number of real nucleotides (padding excluded).
    """
    text: str
    length: int

    @classmethod
    def from_raw(cls, seq: str) -> "PaddedSequence":
        """
        Normalise and pad a raw sequence.

        Raises
        ------
        ValueError
            If `seq` contains characters outside {A, C, G, U/T, N}.
        """
        normalized = normalize_sequence(seq)
        return cls(text=f"{PAD_BASE}{normalized}{PAD_BASE}", length=len(normalized))

    def check(self, lo: int, hi: int) -> str:
        """
        Assert that padded positions `lo..hi` exist and return the padded text.

        Raises
        ------
        IndexError
            If `lo < 0` or `hi > length + 1`.
        """
        if lo < 0 or hi > self.length + 1:
            raise IndexError(
                f"Padded positions [{lo}, {hi}] fall outside [0, {self.length + 1}]."
            )
        return self.text
