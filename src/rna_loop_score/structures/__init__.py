from rna_loop_score.structures.pairing import Pair
from rna_loop_score.structures.padded_sequence import PAD_BASE, PaddedSequence

__all__ = [
    "Pair",
    "PAD_BASE",
    "PaddedSequence",
]
