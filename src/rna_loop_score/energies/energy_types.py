from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Dict, Optional, Tuple

# A mapping from a base to its canonical complement, e.g., {"A": "U", "C": "G"}.
BasePairMap = Mapping[str, str]

# The four linear multiloop coefficients (a, b, c, d), in kcal/mol.
MultiLoopCoeffs = Tuple[float, float, float, float]

# A dictionary mapping a motif key (e.g., a stacking key "AU/UA") to its (ΔH, ΔS).
PairEnergies = Dict[str, Tuple[float, float]]

# A dictionary mapping a loop length (integer) to its (ΔH, ΔS).
LoopEnergies = Dict[int, Tuple[float, float]]


@dataclass(frozen=True, slots=True)
class SecondaryStructureEnergies:
    """
    Immutable container for the nearest-neighbour parameters the scoring
    provider queries.

    Energies are (ΔH [kcal/mol], ΔS [cal/(K·mol)]) so that free energies can be
    evaluated at any temperature; the multiloop coefficients are plain ΔG.

    Parameters
    ----------
    BULGE : LoopEnergies
        Bulge loop baseline by total loop length (nt).
    COMPLEMENT_BASES : BasePairMap
        Map of canonical complements.
    DANGLES : PairEnergies
        Single-nucleotide dangling ends, keyed `"N./XY"` (5') or `"XY/.N"` (3').
    HAIRPIN : LoopEnergies
        Hairpin loop baseline by loop length (nt).
    MULTILOOP : MultiLoopCoeffs
        Linear multibranch model `(a, b, c, d)`: `a` once per loop, `b` per
        branching helix (closing helix included), `c` per unpaired nucleotide,
        `d` when no unpaired nucleotide is enclosed.
    INTERNAL : LoopEnergies
        Internal loop baseline by total loop length (nt).
    NN_STACK : PairEnergies
        Nearest-neighbour stacks keyed `"XY/ZW"`: left dimer is the outer pair
        read 5'→3' across strands, right dimer is the inner pair reversed.
    INTERNAL_MISMATCH : PairEnergies
        Whole-loop parameters for 1×1 internal loops.
    TERMINAL_MISMATCH : PairEnergies
        Terminal mismatches keyed `"LX/YR"` for pair `XY` flanked by `L`, `R`.
    HAIRPIN_MISMATCH, MULTI_MISMATCH : PairEnergies, optional
        Loop-specific mismatch tables, same key layout as `TERMINAL_MISMATCH`.
    SPECIAL_HAIRPINS : PairEnergies, optional
        Sequence-specific hairpin bonuses keyed by the loop sequence including
        its closing pair (e.g. tetraloops).
    """
    BULGE: LoopEnergies
    COMPLEMENT_BASES: BasePairMap
    DANGLES: PairEnergies
    HAIRPIN: LoopEnergies
    MULTILOOP: MultiLoopCoeffs
    INTERNAL: LoopEnergies
    NN_STACK: PairEnergies
    INTERNAL_MISMATCH: PairEnergies
    TERMINAL_MISMATCH: PairEnergies
    HAIRPIN_MISMATCH: Optional[PairEnergies] = None
    MULTI_MISMATCH: Optional[PairEnergies] = None
    SPECIAL_HAIRPINS: Optional[PairEnergies] = None
