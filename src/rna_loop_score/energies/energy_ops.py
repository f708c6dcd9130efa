from __future__ import annotations
import math
from typing import Mapping, Optional, Tuple

from rna_loop_score.energies.energy_types import SecondaryStructureEnergies
from rna_loop_score.rules.constraints import MIN_HAIRPIN_UNPAIRED, is_weak_pair
from rna_loop_score.utils import calculate_delta_g, lookup_loop_baseline_js, normalize_base, stack_key
from rna_loop_score.utils.nucleotide_utils import pair_str, mismatch_key, dangle3_key, dangle5_key

DEFAULT_T_K = 310.15  # 37 °C in Kelvin

# Helix-end penalty for AU/GU pairs, kcal/mol.
TERMINAL_AU_PENALTY = 0.45


def hairpin_energy(
    base_i: int,
    base_j: int,
    seq: str,
    energies: SecondaryStructureEnergies,
    temp_k: float = DEFAULT_T_K
) -> float:
    """
    Calculates the free energy (ΔG) of a hairpin loop closed by `(base_i, base_j)`.

    The total is a length-dependent baseline (Jacobson–Stockmayer beyond the
    table), a mismatch term for the closing pair and its inner neighbours
    (loops of four or more), a sequence-specific bonus (e.g. tetraloops) and the terminal AU/GU penalty.

    Parameters
    ----------
    base_i : int
        5' index of the closing base pair in `seq`.
    base_j : int
        3' index of the closing base pair in `seq`.
    seq : str
        The RNA sequence (may be padded; indices are positions in it).
    energies : SecondaryStructureEnergies
        Parameter tables.
    temp_k : float, optional
        Temperature in Kelvin.

    Returns
    -------
    float
        ΔG in kcal/mol, or positive infinity for an invalid geometry.
    """
    if base_i < 0 or base_j >= len(seq) or base_i >= base_j:
        return float("inf")
    hairpin_len = base_j - base_i - 1
    if hairpin_len < MIN_HAIRPIN_UNPAIRED:
        return float("inf")

    base_hp_dh_ds = lookup_loop_baseline_js(energies.HAIRPIN, hairpin_len)
    if base_hp_dh_ds is None:
        return float("inf")
    delta_g = calculate_delta_g(base_hp_dh_ds, temp_k)

    # Triloops take no mismatch term.
    if hairpin_len > 3:
        delta_g += _hairpin_mismatch_energy(base_i, base_j, seq, energies, temp_k)

    if energies.SPECIAL_HAIRPINS:
        loop_seq = "".join(normalize_base(b) for b in seq[base_i:base_j + 1])
        special_dh_ds = energies.SPECIAL_HAIRPINS.get(loop_seq)
        if special_dh_ds is not None:
            delta_g += calculate_delta_g(special_dh_ds, temp_k)

    delta_g += terminal_au_penalty(seq[base_i], seq[base_j])

    return delta_g


def _hairpin_mismatch_energy(
    base_i: int, base_j: int, seq: str, energies: SecondaryStructureEnergies, temp_k: float
) -> float:
    # Closing pair and its neighbours inside the loop, e.g. "CA/GU".
    closing = pair_str(seq, base_i, base_j)
    key = mismatch_key(normalize_base(seq[base_i + 1]), closing, normalize_base(seq[base_j - 1]))

    # Hairpin-specific mismatches win over the generic terminal table.
    mismatch_dh_ds = (energies.HAIRPIN_MISMATCH or {}).get(key)
    if mismatch_dh_ds is None:
        mismatch_dh_ds = energies.TERMINAL_MISMATCH.get(key)

    return 0.0 if mismatch_dh_ds is None else calculate_delta_g(mismatch_dh_ds, temp_k)


def stack_energy(
    base_i: int,
    base_j: int,
    base_k: int,
    base_l: int,
    seq: str,
    energies: SecondaryStructureEnergies,
    temp_k: float = DEFAULT_T_K
) -> float:
    """
    Stacking free energy (ΔG) of outer pair `(base_i, base_j)` on inner pair
    `(base_k, base_l)`.

    Parameters
    ----------
    base_i, base_j : int
        Outer pair.
    base_k, base_l : int
        Inner pair (normally `base_i + 1`, `base_j - 1`).
    seq : str
        The RNA sequence.
    energies : SecondaryStructureEnergies
        Parameter tables.
    temp_k : float, optional
        Temperature in Kelvin.

    Returns
    -------
    float
        ΔG in kcal/mol; positive infinity if the geometry is invalid or the
        stack is not tabulated.
    """
    key = stack_key(seq, base_i, base_j, base_k, base_l)
    if key is None:
        return float("inf")

    return calculate_delta_g(energies.NN_STACK.get(key), temp_k)


def internal_loop_energy(
    base_i: int,
    base_j: int,
    base_k: int,
    base_l: int,
    seq: str,
    energies: SecondaryStructureEnergies,
    temp_k: float = DEFAULT_T_K
) -> float:
    """
    Free energy (ΔG) of a bulge or internal loop between outer pair
    `(base_i, base_j)` and inner pair `(base_k, base_l)`.

    - Bulge (unpaired bases on one strand only): length baseline plus AU/GU
      penalties on both pairs; a single-nucleotide bulge instead keeps the
      stacking of the two pairs across it and takes no AU/GU penalty.
    - 1×1 internal loop: whole-loop mismatch parameters when tabulated.
    - Other internal loops: length baseline plus AU/GU penalties.

    Returns
    -------
    float
        ΔG in kcal/mol; positive infinity for an invalid geometry, including
        two directly stacked pairs.
    """
    if not (0 <= base_i < base_k < base_l < base_j < len(seq)):
        return float("inf")

    unpaired_len_5 = base_k - base_i - 1
    unpaired_len_3 = base_j - base_l - 1

    # Bulge: exactly one strand carries unpaired bases.
    if (unpaired_len_5 == 0) != (unpaired_len_3 == 0):
        bulge_size = unpaired_len_5 + unpaired_len_3
        delta_g = calculate_delta_g(lookup_loop_baseline_js(energies.BULGE, bulge_size), temp_k)

        if bulge_size == 1:
            return delta_g + stack_energy(base_i, base_j, base_k, base_l, seq, energies, temp_k)

        delta_g += terminal_au_penalty(seq[base_i], seq[base_j])
        delta_g += terminal_au_penalty(seq[base_k], seq[base_l])
        return delta_g

    if unpaired_len_5 > 0 and unpaired_len_3 > 0:
        if unpaired_len_5 == 1 and unpaired_len_3 == 1:
            left_motif = normalize_base(seq[base_i + 1]) + normalize_base(seq[base_k - 1])
            right_motif = normalize_base(seq[base_j - 1]) + normalize_base(seq[base_l + 1])
            mismatch_dh_ds = energies.INTERNAL_MISMATCH.get(f"{left_motif}/{right_motif}")
            if mismatch_dh_ds is not None:
                return calculate_delta_g(mismatch_dh_ds, temp_k)

        loop_size = unpaired_len_5 + unpaired_len_3
        delta_g = calculate_delta_g(lookup_loop_baseline_js(energies.INTERNAL, loop_size), temp_k)
        delta_g += terminal_au_penalty(seq[base_i], seq[base_j])
        delta_g += terminal_au_penalty(seq[base_k], seq[base_l])
        return delta_g

    # No unpaired base on either strand: that is a stack, not a loop.
    return float("inf")


# A DP adds the linear multiloop model `a + b * branches + c * unpaired`
# piecewise: closing + (branches - 1) * branch + unpaired.

def multiloop_closing_energy(energies: SecondaryStructureEnergies) -> float:
    """Initiation `a` plus the branch term `b` of the closing helix."""
    coeff_a, coeff_b, _, _ = energies.MULTILOOP
    return coeff_a + coeff_b


def multiloop_branch_energy(energies: SecondaryStructureEnergies) -> float:
    """Branch term `b` of one inner helix."""
    return energies.MULTILOOP[1]


def multiloop_unpaired_energy(unpaired_bases: int, energies: SecondaryStructureEnergies) -> float:
    """Unpaired term `c * unpaired_bases`."""
    return energies.MULTILOOP[2] * unpaired_bases


def branch_end_bonus(
    seq: str,
    base_i: int,
    base_j: int,
    mismatch_table: Optional[Mapping[str, Tuple[float, float]]],
    energies: SecondaryStructureEnergies,
    temp_k: float
) -> float:
    """
    Most favourable end bonus of a helix whose outer pair `(base_i, base_j)`
    branches off a loop.

    The candidates are the terminal mismatch with both outside neighbours,
    the 5' dangle, the 3' dangle, both dangles together and no bonus at all.

    Parameters
    ----------
    seq : str
        The RNA sequence. Neighbours outside it (or padding sentinels) never
        match a table entry.
    base_i, base_j : int
        The branch pair.
    mismatch_table : Mapping, optional
        Mismatch table of the enclosing loop (terminal for the exterior loop,
        multiloop mismatches inside a multiloop).
    energies : SecondaryStructureEnergies
        Parameter tables (for the dangles).
    temp_k : float
        Temperature in Kelvin.

    Returns
    -------
    float
        The most stabilising bonus (≤ 0.0) in kcal/mol.
    """
    seq_len = len(seq)
    closing = pair_str(seq, base_i, base_j)
    left_base = normalize_base(seq[base_i - 1]) if base_i > 0 else "N"
    right_base = normalize_base(seq[base_j + 1]) if base_j < seq_len - 1 else "N"

    delta_g_mismatch = calculate_delta_g(
        (mismatch_table or {}).get(mismatch_key(left_base, closing, right_base)), temp_k
    )
    delta_g_dangle5 = calculate_delta_g(energies.DANGLES.get(dangle5_key(left_base, closing)), temp_k)
    delta_g_dangle3 = calculate_delta_g(energies.DANGLES.get(dangle3_key(closing, right_base)), temp_k)

    best_bonus = min(delta_g_mismatch, delta_g_dangle5 + delta_g_dangle3, delta_g_dangle5, delta_g_dangle3, 0.0)

    return best_bonus if math.isfinite(best_bonus) else 0.0


def exterior_end_bonus(
    seq: str,
    base_i: int,
    base_j: int,
    energies: SecondaryStructureEnergies,
    temp_k: float
) -> float:
    """End bonus of a helix in the exterior loop (terminal mismatches or dangles)."""
    return branch_end_bonus(seq, base_i, base_j, energies.TERMINAL_MISMATCH, energies, temp_k)


def multiloop_close_bonus(
    seq: str,
    base_i: int,
    base_j: int,
    energies: SecondaryStructureEnergies,
    temp_k: float
) -> float:
    """
    Mismatch bonus of the pair `(base_i, base_j)` closing a multiloop, using
    its neighbours inside the loop.

    Returns
    -------
    float
        ΔG in kcal/mol, or 0.0 when the table is absent or has no entry.
    """
    if base_i + 1 >= base_j or not energies.MULTI_MISMATCH:
        return 0.0

    closing = pair_str(seq, base_i, base_j)
    key = mismatch_key(normalize_base(seq[base_i + 1]), closing, normalize_base(seq[base_j - 1]))
    delta_g = calculate_delta_g(energies.MULTI_MISMATCH.get(key), temp_k)

    return 0.0 if delta_g == float("inf") else delta_g


def terminal_au_penalty(base_x: str, base_y: str) -> float:
    """
    Destabilising penalty for a helix ending in an AU or GU pair.

    Returns
    -------
    float
        `TERMINAL_AU_PENALTY` for AU/UA/GU/UG, 0.0 otherwise.
    """
    if is_weak_pair(base_x, base_y):
        return TERMINAL_AU_PENALTY

    return 0.0
