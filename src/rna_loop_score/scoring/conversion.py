from __future__ import annotations

from rna_loop_score.utils.energy_utils import R_KCAL_MOL_K

KELVIN_OFFSET = 273.15


def celsius_to_kelvin(temp_c: float) -> float:
    """Convert a temperature from °C to Kelvin."""
    return float(temp_c) + KELVIN_OFFSET


def rt_kcal_mol(temp_k: float) -> float:
    """
    Gas constant times absolute temperature, in kcal/mol.

    Parameters
    ----------
    temp_k : float
        Absolute temperature in Kelvin.

    Returns
    -------
    float
        `R * T` (≈ 0.6163 kcal/mol at 37 °C).

    Raises
    ------
    ValueError
        If `temp_k` is not strictly positive.
    """
    if temp_k <= 0.0:
        raise ValueError(f"Temperature must be positive in Kelvin, got {temp_k}.")

    return R_KCAL_MOL_K * float(temp_k)


def energy_to_score(energy: float, rt: float) -> float:
    """
    Map a free energy (kcal/mol) to a log-space score.

    Lower energy gives a higher score, so `exp(score)` is the Boltzmann factor
    `exp(-ΔG / RT)`. An infinite energy maps to the forbidden score `-inf`.
    """
    return -energy / rt


def score_to_energy(score: float, rt: float) -> float:
    """Inverse of :func:`energy_to_score`: `ΔG = -score * RT`."""
    return -score * rt
