from __future__ import annotations
import math
from typing import Mapping, Optional, Tuple

# Gas constant, kcal/(mol·K) and cal/(mol·K). Entropies are tabulated in cal.
R_KCAL_MOL_K = 1.98720425864083e-3
R_CAL_MOL_K = R_KCAL_MOL_K * 1000.0

# (ΔH [kcal/mol], ΔS [cal/(K·mol)])
Thermo = Tuple[float, float]


def calculate_delta_g(delta_h_delta_s: Optional[Thermo], temp_k: float) -> float:
    """
    Free energy ΔG = ΔH − T·ΔS/1000 (kcal/mol) of a tabulated parameter.

    Parameters
    ----------
    delta_h_delta_s : (float, float) or None
        `(ΔH, ΔS)` of the parameter; `None` when the table has no entry.
    temp_k : float
        Temperature in Kelvin.

    Returns
    -------
    float
        ΔG in kcal/mol. A missing entry is `+inf`, which scores as forbidden.
    """
    if delta_h_delta_s is None:
        return math.inf

    enthalpy, entropy = delta_h_delta_s
    return enthalpy - temp_k * entropy / 1000.0


def resolve_dh_ds(*, dh: float | None, ds: float | None, dg: float | None, temp_k: float) -> Thermo:
    """
    Complete `(ΔH, ΔS)` from any two of ΔH, ΔS and ΔG measured at `temp_k`.

    With all three present `dg` is ignored. Results are rounded to two
    decimals, the precision of the published tables.

    Raises
    ------
    ValueError
        If fewer than two terms are given.
    """
    if sum(term is not None for term in (dh, ds, dg)) < 2:
        raise ValueError("Need two of dh, ds and dg to resolve a thermodynamic entry.")

    if dh is None:
        enthalpy, entropy = float(dg) + temp_k * float(ds) / 1000.0, float(ds)
    elif ds is None:
        enthalpy, entropy = float(dh), 1000.0 * (float(dh) - float(dg)) / temp_k
    else:
        enthalpy, entropy = float(dh), float(ds)

    return round(enthalpy, 2), round(entropy, 2)


def lookup_loop_baseline_js(
    table: Mapping[int, Thermo],
    size: int,
    *,
    alpha: float = 1.75,
) -> Optional[Thermo]:
    """
    Loop-length baseline with Jacobson–Stockmayer extrapolation.

    Sizes beyond the table keep the enthalpy of the largest tabulated size
    `a <= size` and lose entropy as `α·R·ln(size/a)`, so that at any
    temperature ΔG(size) = ΔG(a) + α·R·T·ln(size/a).

    Returns
    -------
    (float, float) or None
        `(ΔH, ΔS)`, or `None` if the table is empty or starts above `size`.
    """
    if size in table:
        return table[size]

    anchor = max((length for length in table if length <= size), default=None)
    if anchor is None:
        return None

    enthalpy, entropy = table[anchor]
    return enthalpy, entropy - alpha * R_CAL_MOL_K * math.log(size / anchor)
