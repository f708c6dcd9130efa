from __future__ import annotations
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from rna_loop_score.energies.energy_types import (
    BasePairMap,
    LoopEnergies,
    MultiLoopCoeffs,
    PairEnergies,
)
from rna_loop_score.utils.energy_utils import resolve_dh_ds

DEFAULT_TEMP_K = 310.15

# Placeholder nucleotide used by Turner-style grids for "no neighbour".
_PLACEHOLDER_NUCS = frozenset({"E"})


# ---------- Top-level config helpers ----------

def get_temperature_kelvin(data: Mapping[str, Any]) -> float:
    """
    Temperature (Kelvin) at which the file's ΔG values were measured.

    Prefers `metadata.temperature_kelvin`, then a top-level
    `temperature_kelvin`, then 310.15 K.
    """
    metadata = data.get("metadata") or {}
    temp_k = metadata.get("temperature_kelvin") or data.get("temperature_kelvin") or DEFAULT_TEMP_K

    return float(temp_k)


def parse_complements(data: Mapping[str, Any]) -> BasePairMap:
    """
    Parse and upper-case the base complement map.

    Raises
    ------
    ValueError
        If the `complements` mapping is missing or empty.
    """
    complements_data = data.get("complements")
    if not isinstance(complements_data, dict) or not complements_data:
        raise ValueError("YAML must contain a non-empty 'complements' mapping.")

    return {str(k).upper(): str(v).upper() for k, v in complements_data.items()}


def validate_rna_complements(complements: BasePairMap) -> None:
    """
    Validate that an RNA complement map uses uracil and not thymine.

    Raises
    ------
    ValueError
        If 'U' is absent or 'T' is present.
    """
    if "U" not in complements.keys() and "U" not in complements.values():
        raise ValueError("RNA complements must include uracil ('U').")
    if "T" in complements.keys() or "T" in complements.values():
        raise ValueError("RNA complements must not contain thymine ('T') (DNA-specific).")


# ---------- Generic cell helpers ----------

def _cell(matrix: Any, idx_i: int, idx_j: int) -> float | None:
    """Numeric cell of a list-of-lists, or `None` when absent/out of bounds."""
    if matrix is None:
        return None
    try:
        cell_value = matrix[idx_i][idx_j]
    except (IndexError, KeyError, TypeError):
        return None

    return None if cell_value is None else float(cell_value)


def _dg_of(node: Mapping[str, Any]) -> Any:
    """The ΔG entry of a node, accepting either `dg` or `dg_37`."""
    return node.get("dg") if "dg" in node else node.get("dg_37")


def _resolve_entry(node: Mapping[str, Any], temp_k: float) -> Optional[Tuple[float, float]]:
    """(ΔH, ΔS) of a `{dh|ds|dg}` mapping, or `None` when all three are absent."""
    dh, ds, dg = node.get("dh"), node.get("ds"), _dg_of(node)
    if dh is None and ds is None and dg is None:
        return None

    return resolve_dh_ds(dh=dh, ds=ds, dg=dg, temp_k=temp_k)


def _resolve_cell(
    dh_matrix: Any, ds_matrix: Any, dg_matrix: Any, idx_i: int, idx_j: int, temp_k: float
) -> Optional[Tuple[float, float]]:
    """
    (ΔH, ΔS) of one cell of three parallel grids; `None` for an empty cell.

    Raises
    ------
    ValueError
        If the cell supplies only one of ΔH/ΔS/ΔG.
    """
    dh = _cell(dh_matrix, idx_i, idx_j)
    ds = _cell(ds_matrix, idx_i, idx_j)
    dg = _cell(dg_matrix, idx_i, idx_j)
    if dh is None and ds is None and dg is None:
        return None

    return resolve_dh_ds(dh=dh, ds=ds, dg=dg, temp_k=temp_k)


def _parse_grid(
    grid: Any,
    temp_k: float,
    key_fmtr: Callable[[str, str], str],
) -> PairEnergies:
    """
    Flatten a `rows` × `cols` grid of thermodynamic values into keyed entries.

    Parameters
    ----------
    grid : Any
        Mapping with `rows`, `cols` and any two of `dh`, `ds`, `dg`/`dg_37`
        as 2D lists. Anything else yields an empty table.
    temp_k : float
        Temperature of the tabulated ΔG values.
    key_fmtr : Callable[[str, str], str]
        Builds the flat key from `(row_label, col_label)`.

    Returns
    -------
    PairEnergies
        `key → (ΔH, ΔS)` for every non-empty cell.
    """
    if not isinstance(grid, dict):
        return {}

    rows = [str(x) for x in grid.get("rows", [])]
    cols = [str(x) for x in grid.get("cols", [])]
    dh_rows, ds_rows, dg_rows = grid.get("dh"), grid.get("ds"), _dg_of(grid)

    energies: PairEnergies = {}
    for i, row in enumerate(rows):
        for j, col in enumerate(cols):
            delta_h_delta_s = _resolve_cell(dh_rows, ds_rows, dg_rows, i, j, temp_k)
            if delta_h_delta_s is None:
                continue
            energies[key_fmtr(row, col)] = delta_h_delta_s

    return energies


# ---------- Multiloop ----------

def parse_multiloop(data: Mapping[str, Any]) -> MultiLoopCoeffs:
    """
    Parse multiloop coefficients `(a, b, c, d)` (ΔG, kcal/mol).

    Raises
    ------
    ValueError
        If the `multiloop` section is missing or not a mapping.
    """
    multiloop_data = data.get("multiloop")
    if not isinstance(multiloop_data, dict):
        raise ValueError("Missing 'multiloop' section.")

    return (
        float(multiloop_data.get("a", 0.0)),
        float(multiloop_data.get("b", 0.0)),
        float(multiloop_data.get("c", 0.0)),
        float(multiloop_data.get("d", 0.0)),
    )


# ---------- Loop length tables ----------

def parse_loop_table(
    data: Mapping[str, Any],
    keys: Iterable[str],
    temp_k: float,
) -> LoopEnergies:
    """
    Parse baseline loop energies indexed by loop length (nt).

    The first key of `keys` present in `data` is used, e.g.
    `("hairpin_loops", "hairpin_loop")`. Entries with no values are skipped.

    Returns
    -------
    LoopEnergies
        `length → (ΔH, ΔS)`; empty if no table is present.
    """
    loop = next((data[k] for k in keys if k in data), None)
    if not isinstance(loop, dict):
        return {}

    loop_energies: LoopEnergies = {}
    for length_str, entry in loop.items():
        if not isinstance(entry, dict):
            continue
        delta_h_delta_s = _resolve_entry(entry, temp_k)
        if delta_h_delta_s is not None:
            loop_energies[int(length_str)] = delta_h_delta_s

    return loop_energies


# ---------- Stacks, dangles, mismatches ----------

def parse_stacks_matrix(data: Mapping[str, Any], temp_k: float) -> PairEnergies:
    """
    Parse `stacks_matrix` into `"XY/ZW"` keys (rows are outer pairs, cols are
    inner pairs written 3'→5').
    """
    return _parse_grid(data.get("stacks_matrix"), temp_k, lambda row, col: f"{row}/{col}")


def parse_dangles(data: Mapping[str, Any], temp_k: float) -> PairEnergies:
    """
    Parse `dangle5_matrix` (keys `"N./XY"`) and `dangle3_matrix` (keys
    `"XY/.N"`) into one table. Rows are closing pairs, cols nucleotides.
    """
    dangles: PairEnergies = {}
    dangles.update(_parse_grid(data.get("dangle5_matrix"), temp_k, lambda pair, nuc: f"{nuc}./{pair}"))
    dangles.update(_parse_grid(data.get("dangle3_matrix"), temp_k, lambda pair, nuc: f"{pair}/.{nuc}"))

    return dangles


def parse_mismatch(data: Mapping[str, Any], section: str, temp_k: float) -> PairEnergies:
    """
    Parse a mismatch table into flat `"LX/YR"` keys.

    Two layouts are accepted:

    1) Sparse dimer/dimer grid: `rows`, `cols` and 2D value lists; keys are
       `"row/col"` verbatim.
    2) Closing-pair × nucleotide grid (Turner-2004 style): `pairs`, `nucs`
       and, per pair, 2D lists of values indexed by (left nuc, right nuc).
       Placeholder nucleotides such as `"E"` are skipped.

    Returns
    -------
    PairEnergies
        `"LX/YR" → (ΔH, ΔS)`; empty when the section is absent.
    """
    mm_data = data.get(section)
    if not isinstance(mm_data, dict):
        return {}

    if "rows" in mm_data and "cols" in mm_data:
        return _parse_grid(mm_data, temp_k, lambda row, col: f"{row}/{col}")

    if "pairs" not in mm_data or "nucs" not in mm_data:
        return {}

    nucs = [str(x) for x in mm_data["nucs"]]
    dh_all = mm_data.get("dh") or {}
    ds_all = mm_data.get("ds") or {}
    dg_all = _dg_of(mm_data) or {}

    mm_energies: PairEnergies = {}
    for pair in map(str, mm_data["pairs"]):
        if len(pair) != 2:
            continue
        for i, left in enumerate(nucs):
            for j, right in enumerate(nucs):
                if left in _PLACEHOLDER_NUCS or right in _PLACEHOLDER_NUCS:
                    continue
                delta_h_delta_s = _resolve_cell(
                    dh_all.get(pair), ds_all.get(pair), dg_all.get(pair), i, j, temp_k
                )
                if delta_h_delta_s is None:
                    continue
                mm_energies[f"{left}{pair[0]}/{pair[1]}{right}"] = delta_h_delta_s

    return mm_energies


# ---------- Special hairpins ----------

def parse_special_hairpins(data: Mapping[str, Any], temp_k: float) -> PairEnergies:
    """
    Parse sequence-specific hairpin bonuses, keyed by the loop sequence
    including its closing pair (e.g. `"GGAAAC"`).
    """
    special_data = data.get("special_hairpins")
    if not isinstance(special_data, dict):
        return {}

    special: PairEnergies = {}
    for loop_seq, entry in special_data.items():
        if not isinstance(entry, dict):
            continue
        delta_h_delta_s = _resolve_entry(entry, temp_k)
        if delta_h_delta_s is not None:
            special[str(loop_seq).upper()] = delta_h_delta_s

    return special
