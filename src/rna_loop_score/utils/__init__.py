from rna_loop_score.utils.energy_utils import (
    R_KCAL_MOL_K,
    calculate_delta_g,
    resolve_dh_ds,
    lookup_loop_baseline_js,
)
from rna_loop_score.utils.nucleotide_utils import (
    normalize_base,
    normalize_sequence,
    stack_key,
    pair_key,
    pair_str,
)

__all__ = [
    "R_KCAL_MOL_K",
    "calculate_delta_g",
    "resolve_dh_ds",
    "lookup_loop_baseline_js",
    "normalize_base",
    "normalize_sequence",
    "stack_key",
    "pair_key",
    "pair_str",
]
