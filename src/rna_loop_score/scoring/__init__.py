from rna_loop_score.scoring.log_space import NEG_INF, neg_inf, impossible, logadd, log_sum_exp, boltz
from rna_loop_score.scoring.conversion import (
    celsius_to_kelvin,
    rt_kcal_mol,
    energy_to_score,
    score_to_energy,
)

__all__ = [
    "NEG_INF",
    "neg_inf",
    "impossible",
    "logadd",
    "log_sum_exp",
    "boltz",
    "celsius_to_kelvin",
    "rt_kcal_mol",
    "energy_to_score",
    "score_to_energy",
]
