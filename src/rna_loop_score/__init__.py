from rna_loop_score.api import EnergyModelApi, GrammarApi
from rna_loop_score.energies import (
    NearestNeighborScoreModel,
    ScoreModelProtocol,
    SecondaryStructureEnergies,
    SecondaryStructureEnergyLoader,
)
from rna_loop_score.rules import ConstraintModel, ConstraintModelProtocol, FoldingConstraints
from rna_loop_score.scoring import NEG_INF, boltz, impossible, log_sum_exp, logadd, neg_inf

__all__ = [
    "EnergyModelApi",
    "GrammarApi",
    "NearestNeighborScoreModel",
    "ScoreModelProtocol",
    "SecondaryStructureEnergies",
    "SecondaryStructureEnergyLoader",
    "ConstraintModel",
    "ConstraintModelProtocol",
    "FoldingConstraints",
    "NEG_INF",
    "boltz",
    "impossible",
    "log_sum_exp",
    "logadd",
    "neg_inf",
]
