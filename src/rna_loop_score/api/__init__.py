from rna_loop_score.api.energy_model_api import EnergyModelApi
from rna_loop_score.api.grammar_api import GrammarApi

__all__ = [
    "EnergyModelApi",
    "GrammarApi",
]
