from rna_loop_score.energies.energy_types import SecondaryStructureEnergies
from rna_loop_score.energies.energy_loader import SecondaryStructureEnergyLoader, default_params_path
from rna_loop_score.energies.energy_model import ScoreModelProtocol, NearestNeighborScoreModel

__all__ = [
    "SecondaryStructureEnergies",
    "SecondaryStructureEnergyLoader",
    "default_params_path",
    "ScoreModelProtocol",
    "NearestNeighborScoreModel",
]
