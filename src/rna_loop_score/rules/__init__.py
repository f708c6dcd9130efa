from rna_loop_score.rules.constraints import (
    MIN_HAIRPIN_UNPAIRED,
    MAX_LOOP_UNPAIRED,
    can_pair,
    is_weak_pair,
    hairpin_size,
    is_min_hairpin_size,
    interior_size,
    is_max_loop_size,
)
from rna_loop_score.rules.constraint_model import (
    ConstraintModelProtocol,
    ConstraintModel,
    FoldingConstraints,
)

__all__ = [
    "MIN_HAIRPIN_UNPAIRED",
    "MAX_LOOP_UNPAIRED",
    "can_pair",
    "is_weak_pair",
    "hairpin_size",
    "is_min_hairpin_size",
    "interior_size",
    "is_max_loop_size",
    "ConstraintModelProtocol",
    "ConstraintModel",
    "FoldingConstraints",
]
