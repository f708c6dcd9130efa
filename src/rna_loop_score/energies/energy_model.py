from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Optional, Protocol

from rna_loop_score.energies.energy_types import SecondaryStructureEnergies
from rna_loop_score.energies.energy_loader import SecondaryStructureEnergyLoader, default_params_path
from rna_loop_score.energies.energy_ops import (
    hairpin_energy,
    stack_energy,
    internal_loop_energy,
    multiloop_closing_energy,
    multiloop_branch_energy,
    multiloop_unpaired_energy,
    branch_end_bonus,
    exterior_end_bonus,
    multiloop_close_bonus,
    terminal_au_penalty,
)
from rna_loop_score.rules.constraints import (
    MAX_LOOP_UNPAIRED,
    MIN_HAIRPIN_UNPAIRED,
    can_pair,
    interior_size,
    is_max_loop_size,
)
from rna_loop_score.scoring import conversion
from rna_loop_score.scoring.log_space import NEG_INF
from rna_loop_score.structures.padded_sequence import PaddedSequence

logger = logging.getLogger(__name__)


class ScoreModelProtocol(Protocol):
    """
    Defines the interface of a loop-score provider.

    Every `score_*` method takes DP coordinates and returns a log-space score
    (`-ΔG / RT`), or `NEG_INF` for a forbidden configuration:

    - a DP pair `(i, j)` names padded nucleotides `i + 1` and `j`;
    - a DP region `[i, j)` names padded nucleotides `i + 1 .. j`.
    """
    MAXLOOP: int
    MINHPIN: int

    def initialize(self) -> None: ...

    def set_seq(self, seq: str) -> None: ...

    def seqlen(self) -> int: ...

    def rt_kcal_mol(self) -> float: ...

    def energy_to_score(self, energy: float) -> float: ...

    def score_to_energy(self, score: float) -> float: ...

    def score_stack(self, i: int, j: int) -> float: ...

    def score_stem_close(self, i: int, j: int) -> float: ...

    def score_hairpin(self, i: int, j: int) -> float: ...

    def score_interior(self, i: int, j: int, ip: int, jp: int) -> float: ...

    def score_multi_close(self, i: int, j: int) -> float: ...

    def score_multi_open(self, i: int, j: int) -> float: ...

    def score_multi_extend(self, i: int, j: int) -> float: ...

    def score_outer_extend(self, i: int, j: int) -> float: ...

    def score_outer_branch(self, i: int, j: int) -> float: ...


@dataclass(slots=True)
class NearestNeighborScoreModel:
    """
    Loop-score provider backed by nearest-neighbour (Turner-style) tables.

    The provider turns the free energy of each loop fragment into a
    log-space score `-ΔG / RT`. Fragments that cannot exist (non-canonical
    closing pairs, hairpins that are too short, interior loops that are too
    long, missing table entries) score `NEG_INF`.

    Attributes
    ----------
    yaml_path : str | Path, optional
        Parameter file. Defaults to the packaged Turner 1999 subset.
    temp_k : float
        Temperature in Kelvin for ΔG = ΔH − TΔS and for RT.
    params : SecondaryStructureEnergies, optional
        Pre-built parameters. When given, `initialize()` skips the file.
    """
    MAXLOOP: ClassVar[int] = MAX_LOOP_UNPAIRED
    MINHPIN: ClassVar[int] = MIN_HAIRPIN_UNPAIRED

    yaml_path: Optional[str | Path] = None
    temp_k: float = 310.15  # 37 °C
    params: Optional[SecondaryStructureEnergies] = None
    _seq: Optional[PaddedSequence] = field(default=None, init=False, repr=False)
    _rt: Optional[float] = field(default=None, init=False, repr=False)

    # ---------- Lifecycle ----------

    def initialize(self) -> None:
        """
        Load and validate the parameter tables.

        Raises
        ------
        ValueError
            If the temperature is not positive, or the stacking or hairpin
            table is empty.
        """
        rt = conversion.rt_kcal_mol(self.temp_k)
        if self.params is None:
            yaml_path = self.yaml_path if self.yaml_path is not None else default_params_path()
            self.params = SecondaryStructureEnergyLoader().load(kind="RNA", yaml_path=yaml_path)

        if not self.params.NN_STACK:
            raise ValueError("Parameter set has no stacking energies.")
        if not self.params.HAIRPIN:
            raise ValueError("Parameter set has no hairpin loop energies.")

        self._rt = rt
        logger.info(f"Nearest-neighbour score model ready at T={self.temp_k:.2f} K (RT={rt:.4f} kcal/mol)")

    def set_seq(self, seq: str) -> None:
        """
        Bind a sequence; any previously bound sequence is replaced.

        Raises
        ------
        RuntimeError
            If `initialize()` has not been called.
        ValueError
            If the sequence contains invalid characters.
        """
        if self.params is None or self._rt is None:
            raise RuntimeError("initialize() must be called before set_seq().")

        self._seq = PaddedSequence.from_raw(seq)
        logger.debug(f"Score model bound to sequence of length {self._seq.length}")

    def seqlen(self) -> int:
        return self._require_seq().length

    # ---------- Units ----------

    def rt_kcal_mol(self) -> float:
        """RT at the model temperature, in kcal/mol."""
        return self._rt if self._rt is not None else conversion.rt_kcal_mol(self.temp_k)

    def energy_to_score(self, energy: float) -> float:
        return conversion.energy_to_score(energy, self.rt_kcal_mol())

    def score_to_energy(self, score: float) -> float:
        return conversion.score_to_energy(score, self.rt_kcal_mol())

    # ---------- Helix terms ----------

    def score_stack(self, i: int, j: int) -> float:
        """Pair `(i+1, j)` stacked on `(i+2, j-1)` (padded positions)."""
        seq = self._require_seq().check(i, j)
        if i + 2 >= j - 1:
            return NEG_INF
        if not (can_pair(seq[i + 1], seq[j]) and can_pair(seq[i + 2], seq[j - 1])):
            return NEG_INF

        return self.energy_to_score(stack_energy(i + 1, j, i + 2, j - 1, seq, self.params, self.temp_k))

    def score_stem_close(self, i: int, j: int) -> float:
        """Terminal AU/GU penalty of a helix ending in pair `(i+1, j)`."""
        seq = self._require_seq().check(i, j)
        if i + 1 >= j or not can_pair(seq[i + 1], seq[j]):
            return NEG_INF

        return self.energy_to_score(terminal_au_penalty(seq[i + 1], seq[j]))

    # ---------- Closed loops ----------

    def score_hairpin(self, i: int, j: int) -> float:
        """
        Hairpin with unpaired region `[i, j)`, closed by padded pair `(i, j+1)`.

        Forbidden if fewer than `MINHPIN` nucleotides are enclosed.
        """
        seq = self._require_seq().check(i, j + 1)
        if j - i < self.MINHPIN:
            return NEG_INF
        if not can_pair(seq[i], seq[j + 1]):
            return NEG_INF

        return self.energy_to_score(hairpin_energy(i, j + 1, seq, self.params, self.temp_k))

    def score_interior(self, i: int, j: int, ip: int, jp: int) -> float:
        """
        Bulge or interior loop between outer padded pair `(i, j+1)` and inner
        padded pair `(ip+1, jp)`.

        The loop holds `(ip - i) + (j - jp)` unpaired nucleotides; more than
        `MAXLOOP` is forbidden. With none, the two pairs simply stack.
        """
        seq = self._require_seq().check(i, j + 1)
        if ip < i or jp > j or ip + 1 >= jp:
            return NEG_INF
        if not is_max_loop_size(i, j + 1, ip + 1, jp, self.MAXLOOP) or not can_pair(seq[i], seq[j + 1]):
            return NEG_INF
        if interior_size(i, j + 1, ip + 1, jp) == 0:
            return self.score_stack(i - 1, j + 1)
        if not can_pair(seq[ip + 1], seq[jp]):
            return NEG_INF

        return self.energy_to_score(internal_loop_energy(i, j + 1, ip + 1, jp, seq, self.params, self.temp_k))

    # ---------- Multiloop ----------

    def score_multi_close(self, i: int, j: int) -> float:
        """
        Closing of a multiloop by padded pair `(i, j+1)`: initiation, the
        closing branch, its AU/GU penalty and the inner mismatch bonus.
        """
        seq = self._require_seq().check(i, j + 1)
        if i > j or not can_pair(seq[i], seq[j + 1]):
            return NEG_INF

        energy = (
            multiloop_closing_energy(self.params)
            + terminal_au_penalty(seq[i], seq[j + 1])
            + multiloop_close_bonus(seq, i, j + 1, self.params, self.temp_k)
        )
        return self.energy_to_score(energy)

    def score_multi_open(self, i: int, j: int) -> float:
        """
        Branch helix with outer pair `(i+1, j)` inside a multiloop: branch
        term, AU/GU penalty and the best dangle/mismatch from `seq[i]` and
        `seq[j+1]`.
        """
        seq = self._require_seq().check(i, j)
        if i + 1 >= j or not can_pair(seq[i + 1], seq[j]):
            return NEG_INF

        energy = (
            multiloop_branch_energy(self.params)
            + terminal_au_penalty(seq[i + 1], seq[j])
            + branch_end_bonus(seq, i + 1, j, self.params.MULTI_MISMATCH, self.params, self.temp_k)
        )
        return self.energy_to_score(energy)

    def score_multi_extend(self, i: int, j: int) -> float:
        """`j - i` unpaired nucleotides inside a multiloop."""
        self._require_seq().check(i, j)
        if j < i:
            return NEG_INF

        return self.energy_to_score(multiloop_unpaired_energy(j - i, self.params))

    # ---------- Exterior loop ----------

    def score_outer_extend(self, i: int, j: int) -> float:
        """Unpaired exterior nucleotides carry no energy."""
        self._require_seq().check(i, j)
        if j < i:
            return NEG_INF

        return 0.0

    def score_outer_branch(self, i: int, j: int) -> float:
        """Exterior helix with outer pair `(i+1, j)`: AU/GU penalty plus end bonus."""
        seq = self._require_seq().check(i, j)
        if i + 1 >= j or not can_pair(seq[i + 1], seq[j]):
            return NEG_INF

        energy = terminal_au_penalty(seq[i + 1], seq[j]) + exterior_end_bonus(seq, i + 1, j, self.params, self.temp_k)
        return self.energy_to_score(energy)

    def _require_seq(self) -> PaddedSequence:
        if self._seq is None:
            raise RuntimeError("set_seq() must be called before scoring.")
        return self._seq
