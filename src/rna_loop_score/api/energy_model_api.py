"""
Scoring facade consulted by partition-function and accessibility DPs.

`EnergyModelApi` forwards every loop query to a `ScoreModelProtocol`
provider, translating between the coordinate conventions a DP uses:

- DP coordinates: a pair `(i, j)` names padded nucleotides `i + 1` and `j`;
  a region `[i, j)` names padded nucleotides `i + 1 .. j`.
- Closed-pair coordinates: the padded positions of the closing pair(s) of
  the loop. The hairpin and multiloop-closing wrappers are the exception:
  `(a, b)` maps to the DP region `[a + 1, b - 1)`, which scores the padded
  closing pair `(a + 1, b)`, not `(a, b)`.

Each query comes as a log-space score (`log_boltz_*`) and as a Boltzmann
factor (`boltz_*`), the latter being `exp` of the former with forbidden
configurations mapped to exactly 0.0.
"""
from __future__ import annotations

from rna_loop_score.energies.energy_model import ScoreModelProtocol
from rna_loop_score.scoring.log_space import boltz


class EnergyModelApi:
    """
    Coordinate-translating view of a score provider.

    The facade borrows `sm`; it never owns, copies or closes it, and must
    not outlive it. `initialize()` and `set_seq()` are the only calls that
    change provider state. All other methods are read-only.

    Parameters
    ----------
    sm : ScoreModelProtocol
        The loop-score provider.
    """
    __slots__ = ("_sm",)

    def __init__(self, sm: ScoreModelProtocol) -> None:
        self._sm = sm

    # ---------- Lifecycle ----------

    def initialize(self) -> None:
        self._sm.initialize()

    def set_seq(self, seq: str) -> None:
        self._sm.set_seq(seq)

    def seqlen(self) -> int:
        return self._sm.seqlen()

    def max_loop(self) -> int:
        """Largest number of unpaired nucleotides in a bulge/interior loop."""
        return self._sm.MAXLOOP

    def min_hairpin(self) -> int:
        """Smallest number of unpaired nucleotides in a hairpin loop."""
        return self._sm.MINHPIN

    # ---------- Units ----------

    def rt_kcal_mol(self) -> float:
        return self._sm.rt_kcal_mol()

    def energy_to_score(self, energy: float) -> float:
        return self._sm.energy_to_score(energy)

    def score_to_energy(self, score: float) -> float:
        return self._sm.score_to_energy(score)

    # ---------- DP coordinates ----------

    def log_boltz_stack(self, i: int, j: int) -> float:
        """Pair `(i+1, j)` stacked on pair `(i+2, j-1)`."""
        return self._sm.score_stack(i, j)

    def boltz_stack(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_stack(i, j))

    def log_boltz_stem_close(self, i: int, j: int) -> float:
        """Helix terminated at DP pair `(i, j)`."""
        return self._sm.score_stem_close(i, j)

    def boltz_stem_close(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_stem_close(i, j))

    def log_boltz_hairpin(self, i: int, j: int) -> float:
        """Unpaired region `[i, j)` closed by padded pair `(i, j+1)`."""
        return self._sm.score_hairpin(i, j)

    def boltz_hairpin(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_hairpin(i, j))

    def log_boltz_interior(self, i: int, j: int, ip: int, jp: int) -> float:
        """Outer padded pair `(i, j+1)`, inner DP pair `(ip, jp)`."""
        return self._sm.score_interior(i, j, ip, jp)

    def boltz_interior(self, i: int, j: int, ip: int, jp: int) -> float:
        return boltz(self.log_boltz_interior(i, j, ip, jp))

    def log_boltz_loop(self, i: int, j: int, p: int, q: int) -> float:
        """
        Stack when the inner pair directly follows the outer one
        (`p == i + 1` and `q == j - 1`), interior loop otherwise.
        """
        if p == i + 1 and q == j - 1:
            return self.log_boltz_stack(i, j)
        return self.log_boltz_interior(i, j, p, q)

    def boltz_loop(self, i: int, j: int, p: int, q: int) -> float:
        return boltz(self.log_boltz_loop(i, j, p, q))

    def log_boltz_multi_close(self, i: int, j: int) -> float:
        """Multiloop closed by padded pair `(i, j+1)`; inner bounds as for a hairpin."""
        return self._sm.score_multi_close(i, j)

    def boltz_multi_close(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_multi_close(i, j))

    def log_boltz_multi_open(self, i: int, j: int) -> float:
        """Branch pair `(i+1, j)` inside a multiloop."""
        return self._sm.score_multi_open(i, j)

    def boltz_multi_open(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_multi_open(i, j))

    def log_boltz_multi_extend(self, i: int, j: int) -> float:
        return self._sm.score_multi_extend(i, j)

    def boltz_multi_extend(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_multi_extend(i, j))

    def log_boltz_outer_extend(self, i: int, j: int) -> float:
        return self._sm.score_outer_extend(i, j)

    def boltz_outer_extend(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_outer_extend(i, j))

    def log_boltz_outer_branch(self, i: int, j: int) -> float:
        """Exterior branch pair `(i+1, j)`."""
        return self._sm.score_outer_branch(i, j)

    def boltz_outer_branch(self, i: int, j: int) -> float:
        return boltz(self.log_boltz_outer_branch(i, j))

    # ---------- Closed-pair coordinates ----------
    # Pure index offsets onto the DP methods above; no lookups of their own.

    def log_boltz_hairpin_closed(self, a: int, b: int) -> float:
        """Hairpin closed by padded pair `(a + 1, b)`."""
        return self.log_boltz_hairpin(a + 1, b - 1)

    def boltz_hairpin_closed(self, a: int, b: int) -> float:
        return boltz(self.log_boltz_hairpin_closed(a, b))

    def log_boltz_stack_closed(self, a: int, b: int) -> float:
        return self.log_boltz_stack(a - 1, b)

    def boltz_stack_closed(self, a: int, b: int) -> float:
        return boltz(self.log_boltz_stack_closed(a, b))

    def log_boltz_interior_closed(self, a: int, b: int, c: int, d: int) -> float:
        """Outer pair `(a, b)`, inner pair `(c, d)`, `a < c < d < b`."""
        return self.log_boltz_interior(a, b - 1, c - 1, d)

    def boltz_interior_closed(self, a: int, b: int, c: int, d: int) -> float:
        return boltz(self.log_boltz_interior_closed(a, b, c, d))

    def log_boltz_loop_closed(self, a: int, b: int, c: int, d: int) -> float:
        if c == a + 1 and d == b - 1:
            return self.log_boltz_stack_closed(a, b)
        return self.log_boltz_interior_closed(a, b, c, d)

    def boltz_loop_closed(self, a: int, b: int, c: int, d: int) -> float:
        return boltz(self.log_boltz_loop_closed(a, b, c, d))

    def log_boltz_multi_close_closed(self, a: int, b: int) -> float:
        """Multiloop closed by padded pair `(a + 1, b)`."""
        return self.log_boltz_multi_close(a + 1, b - 1)

    def boltz_multi_close_closed(self, a: int, b: int) -> float:
        return boltz(self.log_boltz_multi_close_closed(a, b))

    def log_boltz_multi_open_closed(self, a: int, b: int) -> float:
        return self.log_boltz_multi_open(a - 1, b)

    def boltz_multi_open_closed(self, a: int, b: int) -> float:
        return boltz(self.log_boltz_multi_open_closed(a, b))

    def log_boltz_outer_branch_closed(self, a: int, b: int) -> float:
        return self.log_boltz_outer_branch(a - 1, b)

    def boltz_outer_branch_closed(self, a: int, b: int) -> float:
        return boltz(self.log_boltz_outer_branch_closed(a, b))
