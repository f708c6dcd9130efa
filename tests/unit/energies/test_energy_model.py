"""
Tests for `NearestNeighborScoreModel`, the table-backed loop-score provider.

All `score_*` queries use DP coordinates. The main test sequence is
"GGAACCC", padded to "$GGAACCC$":

    padded pos:  0 1 2 3 4 5 6 7 8
    base:        $ G G A A C C C $
"""
import math
from dataclasses import replace

import pytest

from rna_loop_score.energies.energy_model import NearestNeighborScoreModel
from rna_loop_score.scoring.log_space import impossible
from rna_loop_score.utils.energy_utils import calculate_delta_g

SEQ = "GGAACCC"
T37 = 310.15


@pytest.fixture(scope="module")
def model():
    score_model = NearestNeighborScoreModel()
    score_model.initialize()
    score_model.set_seq(SEQ)
    return score_model


def expected_score(model, energy):
    return -energy / model.rt_kcal_mol()


# ------------------------------
# Lifecycle and units
# ------------------------------

def test_set_seq_before_initialize_raises():
    with pytest.raises(RuntimeError):
        NearestNeighborScoreModel().set_seq(SEQ)


def test_scoring_before_set_seq_raises():
    score_model = NearestNeighborScoreModel()
    score_model.initialize()
    with pytest.raises(RuntimeError):
        score_model.score_hairpin(2, 5)
    with pytest.raises(RuntimeError):
        score_model.seqlen()


def test_initialize_rejects_empty_core_tables(model):
    with pytest.raises(ValueError, match="stacking"):
        NearestNeighborScoreModel(params=replace(model.params, NN_STACK={})).initialize()
    with pytest.raises(ValueError, match="hairpin"):
        NearestNeighborScoreModel(params=replace(model.params, HAIRPIN={})).initialize()


def test_initialize_rejects_non_positive_temperature():
    with pytest.raises(ValueError):
        NearestNeighborScoreModel(temp_k=0.0).initialize()


def test_set_seq_rejects_invalid_characters(model):
    score_model = NearestNeighborScoreModel(params=model.params)
    score_model.initialize()
    with pytest.raises(ValueError):
        score_model.set_seq("GGXCC")


def test_set_seq_rebinds(model):
    score_model = NearestNeighborScoreModel(params=model.params)
    score_model.initialize()
    score_model.set_seq("GGGAAACCC")
    assert score_model.seqlen() == 9
    score_model.set_seq(SEQ)
    assert score_model.seqlen() == 7


def test_constants_and_units(model):
    assert model.MAXLOOP == 30
    assert model.MINHPIN == 3
    assert math.isclose(model.rt_kcal_mol(), 0.61633, abs_tol=1e-4)
    assert math.isclose(model.score_to_energy(model.energy_to_score(-2.5)), -2.5)


# ------------------------------
# Helix terms
# ------------------------------

def test_score_stack(model):
    # Pairs G1-C7 on G2-C6.
    energy = calculate_delta_g(model.params.NN_STACK["GC/CG"], T37)
    assert math.isclose(model.score_stack(0, 7), expected_score(model, energy))
    assert model.score_stack(0, 7) > 0.0


def test_score_stack_non_canonical_is_forbidden(model):
    # G2-C6 on A3-C5.
    assert impossible(model.score_stack(1, 6))


def test_score_stack_with_wobble_closing_pair(model):
    wobble_model = NearestNeighborScoreModel(params=model.params)
    wobble_model.initialize()
    wobble_model.set_seq("GGAAAACU")
    # G1-U8 stacked on G2-C7, keyed "GU/CG".
    energy = calculate_delta_g(model.params.NN_STACK["GU/CG"], T37)
    assert math.isclose(wobble_model.score_stack(0, 8), expected_score(wobble_model, energy))
    assert not impossible(wobble_model.score_stack(0, 8))


def test_score_stem_close(model):
    assert model.score_stem_close(0, 7) == 0.0
    assert impossible(model.score_stem_close(2, 7))

    au_model = NearestNeighborScoreModel(params=model.params)
    au_model.initialize()
    au_model.set_seq("AGGAAACCU")
    assert math.isclose(au_model.score_stem_close(0, 9), expected_score(au_model, 0.45))


def test_temperature_changes_stack_score(model):
    warm = NearestNeighborScoreModel(params=model.params, temp_k=330.15)
    warm.initialize()
    warm.set_seq(SEQ)
    assert warm.score_stack(0, 7) < model.score_stack(0, 7)


# ------------------------------
# Hairpins and interior loops
# ------------------------------

def test_score_hairpin_minimal_loop(model):
    # Region [2, 5) = A3 A4 C5, closed by G2-C6. Triloops take no mismatch.
    assert math.isclose(model.score_hairpin(2, 5), expected_score(model, 5.7), abs_tol=5e-2)


def test_score_hairpin_boundaries(model):
    assert impossible(model.score_hairpin(2, 4))  # two unpaired
    assert impossible(model.score_hairpin(0, 7))  # closed by the sentinels
    with pytest.raises(IndexError):
        model.score_hairpin(1, 8)


def test_score_interior_single_bulge(model):
    # Outer G1-C7, inner G2-C5: C6 is bulged out and the pairs still stack.
    stack = calculate_delta_g(model.params.NN_STACK["GC/CG"], T37)
    assert math.isclose(model.score_interior(1, 6, 1, 5), expected_score(model, 3.8 + stack), abs_tol=5e-2)


def test_score_interior_without_unpaired_is_stack(model):
    assert model.score_interior(1, 6, 1, 6) == model.score_stack(0, 7)


@pytest.mark.parametrize("tail, allowed", [(15, True), (16, False)])
def test_score_interior_loop_size_limit(model, tail, allowed):
    # Outer G1-C(n), inner G17-C22; 15 + `tail` unpaired nucleotides.
    seq = "G" + "A" * 15 + "GAAAAC" + "A" * tail + "C"
    long_model = NearestNeighborScoreModel(params=model.params)
    long_model.initialize()
    long_model.set_seq(seq)
    n = len(seq)
    assert impossible(long_model.score_interior(1, n - 1, 16, 22)) is not allowed


@pytest.mark.parametrize("args", [(2, 6, 1, 5), (1, 5, 1, 6), (1, 6, 5, 5), (1, 6, 4, 3)])
def test_score_interior_bad_geometry_is_forbidden(model, args):
    assert impossible(model.score_interior(*args))


@pytest.mark.parametrize("left_unpaired, allowed", [(15, True), (16, False)])
def test_score_interior_max_loop_boundary(model, left_unpaired, allowed):
    """
    Outer pair G1-C(L+22), inner pair G(L+2)-C(L+6), with L unpaired bases
    on the 5' side and 15 on the 3' side.
    """
    seq = "G" + "A" * left_unpaired + "GAAAC" + "A" * 15 + "C"
    score_model = NearestNeighborScoreModel(params=model.params)
    score_model.initialize()
    score_model.set_seq(seq)

    i, j = 1, left_unpaired + 21
    ip, jp = left_unpaired + 1, left_unpaired + 6
    assert (ip - i) + (j - jp) == left_unpaired + 15
    assert impossible(score_model.score_interior(i, j, ip, jp)) is not allowed


# ------------------------------
# Multiloop and exterior loop
# ------------------------------

def test_score_multi_close(model):
    # Closing G1-C7: a + b, no AU penalty, no multiloop mismatch table.
    assert math.isclose(model.score_multi_close(1, 6), expected_score(model, 3.8))
    assert impossible(model.score_multi_close(3, 2))
    assert impossible(model.score_multi_close(3, 4))


def test_score_multi_open(model):
    # Branch G1-C7 between the sentinels: only the branch term.
    assert math.isclose(model.score_multi_open(0, 7), expected_score(model, 0.4))
    # Branch G2-C6 flanked by G1 and C7: the 3' dangle "GC/.C" = -0.8 wins.
    assert math.isclose(model.score_multi_open(1, 6), expected_score(model, 0.4 - 0.8), abs_tol=5e-2)


def test_score_outer_branch_uses_terminal_mismatch(model):
    # Branch G2-C6 flanked by G1 and C7: terminal mismatch "GG/CC" = -2.9.
    assert math.isclose(model.score_outer_branch(1, 6), expected_score(model, -2.9), abs_tol=5e-2)
    assert impossible(model.score_outer_branch(2, 6))


def test_extend_terms(model):
    assert model.score_multi_extend(2, 5) == 0.0
    assert model.score_outer_extend(0, 8) == 0.0
    assert impossible(model.score_multi_extend(5, 2))
    assert impossible(model.score_outer_extend(3, 2))
    with pytest.raises(IndexError):
        model.score_outer_extend(0, 9)
