"""
Unit tests for `ConstraintModel`, the pair/loop predicate provider.

Queries use DP coordinates: a pair `(i, j)` names padded nucleotides
`i + 1` and `j`, a region `[i, j)` names padded nucleotides `i + 1 .. j`.
For "GGAACCC" the padded string is "$GGAACCC$" (positions 0..8).
"""
import pytest

from rna_loop_score.rules.constraint_model import ConstraintModel, FoldingConstraints
from rna_loop_score.structures.pairing import Pair

SEQ = "GGAACCC"


@pytest.fixture
def model():
    constraint_model = ConstraintModel()
    constraint_model.set_seq(SEQ)
    return constraint_model


def test_queries_before_set_seq_raise():
    constraint_model = ConstraintModel()
    with pytest.raises(RuntimeError):
        constraint_model.allow_pair(0, 7)
    with pytest.raises(RuntimeError):
        constraint_model.allow_inner_loop(0, 3)
    with pytest.raises(RuntimeError):
        constraint_model.seqlen()


def test_seqlen_excludes_padding(model):
    assert model.seqlen() == 7


@pytest.mark.parametrize("i, j, expected", [
    (0, 7, True),    # G1-C7, 5 enclosed
    (1, 6, True),    # G2-C6, 3 enclosed: the minimum
    (1, 5, False),   # G2-C5, 2 enclosed
    (2, 7, False),   # A3-C7 cannot pair
    (-1, 7, False),  # leading sentinel
    (0, 8, False),   # trailing sentinel
])
def test_allow_pair(model, i, j, expected):
    assert model.allow_pair(i, j) is expected


def test_allow_pair_out_of_range_raises(model):
    with pytest.raises(IndexError):
        model.allow_pair(0, 9)


def test_max_span_limits_pairs_and_inner_loops():
    constraint_model = ConstraintModel(FoldingConstraints(max_span=5))
    constraint_model.set_seq(SEQ)

    # G1-C7 spans 7 nucleotides, G2-C6 spans 5.
    assert constraint_model.allow_pair(0, 7) is False
    assert constraint_model.allow_pair(1, 6) is True
    # Inner loops are bounded as well; the exterior loop is not.
    assert constraint_model.allow_inner_loop(0, 5) is True
    assert constraint_model.allow_inner_loop(0, 6) is False
    assert constraint_model.allow_outer_loop(0, 6) is True


def test_forced_unpaired_and_forbidden_pairs():
    constraints = FoldingConstraints(unpaired=frozenset({2}), forbidden_pairs=frozenset({Pair(1, 7)}))
    constraint_model = ConstraintModel(constraints)
    constraint_model.set_seq(SEQ)

    assert constraint_model.allow_pair(1, 6) is False  # position 2 must stay unpaired
    assert constraint_model.allow_pair(0, 7) is False  # forbidden pair
    assert constraint_model.allow_pair(0, 6) is True   # G1-C6


def test_forced_paired_positions_block_unpaired_regions():
    constraint_model = ConstraintModel(FoldingConstraints(paired=frozenset({4})))
    constraint_model.set_seq(SEQ)

    # [2, 5) covers positions 3..5, including 4.
    assert constraint_model.allow_inner_loop(2, 5) is False
    assert constraint_model.allow_outer_loop(2, 5) is False
    # [0, 3) covers 1..3 and [4, 8) covers 5..8.
    assert constraint_model.allow_inner_loop(0, 3) is True
    assert constraint_model.allow_outer_loop(4, 8) is True


def test_empty_and_reversed_regions(model):
    assert model.allow_inner_loop(3, 3) is True
    assert model.allow_outer_loop(4, 3) is False
    assert model.allow_inner_loop(4, 3) is False


def test_loop_region_out_of_range_raises(model):
    with pytest.raises(IndexError):
        model.allow_outer_loop(0, 9)
    with pytest.raises(IndexError):
        model.allow_inner_loop(-1, 2)


def test_set_seq_rejects_constraints_outside_sequence():
    constraint_model = ConstraintModel(FoldingConstraints(unpaired=frozenset({10})))
    with pytest.raises(ValueError):
        constraint_model.set_seq(SEQ)


@pytest.mark.parametrize("kwargs", [
    {"max_span": 1},
    {"unpaired": frozenset({3}), "paired": frozenset({3})},
])
def test_folding_constraints_validation(kwargs):
    with pytest.raises(ValueError):
        FoldingConstraints(**kwargs)
