"""
Unit tests for fundamental RNA pairing rules and loop-size limits.
"""
import pytest

from rna_loop_score.rules.constraints import (
    MAX_LOOP_UNPAIRED,
    MIN_HAIRPIN_UNPAIRED,
    can_pair,
    hairpin_size,
    interior_size,
    is_max_loop_size,
    is_min_hairpin_size,
    is_weak_pair,
)


def test_can_pair_allows_watson_crick_and_wobble():
    allowed = [("A", "U"), ("U", "A"), ("G", "C"), ("C", "G"), ("G", "U"), ("U", "G")]
    for i, j in allowed:
        assert can_pair(i, j) is True


def test_can_pair_is_case_insensitive_and_handles_t_as_u():
    assert can_pair("a", "u")
    assert can_pair("A", "T")


@pytest.mark.parametrize("base_i, base_j", [
    ("N", "A"), ("A", "G"), ("C", "U"), ("$", "G"), ("AU", "A"), (None, "A"),
])
def test_can_pair_rejects_invalid_inputs(base_i, base_j):
    # Ambiguity codes and padding sentinels never pair.
    assert can_pair(base_i, base_j) is False


@pytest.mark.parametrize("base_i, base_j, expected", [
    ("A", "U", True), ("U", "G", True), ("G", "C", False), ("C", "G", False),
])
def test_is_weak_pair(base_i, base_j, expected):
    assert is_weak_pair(base_i, base_j) is expected


def test_hairpin_size_boundary():
    # (0, 4) encloses 3 nucleotides, the minimum.
    assert hairpin_size(0, 4) == 3
    assert is_min_hairpin_size(0, 4)
    assert not is_min_hairpin_size(0, 3)
    assert MIN_HAIRPIN_UNPAIRED == 3


def test_interior_size_counts_both_strands():
    assert interior_size(1, 10, 3, 7) == 1 + 2
    assert is_max_loop_size(0, 40, 15, 24)  # 14 + 15 = 29
    assert is_max_loop_size(0, 40, 15, 23)  # 14 + 16 = 30
    assert not is_max_loop_size(0, 40, 16, 23)  # 15 + 16 = 31
    assert MAX_LOOP_UNPAIRED == 30
