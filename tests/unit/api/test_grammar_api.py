"""
Tests for `GrammarApi`, the constraint facade.
"""
import math
from types import SimpleNamespace

import pytest

from rna_loop_score.api.grammar_api import GrammarApi
from rna_loop_score.rules.constraint_model import ConstraintModel, FoldingConstraints


def test_predicates_are_forwarded_as_plain_booleans():
    provider = SimpleNamespace(
        allow_pair=lambda i, j: 1 if (i, j) == (0, 7) else 0,
        allow_inner_loop=lambda i, j: j - i <= 3,
        allow_outer_loop=lambda i, j: True,
    )
    grammar = GrammarApi(provider)

    assert grammar.allow_pair(0, 7) is True
    assert grammar.allow_pair(1, 7) is False
    assert grammar.allow_inner_loop(2, 5) is True
    assert grammar.allow_inner_loop(2, 6) is False
    assert grammar.allow_outer_loop(0, 8) is True


def test_with_constraint_model():
    constraint_model = ConstraintModel(FoldingConstraints(paired=frozenset({4})))
    constraint_model.set_seq("GGAACCC")
    grammar = GrammarApi(constraint_model)

    assert grammar.allow_pair(1, 6) is True
    assert grammar.allow_inner_loop(2, 5) is False
    assert grammar.allow_outer_loop(0, 3) is True


def test_static_log_space_reexports():
    assert GrammarApi.impossible(GrammarApi.neg_inf())
    assert not GrammarApi.impossible(0.0)
    assert GrammarApi.logadd(1.5, GrammarApi.neg_inf()) == 1.5

    acc = GrammarApi.neg_inf()
    for value in (0.0, 0.0):
        acc = GrammarApi.logadd(acc, value)
    assert math.isclose(acc, math.log(2.0))


def test_facade_does_not_copy_provider():
    provider = ConstraintModel()
    grammar = GrammarApi(provider)
    with pytest.raises(RuntimeError):
        # The provider has no sequence yet; the facade surfaces its error.
        grammar.allow_pair(0, 5)
    provider.set_seq("GGAACCC")
    assert grammar.allow_pair(0, 7) is True
