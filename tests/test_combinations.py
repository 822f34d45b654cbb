import itertools

import pytest

from arminer.rule_mining.combinations import Combinations, combinations, count_combinations
from arminer.rule_mining.exceptions import InvariantViolation


def test_index_tuples_in_lexicographic_order():
    assert list(Combinations(4, 2)) == [
        (0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)
    ]


def test_choose_zero_yields_single_empty_tuple():
    assert list(Combinations(3, 0)) == [()]
    assert list(Combinations(0, 0)) == [()]


def test_choose_all_yields_identity():
    assert list(Combinations(3, 3)) == [(0, 1, 2)]


@pytest.mark.parametrize("n,r", [(5, 1), (5, 3), (6, 4), (7, 7), (8, 2)])
def test_matches_itertools(n, r):
    assert list(Combinations(n, r)) == list(itertools.combinations(range(n), r))
    assert count_combinations(n, r) == len(list(Combinations(n, r)))


def test_projects_values_preserving_order():
    assert list(combinations(['beer', 'cheese', 'jam'], 2)) == [
        ('beer', 'cheese'), ('beer', 'jam'), ('cheese', 'jam')
    ]


def test_single_pass_and_exhausted_flag():
    it = Combinations(3, 2)
    assert not it.exhausted
    assert len(list(it)) == 3
    assert it.exhausted
    assert list(it) == []


def test_choosing_more_than_available_is_invariant_violation():
    with pytest.raises(InvariantViolation):
        Combinations(2, 3)
    # raised eagerly, before iteration starts
    with pytest.raises(InvariantViolation):
        combinations(['a'], 2)


def test_negative_size_is_invariant_violation():
    with pytest.raises(InvariantViolation):
        Combinations(3, -1)


def test_count_combinations_out_of_range():
    assert count_combinations(3, 4) == 0
    assert count_combinations(10, 5) == 252
