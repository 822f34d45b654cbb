import logging

import pytest

from arminer.rule_mining.apriori import Apriori, run_apriori
from arminer.rule_mining.combinations import combinations
from arminer.rule_mining.exceptions import InvalidOptionsError
from arminer.rule_mining.records import Options, SupportRecord, new_options


def brute_force_frequent(engine, min_support):
    """Every itemset over the index universe meeting min_support, without pruning."""
    items = engine.index.items
    frequent = set()
    for length in range(1, len(items) + 1):
        for itemset in combinations(items, length):
            if engine.support(itemset) >= min_support:
                frequent.add(itemset)
    return frequent


# ---------------------------------------------------------------------------
# Frequent itemsets
# ---------------------------------------------------------------------------

def test_singletons_come_first_in_sorted_order(market_transactions):
    engine = Apriori(market_transactions)
    records = list(engine.generate_support_records(0.1))

    singletons = [r.items for r in records if len(r.items) == 1]
    assert singletons == [('beer',), ('butter',), ('cheese',), ('jam',), ('nuts',)]


def test_records_ordered_by_length_then_combination_order(grocery_transactions):
    engine = Apriori(grocery_transactions)
    records = list(engine.generate_support_records(0.05))

    lengths = [len(r.items) for r in records]
    assert lengths == sorted(lengths)
    for length in set(lengths):
        level = [r.items for r in records if len(r.items) == length]
        assert level == sorted(level)


def test_itemsets_are_sorted_and_unique(grocery_transactions):
    records = list(Apriori(grocery_transactions).generate_support_records(0.05))
    for record in records:
        assert list(record.items) == sorted(set(record.items))


def test_matches_brute_force_enumeration(grocery_transactions):
    engine = Apriori(grocery_transactions)
    for min_support in (0.05, 0.1, 0.2, 0.4):
        found = {r.items for r in engine.generate_support_records(min_support)}
        assert found == brute_force_frequent(engine, min_support)


def test_every_subset_of_frequent_itemset_is_frequent(grocery_transactions):
    records = list(Apriori(grocery_transactions).generate_support_records(0.05))
    found = {r.items for r in records}
    for itemset in found:
        if len(itemset) > 1:
            for subset in combinations(itemset, len(itemset) - 1):
                assert subset in found


def test_support_threshold_is_inclusive(market_transactions):
    records = list(Apriori(market_transactions).generate_support_records(0.25))
    found = {r.items: r.support for r in records}
    # beer+jam appears in 3 of 8 transactions, cheese+nuts in exactly 3
    assert found[('beer', 'jam')] == pytest.approx(3 / 8)
    assert ('cheese', 'nuts') in found
    # beer+cheese appears in exactly 2 of 8
    assert found[('beer', 'cheese')] == pytest.approx(0.25)


def test_max_length_bounds_itemsets(market_transactions):
    engine = Apriori(market_transactions)
    assert max(len(r.items) for r in engine.generate_support_records(0.1, max_length=2)) == 2
    assert max(len(r.items) for r in engine.generate_support_records(0.1, max_length=1)) == 1
    assert max(len(r.items) for r in engine.generate_support_records(0.1, max_length=0)) == 4


def test_no_frequent_items_stops_search(market_transactions):
    assert list(Apriori(market_transactions).generate_support_records(0.9)) == []


def test_generator_is_lazy(market_transactions):
    stream = Apriori(market_transactions).generate_support_records(0.1)
    first = next(stream)
    assert first.items == ('beer',)
    assert first.support == pytest.approx(5 / 8)


# ---------------------------------------------------------------------------
# Candidate generation and pruning
# ---------------------------------------------------------------------------

def test_pairs_are_not_pruned(market_transactions):
    engine = Apriori(market_transactions)
    candidates = engine.create_next_candidates([('beer',), ('jam',), ('nuts',)], 2)
    assert candidates == [('beer', 'jam'), ('beer', 'nuts'), ('jam', 'nuts')]


def test_candidates_with_infrequent_subset_are_pruned(market_transactions):
    engine = Apriori(market_transactions)
    prev = [('a', 'b'), ('a', 'c'), ('b', 'c'), ('b', 'd')]
    # only a,b,c has all of its pairs in prev
    assert engine.create_next_candidates(prev, 3) == [('a', 'b', 'c')]


def test_pruning_is_logged_with_proposed_count(market_transactions, caplog):
    engine = Apriori(market_transactions)
    prev = [('a', 'b'), ('a', 'c'), ('b', 'c'), ('b', 'd')]
    with caplog.at_level(logging.DEBUG, logger='arminer.rule_mining.apriori'):
        engine.create_next_candidates(prev, 3)

    # four items give four triples, three of them lack a frequent pair
    assert "Length 3: proposed 4, kept 1 candidates, pruned 3" in caplog.messages


def test_candidate_generation_does_not_count_support(market_transactions):
    engine = Apriori(market_transactions)
    counted = []
    original = engine.index.support

    def spy(itemset):
        counted.append(tuple(itemset))
        return original(itemset)

    engine.index.support = spy
    frequent_pairs = [('beer', 'nuts'), ('beer', 'jam'), ('jam', 'nuts'), ('cheese', 'nuts')]
    candidates = engine.create_next_candidates(frequent_pairs, 3)

    assert candidates == [('beer', 'jam', 'nuts')]
    assert counted == []


def test_universe_smaller_than_length_gives_no_candidates(market_transactions):
    engine = Apriori(market_transactions)
    assert engine.create_next_candidates([('beer',)], 2) == []
    assert engine.create_next_candidates([], 2) == []


# ---------------------------------------------------------------------------
# Ordered statistics
# ---------------------------------------------------------------------------

def test_rule_split_count(market_transactions):
    engine = Apriori(market_transactions)
    for items, expected in [(('beer', 'nuts'), 2), (('beer', 'jam', 'nuts'), 6),
                            (('beer', 'cheese', 'jam', 'nuts'), 14)]:
        record = SupportRecord(items, engine.support(items))
        stats = list(engine.generate_ordered_statistics(record))
        assert len(stats) == expected == 2 ** len(items) - 2
        assert len({(s.base, s.add) for s in stats}) == expected


def test_single_item_has_no_rules(market_transactions):
    engine = Apriori(market_transactions)
    assert list(engine.generate_ordered_statistics(SupportRecord(('beer',), 5 / 8))) == []


def test_bases_go_from_largest_to_smallest(market_transactions):
    engine = Apriori(market_transactions)
    items = ('beer', 'jam', 'nuts')
    stats = list(engine.generate_ordered_statistics(SupportRecord(items, engine.support(items))))

    assert [s.base for s in stats] == [
        ('beer', 'jam'), ('beer', 'nuts'), ('jam', 'nuts'),
        ('beer',), ('jam',), ('nuts',)
    ]
    assert [s.add for s in stats] == [
        ('nuts',), ('jam',), ('beer',),
        ('jam', 'nuts'), ('beer', 'nuts'), ('beer', 'jam')
    ]


def test_confidence_and_lift_formulas(grocery_transactions):
    engine = Apriori(grocery_transactions)
    for record in engine.generate_support_records(0.05):
        for stat in engine.generate_ordered_statistics(record):
            assert set(stat.base).isdisjoint(stat.add)
            assert tuple(sorted(stat.base + stat.add)) == record.items
            assert stat.confidence >= 0
            assert stat.confidence == pytest.approx(
                engine.support(stat.base + stat.add) / engine.support(stat.base))
            assert stat.lift == pytest.approx(stat.confidence / engine.support(stat.add))


def test_filter_is_inclusive_on_both_thresholds(market_transactions):
    engine = Apriori(market_transactions)
    items = ('beer', 'nuts')
    stats = list(engine.generate_ordered_statistics(SupportRecord(items, 0.5)))
    # beer -> nuts: 0.5 / 0.625 = 0.8 ; nuts -> beer: 0.5 / 0.625 = 0.8
    assert len(engine.filter_ordered_statistics(stats, 0.8, 0.0)) == 2
    assert engine.filter_ordered_statistics(stats, 0.81, 0.0) == []
    assert engine.filter_ordered_statistics(stats, 0.0, 1.5) == []


# ---------------------------------------------------------------------------
# calculate
# ---------------------------------------------------------------------------

def test_known_market_basket_rule(market_transactions):
    records = Apriori(market_transactions).calculate(Options(0.1, 0.5, 0.0, 0))

    by_items = {r.items: r for r in records}
    record = by_items[('beer', 'cheese', 'jam', 'nuts')]
    assert record.support == pytest.approx(0.125)

    stat = next(s for s in record.ordered_statistics
                if s.base == ('beer', 'cheese', 'jam') and s.add == ('nuts',))
    assert stat.confidence == pytest.approx(1.0)
    assert stat.lift == pytest.approx(1.6)


def test_singletons_never_produce_relation_records(market_transactions):
    records = Apriori(market_transactions).calculate(Options(0.1))
    assert all(len(r.items) >= 2 for r in records)
    assert all(r.ordered_statistics for r in records)


def test_confidence_above_one_yields_nothing(market_transactions):
    assert Apriori(market_transactions).calculate(Options(0.1, min_confidence=1.01)) == []


def test_empty_input_yields_nothing():
    assert Apriori([]).calculate(Options(0.1)) == []
    assert Apriori([]).calculate(Options(0.1, 2.0, 5.0, 3)) == []


def test_calculate_is_idempotent(grocery_transactions):
    engine = Apriori(grocery_transactions)
    options = new_options(0.05, 0.3, 1.0, 0)
    assert engine.calculate(options) == engine.calculate(options)
    assert Apriori(grocery_transactions).calculate(options) == engine.calculate(options)


@pytest.mark.parametrize("min_support", [0, -0.1])
def test_non_positive_support_is_rejected(market_transactions, min_support):
    engine = Apriori(market_transactions)
    with pytest.raises(InvalidOptionsError):
        engine.calculate(Options(min_support))
    with pytest.raises(ValueError):
        engine.iter_relation_records(Options(min_support))


def test_negative_max_length_is_rejected(market_transactions):
    with pytest.raises(InvalidOptionsError):
        Apriori(market_transactions).calculate(Options(0.1, max_length=-1))


def test_lazy_relation_records_match_calculate(market_transactions):
    engine = Apriori(market_transactions)
    options = Options(0.1, 0.5)
    assert list(engine.iter_relation_records(options)) == engine.calculate(options)


def test_min_lift_filters_rules(grocery_transactions):
    records = Apriori(grocery_transactions).calculate(Options(0.05, min_lift=1.2))
    for record in records:
        assert all(s.lift >= 1.2 for s in record.ordered_statistics)


def test_accessors(market_transactions):
    record = Apriori(market_transactions).calculate(Options(0.1, 0.5))[0]
    assert record.get_support_record().get_items() == record.items
    assert record.get_support_record().get_support() == record.support
    stat = record.get_ordered_statistics()[0]
    assert (stat.get_base(), stat.get_add()) == (stat.base, stat.add)
    assert (stat.get_confidence(), stat.get_lift()) == (stat.confidence, stat.lift)


def test_run_apriori_wrapper(market_transactions):
    records = run_apriori(market_transactions, min_support=0.1, min_confidence=0.5)
    assert records == Apriori(market_transactions).calculate(Options(0.1, 0.5))
