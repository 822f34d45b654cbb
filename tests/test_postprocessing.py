from arminer.postprocessing.rule import (
    filter_rules,
    filter_itemsets,
    filter_rules_by_pattern,
    filter_rules_by_consequent,
    filter_rules_by_antecedent,
    sort_rules
)

RULES = [
    {'antecedents': ['beer'], 'consequents': ['nuts'], 'support': 0.5, 'confidence': 0.8, 'lift': 1.28},
    {'antecedents': ['cheese'], 'consequents': ['nuts'], 'support': 0.375, 'confidence': 1.0, 'lift': 1.6},
    {'antecedents': ['beer', 'jam'], 'consequents': ['nuts'], 'support': 0.375, 'confidence': 1.0, 'lift': 1.6},
    {'antecedents': ['nuts'], 'consequents': ['product__jam'], 'support': 0.375, 'confidence': 0.6},
]


def test_filter_rules_is_inclusive():
    assert len(filter_rules(RULES, 'confidence', 1.0)) == 2
    assert len(filter_rules(RULES, 'confidence', 0.6)) == 4


def test_filter_rules_drops_rules_missing_metric():
    assert len(filter_rules(RULES, 'lift', 0.0)) == 3


def test_filter_itemsets_reports_stats():
    itemsets = [
        {'items': ['beer'], 'support': 0.625},
        {'items': ['jam'], 'support': 0.5},
        {'items': ['butter'], 'support': 0.375},
    ]
    kept, stats = filter_itemsets(itemsets, threshold=0.5)
    assert [i['items'] for i in kept] == [['beer'], ['jam']]
    assert stats == {'num_itemsets': 2, 'average_support': 0.562}

    kept, stats = filter_itemsets(itemsets, threshold=0.9)
    assert kept == []
    assert stats['num_itemsets'] == 0


def test_filter_by_pattern_contains_and_excludes():
    kept = filter_rules_by_pattern(RULES, consequent_contains=['nuts'], antecedent_excludes=['jam'])
    assert [r['antecedents'] for r in kept] == [['beer'], ['cheese']]


def test_pattern_matching_is_substring_and_case_insensitive():
    assert len(filter_rules_by_consequent(RULES, ['JAM'])) == 1


def test_match_all_versus_any():
    assert len(filter_rules_by_pattern(RULES, antecedent_contains=['beer', 'jam'])) == 1
    assert len(filter_rules_by_antecedent(RULES, ['beer', 'jam'], match_any=True)) == 2


def test_sort_rules_puts_missing_metric_last():
    ordered = sort_rules(RULES, by='lift')
    assert [r.get('lift') for r in ordered] == [1.6, 1.6, 1.28, None]
    ascending = sort_rules(RULES, by='support', descending=False)
    assert ascending[-1]['support'] == 0.5
