def filter_rules(rules, criterion: str, threshold: float):
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: List of rule dictionaries
        criterion: The rule metric to filter on (e.g., 'support', 'confidence', 'lift')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        List of rules meeting the criterion
    """
    return [rule for rule in rules if rule.get(criterion, float("-inf")) >= threshold]


def sort_rules(rules, by: str = 'lift', descending: bool = True):
    """Sort rules by a metric; rules missing the metric go last."""
    present = [r for r in rules if r.get(by) is not None]
    missing = [r for r in rules if r.get(by) is None]
    return sorted(present, key=lambda r: r[by], reverse=descending) + missing


def _normalize_itemset(val):
    """Convert an itemset to a set of lowercase strings for matching."""
    if val is None:
        return set()
    if isinstance(val, str):
        return {val.lower()}
    if isinstance(val, (list, tuple, set, frozenset)):
        return {str(item).lower() for item in val}
    return {str(val).lower()}


def _matches(itemset, patterns, match_any):
    if not patterns:
        return True
    normalized = _normalize_itemset(itemset)
    check = any if match_any else all
    return check(
        any(p.lower() in item for item in normalized)
        for p in patterns
    )


def _excludes(itemset, patterns):
    if not patterns:
        return True
    normalized = _normalize_itemset(itemset)
    return not any(
        any(p.lower() in item for item in normalized)
        for p in patterns
    )


def filter_rules_by_pattern(
    rules,
    antecedent_contains: list = None,
    consequent_contains: list = None,
    antecedent_excludes: list = None,
    consequent_excludes: list = None,
    match_any: bool = False
):
    """
    Filter rules by antecedent/consequent patterns.

    Patterns are case-insensitive substrings matched against each item,
    so 'beer' matches both 'beer' and 'product__beer'.

    Args:
        rules: List of rule dictionaries
        antecedent_contains: Patterns that must appear in antecedents
        consequent_contains: Patterns that must appear in consequents
        antecedent_excludes: Patterns that must NOT appear in antecedents
        consequent_excludes: Patterns that must NOT appear in consequents
        match_any: If True, match if ANY pattern matches. If False, ALL must match.

    Returns:
        List of filtered rules
    """
    filtered = []
    for rule in rules:
        ant = rule.get('antecedents')
        cons = rule.get('consequents')

        if (_matches(ant, antecedent_contains, match_any)
                and _matches(cons, consequent_contains, match_any)
                and _excludes(ant, antecedent_excludes)
                and _excludes(cons, consequent_excludes)):
            filtered.append(rule)

    return filtered


def filter_rules_by_consequent(rules, targets: list, match_any: bool = True):
    """Keep only rules whose consequents match the target patterns."""
    return filter_rules_by_pattern(rules, consequent_contains=targets, match_any=match_any)


def filter_rules_by_antecedent(rules, patterns: list, match_any: bool = True):
    """Keep only rules whose antecedents match the patterns."""
    return filter_rules_by_pattern(rules, antecedent_contains=patterns, match_any=match_any)


def filter_itemsets(itemsets, criterion: str = 'support', threshold: float = 0.0):
    """
    Filters frequent itemsets based on a criterion >= threshold.

    Args:
        itemsets: List of itemset dictionaries (each with 'items' and 'support' keys)
        criterion: The metric to filter on (default: 'support')
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        Tuple of (filtered_itemsets, stats)
    """
    filtered_itemset_list = [itemset for itemset in itemsets if itemset.get(criterion, float("-inf")) >= threshold]

    count = len(filtered_itemset_list)
    if count == 0:
        return filtered_itemset_list, {"num_itemsets": 0, "average_support": 0.0}

    avg_support = sum(item.get("support", 0) for item in filtered_itemset_list) / count

    stats = {
        "num_itemsets": count,
        "average_support": round(avg_support, 3),
    }

    return filtered_itemset_list, stats
