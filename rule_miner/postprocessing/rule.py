from typing import Iterable, List, Sequence, Tuple

from rule_miner.config import FilterConfig
from rule_miner.types import AssociationRule, FrequentItemset

RULE_CRITERIA = ('support', 'confidence', 'lift', 'conviction', 'quality_score')
ITEMSET_CRITERIA = ('support', 'count')


def _ranking_key(rule: AssociationRule):
    return (-rule.quality_score, rule.antecedent, rule.consequent)


def rank_rules(rules: Iterable[AssociationRule]) -> List[AssociationRule]:
    """Sort by descending quality score; ties fall back to canonical rule order."""
    return sorted(rules, key=_ranking_key)


def filter_bidirectional_rules(rules: Iterable[AssociationRule]) -> List[AssociationRule]:
    """
    Rank rules and drop the weaker direction of every A => B / B => A pair.

    Each rule is reduced to the unordered pair {antecedent, consequent}; only
    the first (highest quality) rule of each pair is kept. The result keeps
    descending quality order.

    Args:
        rules: Rules passing the confidence and lift thresholds

    Returns:
        Ranked rules without duplicate canonical pairs
    """
    filtered = []
    seen_pairs = set()

    for rule in rank_rules(rules):
        pair = frozenset((rule.antecedent, rule.consequent))
        if pair in seen_pairs:
            continue
        seen_pairs.add(pair)
        filtered.append(rule)

    return filtered


def _rule_value(rule: AssociationRule, criterion: str) -> float:
    if criterion not in RULE_CRITERIA:
        raise ValueError(f"Unknown criterion: {criterion}. Available: {list(RULE_CRITERIA)}")
    if criterion == 'quality_score':
        return rule.quality_score
    return getattr(rule.metrics, criterion)


def filter_rules(rules: Sequence[AssociationRule], criterion: str, threshold: float) -> List[AssociationRule]:
    """
    Filters rules based on a criterion >= threshold.

    Args:
        rules: Rules to filter
        criterion: 'support', 'confidence', 'lift', 'conviction' or 'quality_score'
        threshold: Minimum value for the criterion (inclusive)

    Returns:
        Rules meeting the criterion, in their original order
    """
    return [rule for rule in rules if _rule_value(rule, criterion) >= threshold]


def filter_rules_by_pattern(
    rules: Sequence[AssociationRule],
    antecedent_contains: list = None,
    consequent_contains: list = None,
    antecedent_excludes: list = None,
    consequent_excludes: list = None,
    match_any: bool = False
) -> List[AssociationRule]:
    """
    Filter rules by antecedent/consequent item patterns.

    Patterns are matched case-insensitively as substrings of item ids, so
    'laptop' matches 'Laptop Pro'.

    Args:
        rules: Rules to filter
        antecedent_contains: Patterns that must appear in the antecedent
        consequent_contains: Patterns that must appear in the consequent
        antecedent_excludes: Patterns that must NOT appear in the antecedent
        consequent_excludes: Patterns that must NOT appear in the consequent
        match_any: If True, match if ANY pattern matches. If False, ALL must match.

    Returns:
        List of filtered rules
    """
    def matches(item_ids, pattern):
        return any(pattern in item for item in item_ids)

    def matches_patterns(itemset, patterns):
        if not patterns:
            return True
        item_ids = [str(item).lower() for item in itemset]
        patterns_lower = [p.lower() for p in patterns]
        check = any if match_any else all
        return check(matches(item_ids, p) for p in patterns_lower)

    def excludes_patterns(itemset, patterns):
        if not patterns:
            return True
        item_ids = [str(item).lower() for item in itemset]
        return not any(matches(item_ids, p.lower()) for p in patterns)

    return [
        rule for rule in rules
        if matches_patterns(rule.antecedent, antecedent_contains)
        and matches_patterns(rule.consequent, consequent_contains)
        and excludes_patterns(rule.antecedent, antecedent_excludes)
        and excludes_patterns(rule.consequent, consequent_excludes)
    ]


def filter_rules_by_consequent(rules, targets: list, match_any: bool = True):
    """Keep rules whose consequent matches any (or all) of the target patterns."""
    return filter_rules_by_pattern(rules, consequent_contains=targets, match_any=match_any)


def filter_itemsets(
    itemsets: Sequence[FrequentItemset],
    criterion: str = 'support',
    threshold: float = 0.0
) -> Tuple[List[FrequentItemset], dict]:
    """
    Filters frequent itemsets based on a criterion >= threshold.

    Returns:
        Tuple of (filtered_itemsets, stats) where stats holds
        'num_itemsets' and 'average_support'
    """
    if criterion not in ITEMSET_CRITERIA:
        raise ValueError(f"Unknown criterion: {criterion}. Available: {list(ITEMSET_CRITERIA)}")

    filtered = [itemset for itemset in itemsets if getattr(itemset, criterion) >= threshold]

    count = len(filtered)
    if count == 0:
        return filtered, {"num_itemsets": 0, "average_support": 0.0}

    avg_support = sum(itemset.support for itemset in filtered) / count
    return filtered, {"num_itemsets": count, "average_support": round(avg_support, 3)}


def apply_filters(rules: Sequence[AssociationRule], filters: Sequence[FilterConfig]) -> List[AssociationRule]:
    result = list(rules)
    for f in filters or []:
        result = filter_rules(result, criterion=f.metric, threshold=f.threshold)
    return result
