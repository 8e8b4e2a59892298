from .rule import (
    rank_rules,
    filter_bidirectional_rules,
    filter_rules,
    filter_rules_by_pattern,
    filter_rules_by_consequent,
    filter_itemsets,
    apply_filters
)

__all__ = [
    'rank_rules',
    'filter_bidirectional_rules',
    'filter_rules',
    'filter_rules_by_pattern',
    'filter_rules_by_consequent',
    'filter_itemsets',
    'apply_filters'
]
