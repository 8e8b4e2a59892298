"""
Tabular views of transactions, itemsets and rules.

The layouts follow mlxtend.frequent_patterns so results can be compared with,
or handed to, mlxtend-based tooling.
"""
from typing import Iterable, Sequence

import pandas as pd
from mlxtend.preprocessing import TransactionEncoder

from rule_miner.transaction import Transaction
from rule_miner.types import AssociationRule, FrequentItemset

RULE_COLUMNS = ['antecedents', 'consequents', 'support', 'confidence', 'lift', 'conviction', 'quality_score']


def encode_transactions(transactions: Iterable[Transaction]) -> pd.DataFrame:
    """
    One-hot encode transactions: one boolean column per item.

    The result is accepted by mlxtend's apriori/fpgrowth with use_colnames=True.
    """
    baskets = [sorted(tx.item_set) for tx in transactions]
    te = TransactionEncoder()
    te_array = te.fit(baskets).transform(baskets)
    return pd.DataFrame(te_array, columns=te.columns_)


def itemsets_to_frame(itemsets: Sequence[FrequentItemset]) -> pd.DataFrame:
    """Columns 'support' and 'itemsets' (frozenset), plus 'count' and 'length'."""
    return pd.DataFrame({
        'support': [itemset.support for itemset in itemsets],
        'itemsets': [frozenset(itemset.items) for itemset in itemsets],
        'count': [itemset.count for itemset in itemsets],
        'length': [len(itemset.items) for itemset in itemsets],
    })


def rules_to_frame(rules: Sequence[AssociationRule]) -> pd.DataFrame:
    """One row per rule, in the order given."""
    rows = []
    for rule in rules:
        rows.append({
            'antecedents': frozenset(rule.antecedent),
            'consequents': frozenset(rule.consequent),
            'support': rule.metrics.support,
            'confidence': rule.metrics.confidence,
            'lift': rule.metrics.lift,
            'conviction': rule.metrics.conviction,
            'quality_score': rule.quality_score,
        })
    return pd.DataFrame(rows, columns=RULE_COLUMNS)
