"""
Association rule generation from frequent itemsets.

Every frequent itemset of size k >= 2 is split into all 2^k - 2
antecedent/consequent pairs. Metrics are computed from transaction counts,
not from cached itemset supports alone.
"""
import logging
import math
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from rule_miner.config import MiningConfig
from rule_miner.mining.counting import count_containing, transaction_sets
from rule_miner.transaction import Transaction
from rule_miner.types import AssociationRule, FrequentItemset, ItemSet, PatternMetrics

logger = logging.getLogger(__name__)


def generate_splits(items: ItemSet) -> List[Tuple[ItemSet, ItemSet]]:
    """All (antecedent, consequent) splits with both sides non-empty."""
    splits = []
    for size in range(1, len(items)):
        for antecedent in combinations(items, size):
            consequent = tuple(item for item in items if item not in antecedent)
            splits.append((antecedent, consequent))
    return splits


def calculate_metrics(
    antecedent_count: int,
    consequent_count: int,
    both_count: int,
    total: int,
    support: float
) -> PatternMetrics:
    """
    Derive rule metrics from raw transaction counts.

    Zero denominators are not rejected: confidence is 0 when the antecedent
    never occurs and lift is 0 when the consequent never occurs. Conviction is
    infinite when confidence is 1 or the consequent occurs everywhere.
    """
    confidence = both_count / antecedent_count if antecedent_count > 0 else 0.0

    p_consequent = consequent_count / total if total > 0 else 0.0
    lift = confidence / p_consequent if p_consequent > 0 else 0.0

    if confidence < 1.0 and p_consequent < 1.0:
        conviction = (1.0 - p_consequent) / (1.0 - confidence)
    else:
        conviction = math.inf

    return PatternMetrics(
        confidence=confidence,
        support=support,
        lift=lift,
        conviction=conviction
    )


class RuleGenerator:
    """Turns frequent itemsets into thresholded rules for one transaction set."""

    def __init__(self, transactions: Sequence[Transaction], config: MiningConfig):
        self.config = config
        self.total = len(transactions)
        self._tx_sets = transaction_sets(transactions)
        self._counts: Dict[ItemSet, int] = {}

    def count(self, items: ItemSet) -> int:
        if items not in self._counts:
            self._counts[items] = count_containing(self._tx_sets, items)
        return self._counts[items]

    def rule_metrics(self, antecedent: ItemSet, consequent: ItemSet, support: float) -> PatternMetrics:
        return calculate_metrics(
            antecedent_count=self.count(antecedent),
            consequent_count=self.count(consequent),
            both_count=self.count(tuple(sorted(antecedent + consequent))),
            total=self.total,
            support=support
        )

    def passes(self, metrics: PatternMetrics) -> bool:
        return (metrics.confidence >= self.config.min_confidence
                and metrics.lift >= self.config.min_lift)

    def generate(self, frequent_itemsets: Sequence[FrequentItemset]) -> List[AssociationRule]:
        rules = []
        considered = 0

        for itemset in frequent_itemsets:
            if len(itemset.items) < 2:
                continue

            for antecedent, consequent in generate_splits(itemset.items):
                considered += 1
                metrics = self.rule_metrics(antecedent, consequent, itemset.support)
                if self.passes(metrics):
                    rules.append(AssociationRule(
                        antecedent=antecedent,
                        consequent=consequent,
                        metrics=metrics
                    ))

        logger.debug(f"Considered {considered} splits, {len(rules)} rules passed thresholds")
        return rules


def generate_association_rules(
    transactions: Sequence[Transaction],
    frequent_itemsets: Sequence[FrequentItemset],
    config: MiningConfig
) -> List[AssociationRule]:
    """Rules passing min_confidence and min_lift, in generation order."""
    return RuleGenerator(transactions, config).generate(frequent_itemsets)
