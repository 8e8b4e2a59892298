"""
Level-wise (Apriori) frequent itemset mining.

Candidates of size k+1 are joined from the frequent k-itemsets of the previous
level and counted with a full scan of the transactions. Working memory grows
with the number of surviving candidates per level.
"""
import logging
from typing import Dict, List, Sequence

from rule_miner.mining.counting import count_containing, min_support_count, transaction_sets
from rule_miner.transaction import Transaction
from rule_miner.types import FrequentItemset, ItemSet

logger = logging.getLogger(__name__)


def find_frequent_itemsets(
    transactions: Sequence[Transaction],
    min_support: float
) -> List[FrequentItemset]:
    """
    Find all frequent itemsets, level by level.

    Args:
        transactions: Transactions to mine
        min_support: Minimum support threshold (fraction of transactions)

    Returns:
        Frequent itemsets ordered by size, then canonically
    """
    total = len(transactions)
    if total == 0:
        return []

    threshold = min_support_count(min_support, total)
    tx_sets = transaction_sets(transactions)

    frequent_itemsets = []
    current_level = generate_1_itemsets(tx_sets)
    k = 1

    while current_level:
        counts = count_support(tx_sets, current_level)
        frequent_k = sorted(itemset for itemset, count in counts.items() if count >= threshold)
        logger.debug(f"Level {k}: {len(current_level)} candidates, {len(frequent_k)} frequent")

        if not frequent_k:
            break

        for itemset in frequent_k:
            frequent_itemsets.append(FrequentItemset(
                items=itemset,
                support=counts[itemset] / total,
                count=counts[itemset]
            ))

        current_level = generate_candidates(frequent_k)
        k += 1

    return frequent_itemsets


def generate_1_itemsets(tx_sets: Sequence[frozenset]) -> List[ItemSet]:
    items = set()
    for tx in tx_sets:
        items.update(tx)
    return [(item,) for item in sorted(items)]


def count_support(tx_sets: Sequence[frozenset], itemsets: Sequence[ItemSet]) -> Dict[ItemSet, int]:
    return {itemset: count_containing(tx_sets, itemset) for itemset in itemsets}


def can_join(set1: ItemSet, set2: ItemSet) -> bool:
    """Same size, same first k-1 items, different last item."""
    if len(set1) != len(set2) or not set1:
        return False
    return set1[:-1] == set2[:-1] and set1[-1] != set2[-1]


def generate_candidates(frequent_k: Sequence[ItemSet]) -> List[ItemSet]:
    """
    Join frequent k-itemsets into (k+1)-candidates.

    A candidate with a k-subset that is not frequent cannot be frequent
    itself and is pruned before counting.
    """
    frequent = sorted(frequent_k)
    known = set(frequent)
    candidates = set()

    for i, set1 in enumerate(frequent):
        for set2 in frequent[i + 1:]:
            if set1[:-1] != set2[:-1]:
                # sorted input: no later itemset shares this prefix
                break
            if not can_join(set1, set2):
                continue
            candidate = tuple(sorted(set1 + (set2[-1],)))
            if _all_subsets_frequent(candidate, known):
                candidates.add(candidate)

    return sorted(candidates)


def _all_subsets_frequent(candidate: ItemSet, known) -> bool:
    for i in range(len(candidate)):
        if candidate[:i] + candidate[i + 1:] not in known:
            return False
    return True
