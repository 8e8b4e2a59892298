"""
Frequent itemset engines and the rule generation stage.

- apriori: level-wise breadth-first candidate counting
- fpgrowth: prefix tree with recursive conditional trees
"""
from typing import List, Sequence

from rule_miner.config import MiningAlgorithm, MiningConfig
from rule_miner.errors import UnsupportedAlgorithm
from rule_miner.mining import apriori, fpgrowth
from rule_miner.transaction import Transaction
from rule_miner.types import FrequentItemset


def find_frequent_itemsets(
    transactions: Sequence[Transaction],
    config: MiningConfig
) -> List[FrequentItemset]:
    """Run the engine selected by config.algorithm."""
    if config.algorithm == MiningAlgorithm.APRIORI:
        return apriori.find_frequent_itemsets(transactions, config.min_support)
    elif config.algorithm == MiningAlgorithm.FP_GROWTH:
        return fpgrowth.find_frequent_itemsets(transactions, config.min_support)
    else:
        raise UnsupportedAlgorithm(f"Algorithm not yet implemented: {config.algorithm.value}")
