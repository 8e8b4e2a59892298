"""
RuleMiner: owns the configuration, the transaction store and the statistics
of the last successful run, and sequences the mining pipeline.
"""
import logging
import time
from typing import Iterable, List, Sequence, Union

from rule_miner.config import MiningConfig
from rule_miner.errors import InsufficientData
from rule_miner.mining import find_frequent_itemsets
from rule_miner.mining.rules import generate_association_rules
from rule_miner.mining.stats import MiningStats
from rule_miner.postprocessing.rule import filter_bidirectional_rules
from rule_miner.transaction import Transaction, TransactionStore
from rule_miner.types import AssociationRule, FrequentItemset

logger = logging.getLogger(__name__)


class RuleMiner:
    """
    Association rule miner over an in-memory, append-only transaction set.

    Every call to mine() recomputes itemsets and rules from all transactions
    added so far. One instance must not be shared by concurrent callers.

    Example:
        >>> miner = RuleMiner(MiningConfig(min_support=0.5, min_confidence=0.5, min_lift=0.0))
        >>> miner.add_transactions([
        ...     Transaction('tx1', ['A', 'B']),
        ...     Transaction('tx2', ['A', 'B']),
        ...     Transaction('tx3', ['A', 'C']),
        ... ])
        >>> [str(rule) for rule in miner.mine()]
        ['B => A']
    """

    def __init__(self, config: MiningConfig = None):
        self._config = config if config is not None else MiningConfig.default()
        self._store = TransactionStore()
        self._stats = MiningStats()

    @property
    def config(self) -> MiningConfig:
        return self._config

    @property
    def stats(self) -> MiningStats:
        """Statistics of the most recent successful mine() call."""
        return self._stats

    def add_transactions(self, transactions: Sequence[Transaction]):
        self._store.append_batch(transactions)

    def add_transaction(self, transaction: Transaction):
        self._store.append_one(transaction)

    def add_transactions_from_iter(self, iterable: Iterable[Union[Transaction, Exception]]) -> int:
        return self._store.append_stream(iterable)

    def transaction_count(self) -> int:
        return self._store.count()

    def _require_transactions(self) -> Sequence[Transaction]:
        if self._store.count() == 0:
            raise InsufficientData("No transactions to mine")
        return self._store.transactions

    def mine_frequent_itemsets(self) -> List[FrequentItemset]:
        """Run only the itemset stage. Does not update stats."""
        transactions = self._require_transactions()
        return find_frequent_itemsets(transactions, self._config)

    def mine(self) -> List[AssociationRule]:
        """
        Mine association rules with the configured algorithm.

        Returns:
            Rules ranked by descending quality score, one direction per
            antecedent/consequent pair

        Raises:
            InsufficientData: no transactions were added
            UnsupportedAlgorithm: the configured algorithm has no engine
        """
        transactions = self._require_transactions()
        start_time = time.time()
        algorithm = self._config.algorithm.value
        logger.info(f"Mining {len(transactions)} transactions with {algorithm}")

        # Step 1: frequent itemsets
        frequent_itemsets = find_frequent_itemsets(transactions, self._config)
        logger.info(f"Found {len(frequent_itemsets)} frequent itemsets")

        # Step 2: rules passing confidence and lift thresholds
        rules = generate_association_rules(transactions, frequent_itemsets, self._config)

        # Step 3: rank and drop reverse-direction duplicates
        rules = filter_bidirectional_rules(rules)

        execution_time = time.time() - start_time
        self._stats = MiningStats.from_run(
            frequent_itemsets_count=len(frequent_itemsets),
            rules=rules,
            transactions_processed=len(transactions),
            algorithm=algorithm,
            execution_time=execution_time
        )
        logger.info(f"Generated {len(rules)} rules in {execution_time:.3f}s")

        return rules

    def __repr__(self):
        return (f"RuleMiner(algorithm='{self._config.algorithm.value}', "
                f"min_support={self._config.min_support}, "
                f"min_confidence={self._config.min_confidence}, "
                f"min_lift={self._config.min_lift}, "
                f"transactions={self._store.count()})")
