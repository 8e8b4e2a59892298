"""
rule_miner: association rule discovery from transaction batches.

Two interchangeable frequent itemset engines (Apriori and FP-Growth), rule
generation with confidence / lift / conviction, and ranking with removal of
redundant bidirectional rule pairs.
"""
from .config import MiningAlgorithm, MiningConfig, FilterConfig
from .errors import MiningError, InvalidConfiguration, InsufficientData, UnsupportedAlgorithm
from .transaction import Transaction, TransactionStore
from .types import AssociationRule, FrequentItemset, ItemSet, PatternMetrics, make_itemset
from .mining.miner import RuleMiner
from .mining.stats import MiningStats

__all__ = [
    'MiningAlgorithm',
    'MiningConfig',
    'FilterConfig',
    'MiningError',
    'InvalidConfiguration',
    'InsufficientData',
    'UnsupportedAlgorithm',
    'Transaction',
    'TransactionStore',
    'AssociationRule',
    'FrequentItemset',
    'ItemSet',
    'PatternMetrics',
    'make_itemset',
    'RuleMiner',
    'MiningStats'
]
