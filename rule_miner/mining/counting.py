import math
from typing import Iterable, List, Sequence

from rule_miner.transaction import Transaction


def min_support_count(min_support: float, total_transactions: int) -> int:
    """
    Absolute support threshold: ceil(min_support * N), at least 1.

    The product is rounded to 9 decimals first so that float noise such as
    0.7 * 10 == 7.000000000000001 does not push the threshold up by one.
    An itemset has to occur in at least one transaction to be frequent.
    """
    return max(1, math.ceil(round(min_support * total_transactions, 9)))


def transaction_sets(transactions: Iterable[Transaction]) -> List[frozenset]:
    return [tx.item_set for tx in transactions]


def count_containing(tx_sets: Sequence[frozenset], items: Iterable[str]) -> int:
    """Number of transactions containing every item."""
    wanted = frozenset(items)
    return sum(1 for tx in tx_sets if wanted <= tx)
