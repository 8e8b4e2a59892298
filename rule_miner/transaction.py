"""
Transactions and the append-only store the miner works on.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from rule_miner.errors import InsufficientData

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Transaction:
    """
    One basket / event group.

    Items keep the order they were given in and are not deduplicated;
    containment checks treat them as a set.
    """
    id: str
    items: Tuple[str, ...]
    timestamp: datetime = field(default_factory=_utcnow)
    user_id: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # Read-only copies of items and metadata
        object.__setattr__(self, 'items', tuple(self.items))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    @classmethod
    def with_user(cls, id: str, items: Sequence[str], timestamp: datetime = None,
                  user_id: str = None) -> 'Transaction':
        return cls(id=id, items=tuple(items), timestamp=timestamp or _utcnow(), user_id=user_id)

    def with_metadata(self, metadata: Mapping[str, Any]) -> 'Transaction':
        return replace(self, metadata=MappingProxyType(dict(metadata)))

    @property
    def item_set(self) -> frozenset:
        return frozenset(self.items)

    def contains(self, item: str) -> bool:
        return item in self.items

    def contains_all(self, items: Iterable[str]) -> bool:
        return self.item_set.issuperset(items)


class TransactionStore:
    """Append-only holder of the transactions to mine."""

    def __init__(self):
        self._transactions: List[Transaction] = []

    def append_batch(self, transactions: Sequence[Transaction]):
        transactions = list(transactions)
        if not transactions:
            raise InsufficientData("No transactions provided")
        self._transactions.extend(transactions)
        logger.debug(f"Appended batch of {len(transactions)} transactions")

    def append_one(self, transaction: Transaction):
        self._transactions.append(transaction)

    def append_stream(self, stream: Iterable[Union[Transaction, Exception]]) -> int:
        """
        Consume transactions from an iterable until it is exhausted.

        The first failure, raised by the iterator or yielded as an exception
        instance, is propagated immediately; transactions consumed before it
        stay in the store.

        Returns:
            Number of transactions consumed
        """
        consumed = 0
        for entry in stream:
            if isinstance(entry, Exception):
                raise entry
            self._transactions.append(entry)
            consumed += 1

        if consumed == 0:
            raise InsufficientData("No transactions provided from iterator")

        logger.debug(f"Appended {consumed} transactions from stream")
        return consumed

    def count(self) -> int:
        return len(self._transactions)

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return tuple(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)
