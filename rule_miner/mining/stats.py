from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Sequence

from rule_miner.types import AssociationRule


@dataclass(frozen=True)
class MiningStats:
    """
    Counters from the last successful mine() run.

    frequent_itemsets_count and rules_generated are also readable as
    frequent_itemset_count and rule_count.
    """
    frequent_itemsets_count: int = 0
    rules_generated: int = 0
    transactions_processed: int = 0
    algorithm: Optional[str] = None
    execution_time: float = 0.0
    average_support: float = 0.0
    average_confidence: float = 0.0

    @classmethod
    def from_run(
        cls,
        frequent_itemsets_count: int,
        rules: Sequence[AssociationRule],
        transactions_processed: int,
        algorithm: str,
        execution_time: float
    ) -> 'MiningStats':
        return cls(
            frequent_itemsets_count=frequent_itemsets_count,
            rules_generated=len(rules),
            transactions_processed=transactions_processed,
            algorithm=algorithm,
            execution_time=execution_time,
            average_support=sum(r.metrics.support for r in rules) / len(rules) if rules else 0.0,
            average_confidence=sum(r.metrics.confidence for r in rules) / len(rules) if rules else 0.0
        )

    @property
    def frequent_itemset_count(self) -> int:
        return self.frequent_itemsets_count

    @property
    def rule_count(self) -> int:
        return self.rules_generated

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
