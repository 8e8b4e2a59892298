"""
Core value types shared by the mining engines, the rule generator and the
post-processing helpers.

Itemsets are plain tuples of item identifiers kept in lexicographic order, so
the same set of items always hashes, compares and joins the same way.
"""
from dataclasses import dataclass
from typing import Iterable, Tuple

ItemSet = Tuple[str, ...]

QUALITY_WEIGHTS = (0.5, 0.3, 0.2)  # confidence, lift, support


def make_itemset(items: Iterable[str]) -> ItemSet:
    """Canonical itemset: distinct items, sorted."""
    return tuple(sorted(set(items)))


@dataclass(frozen=True)
class FrequentItemset:
    items: ItemSet
    support: float
    count: int = 0

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class PatternMetrics:
    """
    Quality metrics of an association rule.

    confidence: P(consequent | antecedent)
    support: P(antecedent and consequent)
    lift: confidence / P(consequent)
    conviction: (1 - P(consequent)) / (1 - confidence), may be math.inf
    """
    confidence: float
    support: float
    lift: float
    conviction: float

    def to_dict(self):
        return {
            'confidence': self.confidence,
            'support': self.support,
            'lift': self.lift,
            'conviction': self.conviction
        }


@dataclass(frozen=True)
class AssociationRule:
    antecedent: ItemSet
    consequent: ItemSet
    metrics: PatternMetrics

    @property
    def items(self) -> ItemSet:
        return make_itemset(self.antecedent + self.consequent)

    @property
    def quality_score(self) -> float:
        """Weighted combination used for ranking only, never for filtering."""
        w_conf, w_lift, w_support = QUALITY_WEIGHTS
        return (self.metrics.confidence * w_conf
                + self.metrics.lift * w_lift
                + self.metrics.support * w_support)

    def to_dict(self):
        row = {
            'antecedent': list(self.antecedent),
            'consequent': list(self.consequent),
        }
        row.update(self.metrics.to_dict())
        row['quality_score'] = self.quality_score
        return row

    def __str__(self):
        return f"{', '.join(self.antecedent)} => {', '.join(self.consequent)}"
