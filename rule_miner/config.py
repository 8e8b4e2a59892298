import numbers
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Optional, Union

from rule_miner.errors import InvalidConfiguration


class MiningAlgorithm(str, Enum):
    APRIORI = 'apriori'      # level-wise, breadth-first candidate counting
    FP_GROWTH = 'fpgrowth'   # prefix tree with recursive conditional trees
    ECLAT = 'eclat'          # reserved, no engine yet


@dataclass(frozen=True)
class MiningConfig:
    min_support: float = 0.1
    min_confidence: float = 0.7
    min_lift: float = 1.0
    algorithm: Union[MiningAlgorithm, str] = MiningAlgorithm.APRIORI
    # Reserved for sequential mining, ignored by the association rule pipeline
    max_time_gap: Optional[timedelta] = None

    def __post_init__(self):
        object.__setattr__(self, 'algorithm', _coerce_algorithm(self.algorithm))
        _check_fraction('min_support', self.min_support)
        _check_fraction('min_confidence', self.min_confidence)
        if not _is_number(self.min_lift) or self.min_lift < 0:
            raise InvalidConfiguration(f"min_lift must be >= 0, got {self.min_lift!r}")

    @classmethod
    def default(cls) -> 'MiningConfig':
        return cls()

    @classmethod
    def fp_growth(cls, min_support: float = 0.1, min_confidence: float = 0.7,
                  min_lift: float = 1.0) -> 'MiningConfig':
        return cls(
            min_support=min_support,
            min_confidence=min_confidence,
            min_lift=min_lift,
            algorithm=MiningAlgorithm.FP_GROWTH
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min_support': self.min_support,
            'min_confidence': self.min_confidence,
            'min_lift': self.min_lift,
            'algorithm': self.algorithm.value,
            'max_time_gap': self.max_time_gap
        }


@dataclass
class FilterConfig:
    metric: str
    threshold: float

    def to_dict(self) -> Dict[str, Any]:
        return {'metric': self.metric, 'threshold': self.threshold}


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and value == value


def _check_fraction(name: str, value):
    if not _is_number(value) or not 0.0 <= value <= 1.0:
        raise InvalidConfiguration(f"{name} must be within [0, 1], got {value!r}")


def _coerce_algorithm(value) -> MiningAlgorithm:
    if isinstance(value, MiningAlgorithm):
        return value
    if isinstance(value, str):
        try:
            return MiningAlgorithm(value.lower())
        except ValueError:
            pass
    valid = [a.value for a in MiningAlgorithm]
    raise InvalidConfiguration(f"Algorithm must be one of {valid}, got {value!r}")
