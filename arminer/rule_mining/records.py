"""
Records produced by a mining run, and the options that drive it.
"""
from dataclasses import dataclass
from typing import Dict, Any, List, Tuple

from arminer.rule_mining.exceptions import InvalidOptionsError

Itemset = Tuple[str, ...]


@dataclass(frozen=True)
class SupportRecord:
    """A frequent itemset (sorted) together with its support."""
    items: Itemset
    support: float

    def get_items(self) -> Itemset:
        return self.items

    def get_support(self) -> float:
        return self.support


@dataclass(frozen=True)
class OrderedStatistic:
    """
    One base -> add split of a frequent itemset.

    ``base`` and ``add`` are disjoint and together form the parent itemset.
    Confidence is not clamped to 1.
    """
    base: Itemset
    add: Itemset
    confidence: float
    lift: float

    def get_base(self) -> Itemset:
        return self.base

    def get_add(self) -> Itemset:
        return self.add

    def get_confidence(self) -> float:
        return self.confidence

    def get_lift(self) -> float:
        return self.lift


@dataclass(frozen=True)
class RelationRecord:
    """A support record and the ordered statistics that passed filtering (never empty)."""
    support_record: SupportRecord
    ordered_statistics: Tuple[OrderedStatistic, ...]

    @property
    def items(self) -> Itemset:
        return self.support_record.items

    @property
    def support(self) -> float:
        return self.support_record.support

    def get_support_record(self) -> SupportRecord:
        return self.support_record

    def get_ordered_statistics(self) -> List[OrderedStatistic]:
        return list(self.ordered_statistics)


@dataclass(frozen=True)
class Options:
    min_support: float
    min_confidence: float = 0.0
    min_lift: float = 0.0
    max_length: int = 0  # 0 means no limit

    def check(self) -> None:
        if self.min_support <= 0:
            raise InvalidOptionsError(f"minimum support must be > 0, got {self.min_support}")
        if self.max_length < 0:
            raise InvalidOptionsError(f"maximum length must be >= 0, got {self.max_length}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'min_support': self.min_support,
            'min_confidence': self.min_confidence,
            'min_lift': self.min_lift,
            'max_length': self.max_length
        }


def new_options(min_support: float, min_confidence: float = 0.0,
                min_lift: float = 0.0, max_length: int = 0) -> Options:
    return Options(min_support, min_confidence, min_lift, max_length)
