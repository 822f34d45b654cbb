"""
Apriori frequent itemset search and association rule extraction.

The engine owns an immutable TransactionIndex built once from the input
transactions. ``calculate`` streams frequent itemsets level by level and
turns each into base -> add statistics scored by confidence and lift.
"""
import logging
from typing import Iterable, Iterator, List, Optional, Sequence, Set

from arminer.rule_mining.combinations import combinations, count_combinations
from arminer.rule_mining.records import (
    Itemset, Options, OrderedStatistic, RelationRecord, SupportRecord
)
from arminer.rule_mining.transaction_index import TransactionIndex

logger = logging.getLogger(__name__)

# Below this candidate length every subset is a frequent singleton by construction
MIN_LENGTH_FOR_PRUNING = 3


class Apriori:
    """
    Level-wise Apriori miner over a static set of transactions.

    Example:
        >>> engine = Apriori([['beer', 'nuts'], ['beer', 'cheese']])
        >>> records = engine.calculate(Options(min_support=0.5))
    """

    def __init__(self, transactions: Iterable[Iterable[str]]):
        self.index = TransactionIndex(transactions)

    @property
    def transaction_count(self) -> int:
        return self.index.transaction_count

    def support(self, items: Sequence[str]) -> float:
        return self.index.support(items)

    def calculate(self, options: Options) -> List[RelationRecord]:
        """
        Mine association rules.

        Args:
            options: Thresholds for support, confidence and lift, and the
                     maximum itemset length (0 for unbounded)

        Returns:
            RelationRecords in the order their itemsets were found

        Raises:
            InvalidOptionsError: if ``options.min_support`` is not positive
        """
        options.check()
        records = list(self._relation_records(options))
        logger.info("Apriori found %d relation records over %d transactions",
                    len(records), self.transaction_count)
        return records

    def iter_relation_records(self, options: Options) -> Iterator[RelationRecord]:
        """Lazy variant of ``calculate``; options are checked before the first record."""
        options.check()
        return self._relation_records(options)

    def _relation_records(self, options: Options) -> Iterator[RelationRecord]:
        for record in self.generate_support_records(options.min_support, options.max_length):
            statistics = self.filter_ordered_statistics(
                self.generate_ordered_statistics(record),
                options.min_confidence,
                options.min_lift
            )
            if not statistics:
                continue
            yield RelationRecord(record, tuple(statistics))

    # ------------------------------------------------------------------ itemsets

    def initial_candidates(self) -> List[Itemset]:
        return [(item,) for item in self.index.items]

    def generate_support_records(self, min_support: float, max_length: int = 0) -> Iterator[SupportRecord]:
        """
        Yield every itemset whose support is at least ``min_support``.

        Records come out by increasing length; within a length, in
        combination order over the sorted item universe.
        """
        candidates = self.initial_candidates()
        length = 1
        while candidates:
            frequent: List[Itemset] = []
            for candidate in candidates:
                support = self.index.support(candidate)
                if support < min_support:
                    continue
                frequent.append(candidate)
                yield SupportRecord(candidate, support)

            logger.debug("Level %d: %d candidates, %d frequent",
                         length, len(candidates), len(frequent))

            length += 1
            if max_length and length > max_length:
                break
            candidates = self.create_next_candidates(frequent, length)

    def create_next_candidates(self, prev_frequent: Sequence[Itemset], length: int) -> List[Itemset]:
        """
        Candidates of ``length`` items built from the frequent itemsets one level down.

        Every combination of the items appearing in ``prev_frequent`` is
        proposed; from length 3 upward a combination is kept only when all of
        its (length - 1)-subsets are in ``prev_frequent``.
        """
        universe = sorted({item for itemset in prev_frequent for item in itemset})
        if len(universe) < length:
            return []

        proposed = combinations(universe, length)
        if length < MIN_LENGTH_FOR_PRUNING:
            return list(proposed)

        known: Set[Itemset] = set(prev_frequent)
        candidates = []
        pruned = 0
        for candidate in proposed:
            if all(subset in known for subset in combinations(candidate, length - 1)):
                candidates.append(candidate)
            else:
                pruned += 1

        logger.debug("Length %d: proposed %d, kept %d candidates, pruned %d",
                     length, count_combinations(len(universe), length), len(candidates), pruned)
        return candidates

    # ------------------------------------------------------------------ rules

    def generate_ordered_statistics(self, record: SupportRecord) -> Iterator[OrderedStatistic]:
        """
        Yield every non-trivial base -> add split of ``record.items``.

        Bases are visited from the largest (len - 1 items) down to single
        items, so an itemset of L items gives 2**L - 2 statistics.
        """
        items = tuple(sorted(record.items))
        for base_length in range(len(items) - 1, 0, -1):
            for base in combinations(items, base_length):
                yield self.generate_ordered_statistic(base, items, record.support)

    def generate_ordered_statistic(self, base: Itemset, items: Itemset, support: float) -> OrderedStatistic:
        base_set = set(base)
        add = tuple(item for item in items if item not in base_set)
        confidence = support / self.index.support(base)
        lift = confidence / self.index.support(add)
        return OrderedStatistic(base, add, confidence, lift)

    @staticmethod
    def filter_ordered_statistics(
        statistics: Iterable[OrderedStatistic],
        min_confidence: float = 0.0,
        min_lift: float = 0.0
    ) -> List[OrderedStatistic]:
        return [
            stat for stat in statistics
            if stat.confidence >= min_confidence and stat.lift >= min_lift
        ]


def run_apriori(
    transactions: Iterable[Iterable[str]],
    min_support: float = 0.1,
    min_confidence: float = 0.0,
    min_lift: float = 0.0,
    max_length: Optional[int] = None
) -> List[RelationRecord]:
    """Convenience wrapper: build the engine and mine in one call."""
    options = Options(min_support, min_confidence, min_lift, max_length or 0)
    return Apriori(transactions).calculate(options)
