"""
Inverted index from items to the transactions that contain them.
"""
import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

_EMPTY = np.empty(0, dtype=np.int64)
_EMPTY.setflags(write=False)


class TransactionIndex:
    """
    Posting lists (sorted transaction ids) per item, built once.

    Transaction ids are the 0-based positions of the transactions in the
    input. Posting lists are read-only numpy arrays, strictly increasing and
    free of duplicates even when an item repeats within a transaction.
    """

    def __init__(self, transactions: Iterable[Iterable[str]]):
        postings: Dict[str, List[int]] = {}
        count = 0
        for tid, transaction in enumerate(transactions):
            for item in transaction:
                ids = postings.setdefault(item, [])
                if not ids or ids[-1] != tid:
                    ids.append(tid)
            count = tid + 1

        self._transaction_count = count
        self._postings: Dict[str, np.ndarray] = {}
        for item, ids in postings.items():
            arr = np.asarray(ids, dtype=np.int64)
            arr.setflags(write=False)
            self._postings[item] = arr
        self._items: Tuple[str, ...] = tuple(sorted(self._postings))

        logger.debug("Indexed %d transactions, %d distinct items",
                     self._transaction_count, len(self._items))

    @property
    def transaction_count(self) -> int:
        return self._transaction_count

    @property
    def items(self) -> Tuple[str, ...]:
        """Distinct items in ascending order."""
        return self._items

    def __len__(self) -> int:
        return self._transaction_count

    def __contains__(self, item) -> bool:
        return item in self._postings

    def posting_list(self, item: str) -> np.ndarray:
        return self._postings.get(item, _EMPTY)

    def count(self, itemset: Sequence[str]) -> int:
        """Number of transactions containing every item of ``itemset``."""
        if len(itemset) == 0:
            return self._transaction_count

        common = None
        for item in itemset:
            ids = self._postings.get(item)
            if ids is None:
                return 0
            if common is None:
                common = ids
            else:
                common = np.intersect1d(common, ids, assume_unique=True)
            if common.size == 0:
                return 0
        return int(common.size)

    def support(self, itemset: Sequence[str]) -> float:
        """
        Fraction of transactions that contain all of ``itemset``.

        The empty itemset is supported by every transaction (1.0). With no
        transactions, or when an item was never seen, the support is 0.0.
        """
        if len(itemset) == 0:
            return 1.0
        if self._transaction_count == 0:
            return 0.0
        return self.count(itemset) / self._transaction_count
