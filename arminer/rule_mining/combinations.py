"""
Lexicographic k-combination enumeration.

One iterator is shared by candidate generation, Apriori subset pruning and
rule base/add partitioning.
"""
from typing import Iterator, Sequence, Tuple, TypeVar

from arminer.rule_mining.exceptions import InvariantViolation

T = TypeVar('T')


class Combinations:
    """
    Lazy iterator over the index tuples of every size-``r`` subset of ``range(n)``.

    Tuples come out in lexicographic order of index positions, starting with
    ``(0, ..., r-1)`` and ending with ``(n-r, ..., n-1)``. ``r == 0`` yields a
    single empty tuple. The iterator is single-pass.

    Raises:
        InvariantViolation: if ``r`` is negative or larger than ``n``
    """

    __slots__ = ('n', 'r', '_indices', '_started', '_exhausted')

    def __init__(self, n: int, r: int):
        if r < 0 or r > n:
            raise InvariantViolation(f"Cannot choose {r} out of {n} elements")
        self.n = n
        self.r = r
        self._indices = list(range(r))
        self._started = False
        self._exhausted = False

    def __iter__(self) -> 'Combinations':
        return self

    def __next__(self) -> Tuple[int, ...]:
        if self._exhausted:
            raise StopIteration

        if not self._started:
            self._started = True
            return tuple(self._indices)

        n, r, indices = self.n, self.r, self._indices
        # rightmost position that can still move
        for i in reversed(range(r)):
            if indices[i] < i + n - r:
                break
        else:
            self._exhausted = True
            raise StopIteration

        indices[i] += 1
        for j in range(i + 1, r):
            indices[j] = indices[j - 1] + 1
        return tuple(indices)

    @property
    def exhausted(self) -> bool:
        return self._exhausted


def combinations(iterable: Sequence[T], r: int) -> Iterator[Tuple[T, ...]]:
    """
    Lazily project every size-``r`` index combination onto ``iterable``.

    Element order is preserved inside each tuple. The size check runs
    immediately, not on the first ``next()``.
    """
    pool = tuple(iterable)
    indices = Combinations(len(pool), r)
    return (tuple(pool[i] for i in idx) for idx in indices)


def count_combinations(n: int, r: int) -> int:
    """Number of tuples ``Combinations(n, r)`` produces, or 0 when r is out of range."""
    if r < 0 or r > n:
        return 0
    r = min(r, n - r)
    result = 1
    for i in range(1, r + 1):
        result = result * (n - r + i) // i
    return result
