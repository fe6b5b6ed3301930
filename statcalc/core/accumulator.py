import bisect
import logging
import math
from typing import Callable, Dict, List, Optional, Tuple
from statcalc.utils.exceptions import DomainConfigurationError

logger = logging.getLogger(__name__)


def real_divide(value: float, n: int) -> float:
    return value / n

def check_sentinels(zero, min_seed, max_seed):
    """Fail fast on sentinels that would leave min/max permanently inconsistent."""
    if any(math.isnan(v) for v in (zero, min_seed, max_seed)):
        raise DomainConfigurationError(f"Sentinels must not be NaN: zero={zero}, min_seed={min_seed}, max_seed={max_seed}")
    if not min_seed < max_seed:
        raise DomainConfigurationError(f"min_seed ({min_seed}) must be less than max_seed ({max_seed})")


class RunningStatAccumulator:
    """
    Online statistics over a stream of (possibly pre-aggregated) samples.

    Keeps running sum, sum of squares, min, max, byte counters and a sorted
    value -> occurrence count table, which answers median/percentile queries
    without retaining the raw samples.

    Sentinels:
        zero     - returned by percentile()/median() when nothing was recorded
        min_seed - initial max, so the first observation always replaces it
        max_seed - initial min, so the first observation always replaces it

    `divide(aggregate, multiplicity)` turns an aggregate value into the value of
    one observation. Integral domains round instead of dividing exactly.

    Not thread safe. Give each producer its own accumulator and combine them
    with merge_from() under an external lock, or keep a single owner.
    """
    __slots__ = (
        "_zero", "_min_seed", "_max_seed", "_divide",
        "_counts", "_keys", "_modifications",
        "_sum", "_sum_of_squares", "_mean", "_deviation", "_count",
        "_min", "_max", "_received_bytes", "_sent_bytes",
    )

    def __init__(self, zero: float, min_seed: float, max_seed: float,
                 divide: Optional[Callable[[float, int], float]] = None):
        check_sentinels(zero, min_seed, max_seed)
        self._zero = zero
        self._min_seed = min_seed
        self._max_seed = max_seed
        self._divide = divide or real_divide
        self._counts: Dict[float, int] = {}
        self._keys: List[float] = []  # ascending, mirrors self._counts
        self._modifications = 0
        self.reset()

    def reset(self):
        self._counts.clear()
        self._keys.clear()
        self._modifications += 1
        self._sum = 0.0
        self._sum_of_squares = 0.0
        self._mean = 0.0
        self._deviation = 0.0
        self._count = 0
        self._received_bytes = 0
        self._sent_bytes = 0
        self._min = self._max_seed
        self._max = self._min_seed

    clear = reset

    def add_received_bytes(self, n: int):
        self._received_bytes += n

    def add_sent_bytes(self, n: int):
        self._sent_bytes += n

    def record_single(self, value: float):
        self.record_aggregate(value, 1)

    def record_aggregate(self, value: float, multiplicity: int):
        """
        Record `multiplicity` observations whose combined value is `value`
        (e.g. the total elapsed time of N requests).
        """
        if multiplicity == 0:
            logger.debug("Ignoring aggregate %r with multiplicity 0", value)
            return
        self._count += multiplicity
        self._sum += value
        if multiplicity > 1:
            # n observations of value/n contribute n * (value/n)^2 == value^2 / n
            self._sum_of_squares += value * value / multiplicity
            actual = self._divide(value, multiplicity)
        else:
            self._sum_of_squares += value * value
            actual = value
        self._increment(actual, multiplicity)
        self._update_derived(actual)

    def record_batch_identical(self, value: float, count: int):
        """Record `count` observations that are each equal to `value`."""
        if count == 0:
            logger.debug("Ignoring batch of %r with count 0", value)
            return
        self._count += count
        self._sum += value * count
        self._sum_of_squares += value * value * count
        self._increment(value, count)
        self._update_derived(value)

    def merge_from(self, other: "RunningStatAccumulator"):
        """Fold the frequency table of `other` into this one. Byte counters are not merged."""
        if not isinstance(other, RunningStatAccumulator):
            raise TypeError(f"Cannot merge from {type(other).__name__}, expected RunningStatAccumulator")
        for value, count in list(other._entries()):
            self.record_batch_identical(value, count)

    def _entries(self):
        for key in self._keys:
            yield key, self._counts[key]

    def _increment(self, value: float, n: int):
        if value in self._counts:
            self._counts[value] += n
        else:
            bisect.insort(self._keys, value)
            self._counts[value] = n
            self._modifications += 1

    def _update_derived(self, actual: float):
        if self._count:
            self._mean = self._sum / self._count
            radicand = self._sum_of_squares / self._count - self._mean * self._mean
            # rounding can push the radicand just below zero; report NaN like IEEE sqrt
            self._deviation = math.sqrt(radicand) if radicand >= 0 else math.nan
        else:
            self._mean = 0.0
            self._deviation = 0.0
        if actual > self._max:
            self._max = actual
        if actual < self._min:
            self._min = actual

    def percentile(self, p: float) -> float:
        """
        Value below which roughly a fraction `p` of the observations fall.

        The rank p * (count + 1) is located in the frequency table and the two
        values around it are linearly interpolated. Ranks below 1 give min(),
        ranks at or past count give max().
        """
        if self._count <= 0:
            return self._zero
        rank = p * (self._count + 1)
        if math.isnan(rank):
            return rank
        if rank < 1:
            return self._min
        if rank >= self._count:
            return self._max

        remaining = math.floor(rank)
        frac = rank - remaining
        lower = upper = self._zero
        found_lower = False
        expected = self._modifications
        for key in self._keys:
            if self._modifications != expected:
                break
            if found_lower:
                upper = key
                break
            remaining -= self._counts[key]
            if remaining == 0:
                # upper stays on lower if nothing follows
                found_lower = True
                lower = upper = key
            elif remaining < 0:
                lower = upper = key
                break

        if self._modifications != expected:
            logger.debug("Frequency table changed during percentile scan, returning %r", self._zero)
            return self._zero
        if lower == upper:
            return lower
        return lower + frac * (upper - lower)

    def median(self) -> float:
        return self.percentile(0.5)

    def distribution(self) -> Dict[float, Tuple[float, int]]:
        return {value: (value, count) for value, count in self._entries()}

    def mean(self) -> float:
        return self._mean

    def standard_deviation(self) -> float:
        return self._deviation

    def min(self) -> float:
        return self._min

    def max(self) -> float:
        return self._max

    def count(self) -> int:
        return self._count

    def sum(self) -> float:
        return self._sum

    def sum_of_squares(self) -> float:
        return self._sum_of_squares

    def total_received_bytes(self) -> int:
        return self._received_bytes

    def total_sent_bytes(self) -> int:
        return self._sent_bytes

    def __len__(self):
        return len(self._keys)
