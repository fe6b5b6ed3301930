import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from config import settings
from statcalc.core.accumulator import RunningStatAccumulator, check_sentinels, real_divide
from statcalc.utils.exceptions import DomainConfigurationError, UnsupportedDomainError

logger = logging.getLogger(__name__)


def rounded_divide(value: float, n: int) -> float:
    """Per-observation value rounded half-up to a whole unit (2.5 -> 3, -2.5 -> -2)."""
    res = value / n
    if not math.isfinite(res):
        return res
    return float(math.floor(res + 0.5))

def truncate(value: float):
    if not math.isfinite(value):
        return value
    return int(value)


@dataclass(frozen=True)
class NumericDomain:
    """Sentinels plus the divide/convert policy of one kind of measurement."""
    name: str
    zero: float
    min_seed: float
    max_seed: float
    divide: Callable[[float, int], float] = real_divide
    to_native: Callable[[float], object] = float

    def __post_init__(self):
        check_sentinels(self.zero, self.min_seed, self.max_seed)

    def create_accumulator(self) -> RunningStatAccumulator:
        return RunningStatAccumulator(self.zero, self.min_seed, self.max_seed, divide=self.divide)


REAL = NumericDomain("real", 0.0, -math.inf, math.inf)
LONG = NumericDomain("long", 0, -(2 ** 63), 2 ** 63 - 1, rounded_divide, truncate)
INTEGER = NumericDomain("integer", 0, -(2 ** 31), 2 ** 31 - 1, rounded_divide, truncate)


class DomainFactory:
    _domains: Dict[str, NumericDomain] = {d.name: d for d in (REAL, LONG, INTEGER)}

    @staticmethod
    def create(name: Optional[str] = None) -> NumericDomain:
        domain_name = (name or settings.default_domain).lower()
        domain = DomainFactory._domains.get(domain_name)
        if domain is None:
            raise UnsupportedDomainError(f"Unsupported numeric domain: {domain_name}")
        logger.debug("Resolved numeric domain %s", domain_name)
        return domain

    @staticmethod
    def register(domain: NumericDomain, replace: bool = False):
        if not isinstance(domain, NumericDomain):
            raise TypeError(f"Expected NumericDomain, got {type(domain).__name__}")
        domain_name = domain.name.lower()
        if domain_name in DomainFactory._domains and not replace:
            raise DomainConfigurationError(f"Numeric domain already registered: {domain_name}")
        DomainFactory._domains[domain_name] = domain
        logger.debug("Registered numeric domain %s", domain.name)

    @staticmethod
    def available() -> List[str]:
        return sorted(DomainFactory._domains)
