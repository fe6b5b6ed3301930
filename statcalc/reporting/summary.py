from dataclasses import dataclass, field, fields
from typing import Dict, Iterable, Optional
import pandas as pd
from config import settings
from statcalc.core.accumulator import RunningStatAccumulator
from statcalc.core.domains import NumericDomain

@dataclass
class StatSummary:
    count: int
    sum: float
    mean: float
    standard_deviation: float
    min: float
    max: float
    median: float
    percentiles: Dict[float, float] = field(default_factory=dict)
    received_bytes: int = 0
    sent_bytes: int = 0

    def to_flat_dict(self) -> dict:
        """
        Flattens the summary into one level; percentiles become p50, p90, p99.9 ...
        """
        items = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "percentiles"}
        for p, value in self.percentiles.items():
            label = percentile_label(p)
            if label in items:
                raise ValueError(f"Percentile {p} collides with an existing key {label}")
            items[label] = value
        return items

def percentile_label(p: float) -> str:
    return "p" + format(round(p * 100, 10), ".12g")

def summarize(acc: RunningStatAccumulator, percentiles: Optional[Iterable[float]] = None,
              domain: Optional[NumericDomain] = None) -> StatSummary:
    """Read-only snapshot of an accumulator, optionally converted to the domain's native values."""
    if percentiles is None:
        percentiles = settings.report.percentiles
    native = domain.to_native if domain is not None else (lambda v: v)
    return StatSummary(
        count=acc.count(),
        sum=acc.sum(),
        mean=acc.mean(),
        standard_deviation=acc.standard_deviation(),
        min=native(acc.min()),
        max=native(acc.max()),
        median=native(acc.median()),
        percentiles={p: native(acc.percentile(p)) for p in percentiles},
        received_bytes=acc.total_received_bytes(),
        sent_bytes=acc.total_sent_bytes(),
    )

def distribution_frame(acc: RunningStatAccumulator) -> pd.DataFrame:
    rows = sorted(acc.distribution().values())
    return pd.DataFrame(rows, columns=["value", "count"])
