import math
from statcalc.core.accumulator import RunningStatAccumulator

PROBE_PERCENTILES = [0.0, 0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99, 1.0]

def record_all(acc: RunningStatAccumulator, values):
    """Record every value as a single observation and return the accumulator."""
    for v in values:
        acc.record_single(v)
    return acc

def snapshot(acc: RunningStatAccumulator) -> dict:
    """Everything observable about an accumulator, for equality checks."""
    return {
        "count": acc.count(),
        "sum": acc.sum(),
        "sum_of_squares": acc.sum_of_squares(),
        "mean": acc.mean(),
        "standard_deviation": acc.standard_deviation(),
        "min": acc.min(),
        "max": acc.max(),
        "received_bytes": acc.total_received_bytes(),
        "sent_bytes": acc.total_sent_bytes(),
        "distribution": acc.distribution(),
        "percentiles": [acc.percentile(p) for p in PROBE_PERCENTILES],
    }

def assert_same_state(a: RunningStatAccumulator, b: RunningStatAccumulator):
    left, right = snapshot(a), snapshot(b)
    for key in left:
        if key in ("mean", "standard_deviation", "sum", "sum_of_squares"):
            assert math.isclose(left[key], right[key], rel_tol=1e-12, abs_tol=1e-12), f"{key}: {left[key]} != {right[key]}"
        elif key == "percentiles":
            for p, x, y in zip(PROBE_PERCENTILES, left[key], right[key]):
                assert math.isclose(x, y, rel_tol=1e-12, abs_tol=1e-12), f"percentile({p}): {x} != {y}"
        else:
            assert left[key] == right[key], f"{key}: {left[key]} != {right[key]}"
