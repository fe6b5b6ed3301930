import pytest
from statcalc.core.accumulator import RunningStatAccumulator
from statcalc.core.domains import LONG, REAL, DomainFactory

@pytest.fixture
def real_acc():
    """Accumulator over plain real measurements."""
    return REAL.create_accumulator()

@pytest.fixture
def long_acc():
    """Accumulator over integral durations (rounded division)."""
    return LONG.create_accumulator()

@pytest.fixture
def populated_acc(real_acc):
    """Mix of single, aggregate and repeated observations plus byte counters."""
    for v in (5, 1, 3, 3, 8):
        real_acc.record_single(v)
    real_acc.record_aggregate(12, 3)
    real_acc.record_batch_identical(7, 2)
    real_acc.add_received_bytes(1024)
    real_acc.add_sent_bytes(256)
    return real_acc

@pytest.fixture
def plain_acc():
    """Accumulator built directly from sentinels, without a domain."""
    return RunningStatAccumulator(-1.0, -1000.0, 1000.0)

@pytest.fixture
def isolated_domains(monkeypatch):
    """Lets a test register domains without leaking them into other tests."""
    monkeypatch.setattr(DomainFactory, "_domains", dict(DomainFactory._domains))
    return DomainFactory
