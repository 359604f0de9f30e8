import importlib

import pytest

aggregator = importlib.import_module('barrage.core.aggregator')
engine = importlib.import_module('barrage.core.engine')
BALANCE_FIELDS = importlib.import_module('barrage.domain.metrics').BALANCE_FIELDS


@pytest.fixture
def daily(readings, calibration):
    index = {r.date: r for r in readings}
    return [engine.derive(r, engine.previous_day(r, index), calibration) for r in readings]


def test_single_day_average_equals_day(daily):
    for day in daily:
        agg = aggregator.aggregate([day])
        assert agg.count == 1
        for name in BALANCE_FIELDS:
            assert getattr(agg.average, name) == getattr(day, name)
            assert getattr(agg.total, name) == getattr(day, name)


def test_totals_equal_sum_of_rows(daily):
    agg = aggregator.aggregate(daily)
    assert agg.count == len(daily)
    for name in BALANCE_FIELDS:
        assert getattr(agg.total, name) == sum(getattr(d, name) for d in daily)
        assert getattr(agg.average, name) == pytest.approx(getattr(agg.total, name) / len(daily))


def test_accepts_generator(daily):
    agg = aggregator.aggregate(d for d in daily[:2])
    assert agg.count == 2
    assert agg.total.pluie == pytest.approx(2.5)


def test_empty_sequence_is_rejected():
    with pytest.raises(aggregator.EmptyAggregationError):
        aggregator.aggregate([])
    assert issubclass(aggregator.EmptyAggregationError, ValueError)
