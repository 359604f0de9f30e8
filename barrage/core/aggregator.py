# barrage/core/aggregator.py
"""Итоги и средние за период по уже рассчитанным суточным записям."""

from __future__ import annotations

from typing import Iterable

from ..domain.metrics import BALANCE_FIELDS, AggregateMetrics, BalanceFigures, DailyMetrics


class EmptyAggregationError(ValueError):
    """Raised when totals/averages are requested for an empty sequence."""


def aggregate(metrics: Iterable[DailyMetrics]) -> AggregateMetrics:
    """Суммы и средние по ``metrics``.

    Складываются ровно те значения, что вернул расчёт для каждой строки
    (в порядке следования), поэтому итог равен сумме показанных строк.
    Для пустой последовательности среднее не определено -
    :class:`EmptyAggregationError`.
    """
    items = list(metrics)
    if not items:
        raise EmptyAggregationError("Cannot aggregate an empty sequence of daily metrics.")

    totals = {name: 0.0 for name in BALANCE_FIELDS}
    for item in items:
        for name in BALANCE_FIELDS:
            totals[name] += getattr(item, name)

    count = len(items)
    return AggregateMetrics(
        count=count,
        total=BalanceFigures(**totals),
        average=BalanceFigures(**{k: v / count for k, v in totals.items()}),
    )
