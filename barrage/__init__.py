# barrage/__init__.py
"""Пакет **barrage** - журнал эксплуатации водохранилища.

Суточные показания (отметка, сбросы, осадки, испаритель) плюс кривые
тарировки «отметка → площадь / объём» дают водный баланс за сутки и
итоги за период:

--- from barrage import ReservoirLogbook, CalibrationContext, derive, aggregate ---

Экспортируемые объекты перечислены в ``__all__`` - это *public API*
пакета.
"""

from __future__ import annotations

from .core.aggregator import EmptyAggregationError, aggregate
from .core.calibration import CalibrationContext, CalibrationTable, normalize_level
from .core.engine import derive
from .core.loader import load, load_async
from .domain.metrics import AggregateMetrics, DailyMetrics
from .domain.reading import RawReading
from .domain.reservoir import ReservoirConfig
from .facade.logbook import ReservoirLogbook

__all__ = [
    "ReservoirLogbook",     # фасад: журнал, расчёт, отчёты
    "CalibrationContext",   # пара кривых тарировки
    "CalibrationTable",     # отметка -> величина
    "normalize_level",
    "load",
    "load_async",
    "derive",               # суточный баланс
    "aggregate",            # итоги и средние
    "EmptyAggregationError",
    "RawReading",
    "DailyMetrics",
    "AggregateMetrics",
    "ReservoirConfig",
]
