# barrage/domain/metrics.py
"""Контейнеры расчётных величин водного баланса.

* **DailyMetrics** - результат расчёта за одни сутки (поверхность, объём,
  приращение объёма, испарение, приток/сток, процент наполнения) вместе с
  уже разобранными исходными показаниями. Итоги строятся только из этих
  значений, поэтому сумма строк отчёта всегда совпадает с итогом.
* **BalanceFigures** - набор суммируемых величин (итог или среднее).
* **AggregateMetrics** - итог и среднее по последовательности суток.

Все величины хранятся без округления; округление - задача отображения.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, fields
from typing import Dict

# Величины, которые имеет смысл суммировать за период
BALANCE_FIELDS = (
    "gains",
    "evaporation",
    "vdf",
    "dvr",
    "fuites",
    "transfert",
    "affluent",
    "defluent",
    "pluie",
)


@dataclass(slots=True, frozen=True)
class DailyMetrics:
    """Derived water balance for one day (Hm³ unless noted)."""

    date: dt.date
    cote: float          # м
    surface: float       # га, по кривой тарировки
    volume: float        # Hm³, по кривой тарировки
    gains: float         # приращение объёма к предыдущим суткам
    evaporation: float
    vdf: float
    dvr: float
    fuites: float
    transfert: float
    defluent: float      # сток (испарение + сбросы + потери)
    affluent: float      # приток = gains + defluent
    pluie: float         # мм
    lecture_bac: float   # мм
    taux: float          # % наполнения
    calibrated: bool = True  # отметка найдена в обеих таблицах

    def as_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(slots=True, frozen=True)
class BalanceFigures:
    gains: float = 0.0
    evaporation: float = 0.0
    vdf: float = 0.0
    dvr: float = 0.0
    fuites: float = 0.0
    transfert: float = 0.0
    affluent: float = 0.0
    defluent: float = 0.0
    pluie: float = 0.0


@dataclass(slots=True, frozen=True)
class AggregateMetrics:
    """Итог (``total``) и среднее (``average``) по ``count`` суткам."""

    count: int
    total: BalanceFigures
    average: BalanceFigures
