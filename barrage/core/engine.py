# barrage/core/engine.py
"""Суточный расчёт водного баланса.

Функция :func:`derive` превращает сырую запись журнала в
:class:`~barrage.domain.metrics.DailyMetrics`:

1. площадь и объём - по кривым тарировки для отметки ``cote``
   (отсутствие отметки в таблице даёт 0, расчёт продолжается);
2. ``gains`` - разность объёмов с записью за предыдущие *календарные*
   сутки, если она есть в журнале; иначе 0;
3. испарение, сток (``defluent``), приток (``affluent``) и процент
   наполнения - по формулам из :mod:`barrage.core.formulas`.

Расчёт детерминирован и не имеет побочных эффектов; промежуточные
величины не округляются. Поиск записи за предыдущие сутки делает
вызывающая сторона (см. :func:`previous_day` и фасад журнала) по
*полному* журналу, а не по отфильтрованной выборке.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Mapping, Optional

from ..domain.metrics import DailyMetrics
from ..domain.reading import RawReading, parse_decimal
from ..domain.reservoir import ReservoirConfig
from .calibration import CalibrationContext
from .formulas import (
    compute_affluent,
    compute_defluent,
    compute_evaporation,
    compute_fill_rate,
)

logger = logging.getLogger(__name__)

ONE_DAY = dt.timedelta(days=1)

_DEFAULT_CONFIG = ReservoirConfig()


def previous_day(
    record: RawReading, index: Mapping[dt.date, RawReading]
) -> Optional[RawReading]:
    """Запись за ``date - 1 день`` из индекса журнала (точное совпадение)."""
    if record.date == dt.date.min:
        return None
    return index.get(record.date - ONE_DAY)


def derive(
    record: RawReading,
    previous: Optional[RawReading],
    context: CalibrationContext,
    config: ReservoirConfig = _DEFAULT_CONFIG,
) -> DailyMetrics:
    """Рассчитать баланс за сутки ``record``.

    ``previous`` должна быть записью за предыдущие календарные сутки или
    ``None``; при ``None`` приращение объёма принимается равным нулю.
    """
    surface_value = context.surface.lookup(record.cote)
    volume_value = context.volume.lookup(record.cote)
    calibrated = surface_value is not None and volume_value is not None
    if not calibrated:
        logger.debug(
            "%s: level %r outside calibration (surface=%s, volume=%s)",
            record.date,
            record.cote,
            surface_value,
            volume_value,
        )

    surface = surface_value or 0.0
    volume = volume_value or 0.0

    gains = 0.0
    if previous is not None:
        gains = volume - context.volume.get(previous.cote)

    vdf = parse_decimal(record.vdf)
    dvr = parse_decimal(record.dvr)
    fuites = parse_decimal(record.fuites)
    transfert = parse_decimal(record.transfert)
    lecture_bac = parse_decimal(record.lecture_bac)

    evaporation = compute_evaporation(surface, lecture_bac, config.pan_coefficient)
    defluent = compute_defluent(evaporation, vdf, dvr, fuites, transfert)

    return DailyMetrics(
        date=record.date,
        cote=parse_decimal(record.cote),
        surface=surface,
        volume=volume,
        gains=gains,
        evaporation=evaporation,
        vdf=vdf,
        dvr=dvr,
        fuites=fuites,
        transfert=transfert,
        defluent=defluent,
        affluent=compute_affluent(gains, defluent),
        pluie=parse_decimal(record.pluie),
        lecture_bac=lecture_bac,
        taux=compute_fill_rate(volume, config.max_storage),
        calibrated=calibrated,
    )
