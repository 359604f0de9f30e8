# barrage/facade/logbook.py
"""Высокоуровневый *facade* журнала эксплуатации водохранилища.

Класс **ReservoirLogbook** связывает хранилище записей, кривые тарировки
и параметры водохранилища:

1. ведение журнала (добавление/изменение/удаление суточных записей);
2. расчёт суточных величин (``derive_for_record``) - запись за
   предыдущие сутки ищется по *полному* журналу через индекс по дате;
3. итоги за выборку (``aggregate``), страницы списка, выгрузка в
   DataFrame/CSV, текстовые отчёты и графики.

Каждый вызов работает со свежим снимком хранилища и ничего не кэширует,
кроме загруженных таблиц тарировки.
"""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from ..core import loader
from ..core.aggregator import aggregate
from ..core.calibration import CalibrationContext
from ..core.engine import derive, previous_day
from ..core.selection import Page, by_date, by_month, by_period, paginate
from ..domain.metrics import AggregateMetrics, DailyMetrics
from ..domain.reading import RawReading, parse_date
from ..domain.reservoir import ReservoirConfig
from ..reports import export
from ..reports.summary import Selection, render_report
from ..store import AbstractRecordStore
from ..visualization import plots

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ReservoirLogbook:
    """Единая точка входа для UI, отчётов и рассылок."""

    # ------------------------------------------------------------------
    # Конструктор и тарировка
    # ------------------------------------------------------------------

    def __init__(
        self,
        store: AbstractRecordStore,
        calibration: Optional[CalibrationContext] = None,
        config: Optional[ReservoirConfig] = None,
    ) -> None:
        self.store = store
        self.calibration = calibration or CalibrationContext.empty()
        self.config = config or ReservoirConfig()

    def load_calibration(self, surface_path: PathLike, volume_path: PathLike) -> CalibrationContext:
        self.calibration = loader.load_context(
            surface_path, volume_path, batch_size=self.config.load_batch_size
        )
        return self.calibration

    async def load_calibration_async(self, surface_text: str, volume_text: str) -> CalibrationContext:
        """Загрузка тарировки в фоне; до её окончания площадь и объём равны 0."""
        self.calibration = await loader.load_context_async(
            surface_text, volume_text, batch_size=self.config.load_batch_size
        )
        return self.calibration

    # ------------------------------------------------------------------
    # Снимок журнала
    # ------------------------------------------------------------------

    def records(self) -> List[RawReading]:
        return self.store.get_records()

    @staticmethod
    def _index(records: Iterable[RawReading]) -> Dict[dt.date, RawReading]:
        index: Dict[dt.date, RawReading] = {}
        for r in records:
            index.setdefault(r.date, r)
        return index

    # ------------------------------------------------------------------
    # Расчёт
    # ------------------------------------------------------------------

    def derive_for_record(self, day: Union[dt.date, str]) -> DailyMetrics:
        """Суточные величины для записи за ``day`` (KeyError, если записи нет)."""
        day = parse_date(day)
        index = self._index(self.records())
        try:
            record = index[day]
        except KeyError:
            raise KeyError(f"No reading recorded for {day.isoformat()}") from None
        return derive(record, previous_day(record, index), self.calibration, self.config)

    def derive_many(self, records: Optional[Iterable[RawReading]] = None) -> List[DailyMetrics]:
        """Расчёт для выборки ``records`` (по умолчанию - весь журнал), по дате."""
        snapshot = self.records()
        index = self._index(snapshot)
        selected = snapshot if records is None else list(records)
        return [
            derive(r, previous_day(r, index), self.calibration, self.config)
            for r in sorted(selected, key=lambda r: r.date)
        ]

    def aggregate(self, records: Optional[Iterable[RawReading]] = None) -> AggregateMetrics:
        return aggregate(self.derive_many(records))

    # ------------------------------------------------------------------
    # Ведение журнала
    # ------------------------------------------------------------------

    def upsert(self, entry: Mapping[str, Any]) -> Tuple[RawReading, bool]:
        """Добавить запись или обновить запись за ту же дату.

        Возвращает ``(запись, created)``.
        """
        incoming = RawReading.from_mapping(entry)
        records = self.records()
        for i, existing in enumerate(records):
            if existing.date == incoming.date:
                records[i] = existing.merged(entry)
                self.store.save_records(records)
                logger.info("Updated reading for %s", incoming.date)
                return records[i], False

        records.append(incoming)
        self.store.save_records(records)
        logger.info("Added reading for %s", incoming.date)
        return incoming, True

    def delete(self, day: Union[dt.date, str]) -> bool:
        day = parse_date(day)
        records = self.records()
        kept = [r for r in records if r.date != day]
        if len(kept) == len(records):
            return False
        self.store.save_records(kept)
        logger.info("Deleted reading for %s", day)
        return True

    # ------------------------------------------------------------------
    # Выборки и страницы
    # ------------------------------------------------------------------

    def by_date(self, day) -> List[RawReading]:
        return by_date(self.records(), day)

    def by_month(self, month: str) -> List[RawReading]:
        return by_month(self.records(), month)

    def by_period(self, start, end) -> List[RawReading]:
        return by_period(self.records(), start, end)

    def page(self, number: int = 1, records: Optional[Iterable[RawReading]] = None) -> Page[DailyMetrics]:
        """Страница таблицы журнала (новые сутки сверху)."""
        rows = self.derive_many(records)
        rows.reverse()
        return paginate(rows, number, self.config.items_per_page)

    # ------------------------------------------------------------------
    # Выгрузка, отчёты, графики
    # ------------------------------------------------------------------

    def to_frame(self, records: Optional[Iterable[RawReading]] = None) -> pd.DataFrame:
        return export.to_frame(self.derive_many(records))

    def export_csv(self, path: PathLike, records: Optional[Iterable[RawReading]] = None) -> Path:
        return export.export_csv(self.derive_many(records), path)

    def report(
        self,
        records: Optional[Iterable[RawReading]] = None,
        selection: Optional[Selection] = None,
        style: str = "plain",
        generated_at: Optional[dt.datetime] = None,
    ) -> str:
        return render_report(
            self.derive_many(records),
            selection=selection,
            style=style,
            reservoir_name=self.config.name,
            generated_at=generated_at,
        )

    def plot_levels(self, records: Optional[Iterable[RawReading]] = None, show: bool = True):
        return plots.plot_levels(self.to_frame(records), show=show)

    def plot_water_balance(self, records: Optional[Iterable[RawReading]] = None, show: bool = True):
        return plots.plot_water_balance(self.to_frame(records), show=show)
