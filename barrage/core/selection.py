# barrage/core/selection.py
"""Выборки из журнала (день / месяц / период) и постраничный вывод.

Выборка лишь определяет *какие* сутки показывать; значения для них
всегда считаются по полному журналу, поэтому фильтр или номер страницы
не влияют на рассчитанные величины.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Generic, Iterable, List, Sequence, Tuple, TypeVar

from ..constants import ITEMS_PER_PAGE
from ..domain.reading import RawReading, parse_date

T = TypeVar("T")

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(month: str) -> Tuple[int, int]:
    """``"YYYY-MM"`` -> ``(year, month)``."""
    match = _MONTH_RE.match(month.strip()) if month else None
    if not match:
        raise ValueError(f"Month must be given as YYYY-MM, got {month!r}")
    year, mon = int(match.group(1)), int(match.group(2))
    if not 1 <= mon <= 12:
        raise ValueError(f"Invalid month number in {month!r}")
    return year, mon


def sort_by_date(records: Iterable[RawReading]) -> List[RawReading]:
    return sorted(records, key=lambda r: r.date)


def by_date(records: Iterable[RawReading], day) -> List[RawReading]:
    day = parse_date(day)
    return [r for r in records if r.date == day]


def by_month(records: Iterable[RawReading], month: str) -> List[RawReading]:
    year, mon = parse_month(month)
    return sort_by_date(r for r in records if r.date.year == year and r.date.month == mon)


def by_period(records: Iterable[RawReading], start, end) -> List[RawReading]:
    """Записи с ``start`` по ``end`` включительно."""
    start, end = parse_date(start), parse_date(end)
    if start > end:
        raise ValueError(f"Period start {start} is after its end {end}")
    return sort_by_date(r for r in records if start <= r.date <= end)


# ---------------------------------------------------------------------------
# Постраничный вывод
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    number: int        # 1-based, 0 если данных нет
    total_pages: int
    total_items: int

    @property
    def has_previous(self) -> bool:
        return self.number > 1

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages


def paginate(items: Sequence[T], page: int = 1, per_page: int = ITEMS_PER_PAGE) -> Page[T]:
    """Страница ``page`` из ``items``; номер ограничивается диапазоном [1, total]."""
    if per_page < 1:
        raise ValueError("per_page must be at least 1.")
    total_pages = math.ceil(len(items) / per_page)
    if total_pages == 0:
        return Page(items=[], number=0, total_pages=0, total_items=0)

    number = min(max(page, 1), total_pages)
    start = (number - 1) * per_page
    return Page(
        items=list(items[start:start + per_page]),
        number=number,
        total_pages=total_pages,
        total_items=len(items),
    )
