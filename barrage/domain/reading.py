# barrage/domain/reading.py
"""Суточная запись журнала (сырые показания).

Запись хранится *как есть*: числовые поля могут быть строками с запятой
в качестве десятичного разделителя («105,00») или числами. Преобразование
в ``float`` выполняет :func:`parse_decimal` в момент расчёта, поэтому
журнал никогда не теряет исходное написание значения.

Имена полей в JSON совпадают с историческим форматом хранилища:
``date, cote, vdf, dvr, fuites, transfert, pluie, lectureBac``.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional, Union

RawValue = Union[str, float, int, None]

# Поле dataclass -> ключ в хранилище
FIELD_KEYS: Dict[str, str] = {
    "cote": "cote",
    "vdf": "vdf",
    "dvr": "dvr",
    "fuites": "fuites",
    "transfert": "transfert",
    "pluie": "pluie",
    "lecture_bac": "lectureBac",
}


def parse_number(value: RawValue) -> Optional[float]:
    """Parse a decimal that may use a comma separator; ``None`` if it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        else:
            # BOM из выгрузок Excel отбрасывается так же, как пробелы
            number = float(str(value).replace(",", ".").strip().strip("\ufeff").strip())
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def parse_decimal(value: RawValue) -> float:
    """Parse a raw numeric field; empty, missing or invalid input gives 0."""
    number = parse_number(value)
    return 0.0 if number is None else number


def parse_date(value: Any) -> dt.date:
    """Дата записи из ``date``/``datetime`` или ISO-строки ``YYYY-MM-DD``."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if not value:
        raise ValueError("Reading date is required.")
    try:
        return dt.date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"Invalid reading date {value!r}") from exc


def _default_zero(value: RawValue) -> RawValue:
    # пустое поле формы сохраняется как "0"
    if value is None or (isinstance(value, str) and not value.strip()):
        return "0"
    return value


@dataclass(slots=True, frozen=True)
class RawReading:
    """Сырые показания за одни сутки; ``date`` - уникальный ключ журнала."""

    date: dt.date
    cote: RawValue = "0"         # отметка уровня, м
    vdf: RawValue = "0"          # сброс через водосброс, Hm³
    dvr: RawValue = "0"          # донный водовыпуск, Hm³
    fuites: RawValue = "0"       # фильтрационные потери, Hm³
    transfert: RawValue = "0"    # переброска стока, Hm³
    pluie: RawValue = "0"        # осадки, мм
    lecture_bac: RawValue = "0"  # показание испарителя, мм

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawReading":
        """Build a reading from a stored/entered mapping, defaulting numbers to "0"."""
        values = {
            field: _default_zero(data.get(key)) for field, key in FIELD_KEYS.items()
        }
        return cls(date=parse_date(data.get("date")), **values)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"date": self.date.isoformat()}
        for field, key in FIELD_KEYS.items():
            out[key] = getattr(self, field)
        return out

    def merged(self, data: Mapping[str, Any]) -> "RawReading":
        """Новая запись: поля ``data`` поверх текущих (дата не меняется)."""
        changes = {
            field: _default_zero(data[key])
            for field, key in FIELD_KEYS.items()
            if key in data
        }
        return replace(self, **changes)
