# barrage/core/calibration.py
"""Таблицы тарировки водохранилища (отметка -> площадь / объём).

Кривые тарировки задаются таблично с шагом 1 см, поэтому поиск ведётся
не интерполяцией, а точным совпадением *нормализованного ключа* отметки:

* запятая как десятичный разделитель заменяется точкой («105,00» → «105.00»);
* значение форматируется ровно с двумя знаками после точки, округление
  «половина - от нуля» по точному двоичному значению числа.

Ключ - строка, а не ``float``: так «105,00», «105.00» и ``105.0``
гарантированно попадают в одну и ту же ячейку, без сравнения чисел с
плавающей точкой.

Оба справочника передаются в расчёт через явный объект
:class:`CalibrationContext`, глобального состояния модуль не хранит.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple, Union

import numpy as np

from ..constants import LEVEL_DECIMALS
from ..domain.reading import parse_number

Level = Union[str, float, int]

_QUANT = Decimal(1).scaleb(-LEVEL_DECIMALS)  # Decimal("0.01")


def normalize_level(level: Level) -> Optional[str]:
    """Ключ таблицы для отметки ``level`` или ``None``, если это не число.

    >>> normalize_level("105,00"), normalize_level(105), normalize_level(104.125)
    ('105.00', '105.00', '104.13')
    """
    number = parse_number(level)
    if number is None:
        return None
    exact = Decimal(number)
    with localcontext() as ctx:
        # точности хватает на все цифры целой части плюс два знака
        ctx.prec = max(ctx.prec, exact.adjusted() + LEVEL_DECIMALS + 2)
        quantized = exact.quantize(_QUANT, rounding=ROUND_HALF_UP)
    if quantized.is_zero():
        quantized = abs(quantized)  # "-0.00" -> "0.00"
    return format(quantized, "f")


class CalibrationTable:
    """Неизменяемый справочник «нормализованная отметка → величина».

    ``lookup`` различает *отсутствие* ключа (``None``) и нулевое значение;
    подстановку нуля делают вызывающие стороны через :meth:`get`.
    """

    __slots__ = ("_data",)

    def __init__(self, entries: Optional[Mapping[str, float]] = None) -> None:
        self._data: Mapping[str, float] = MappingProxyType(dict(entries or {}))

    # ------------------------------------------------------------------
    # Поиск
    # ------------------------------------------------------------------

    def lookup(self, level: Level) -> Optional[float]:
        key = normalize_level(level)
        if key is None:
            return None
        return self._data.get(key)

    def get(self, level: Level, default: float = 0.0) -> float:
        value = self.lookup(level)
        return default if value is None else value

    def __contains__(self, level: object) -> bool:
        if not isinstance(level, (str, int, float)):
            return False
        return self.lookup(level) is not None

    # ------------------------------------------------------------------
    # Служебное
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def items(self):
        return self._data.items()

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Отметки и величины, упорядоченные по возрастанию отметки (для графиков)."""
        if not self._data:
            return np.array([], dtype=float), np.array([], dtype=float)
        levels = np.array([float(k) for k in self._data], dtype=float)
        values = np.array(list(self._data.values()), dtype=float)
        order = np.argsort(levels, kind="stable")
        return levels[order], values[order]

    def bounds(self) -> Optional[Tuple[float, float]]:
        """``(min, max)`` отметок таблицы или ``None`` для пустой таблицы."""
        levels, _ = self.as_arrays()
        if levels.size == 0:
            return None
        return float(levels[0]), float(levels[-1])

    def __repr__(self) -> str:
        return f"CalibrationTable({len(self._data)} entries)"


@dataclass(slots=True, frozen=True)
class CalibrationContext:
    """Пара кривых тарировки, передаваемая в расчёт явно."""

    surface: CalibrationTable = field(default_factory=CalibrationTable)
    volume: CalibrationTable = field(default_factory=CalibrationTable)

    @classmethod
    def empty(cls) -> "CalibrationContext":
        """Контекст без данных: любая отметка считается вне тарировки."""
        return cls()

    @property
    def loaded(self) -> bool:
        return len(self.surface) > 0 and len(self.volume) > 0
