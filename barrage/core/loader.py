# barrage/core/loader.py
"""Загрузка кривых тарировки из табличного текста (CSV).

Формат строки: ``отметка<разделитель>величина``. Разделитель полей -
``;`` (если он есть в строке), иначе ``,``. В обоих полях запятая может
служить десятичным разделителем: «105,00;1200,5».

Строки, которые не разбираются как два числа (заголовки, мусор), молча
пропускаются - это штатная ситуация для выгрузок из Excel.

Файлы тарировки бывают на десятки тысяч строк, поэтому текст
обрабатывается пакетами по ``batch_size`` строк. Асинхронный вариант
:func:`load_async` отдаёт управление циклу событий между пакетами, чтобы
не блокировать вызывающую сторону; результат идентичен :func:`load`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..constants import LOAD_BATCH_SIZE
from ..domain.reading import parse_number
from .calibration import CalibrationContext, CalibrationTable, normalize_level

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def parse_line(line: str) -> Optional[Tuple[str, float]]:
    """Return ``(level_key, quantity)`` for a valid line, ``None`` otherwise."""
    text = line.strip()
    if not text:
        return None
    parts = text.split(";") if ";" in text else text.split(",")
    if len(parts) < 2:
        return None

    level = parse_number(parts[0])
    quantity = parse_number(parts[1])
    if level is None or quantity is None:
        return None
    key = normalize_level(level)
    if key is None:
        return None
    return key, quantity


def _batches(text: str, batch_size: int) -> Iterator[List[str]]:
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1.")
    lines = iter(text.splitlines())
    while True:
        batch = list(islice(lines, batch_size))
        if not batch:
            return
        yield batch


@dataclass(slots=True)
class _Accumulator:
    """Накопитель записей таблицы и статистики загрузки."""

    name: str
    entries: Dict[str, float]
    kept: int = 0
    skipped: int = 0

    def feed(self, batch: List[str]) -> None:
        for line in batch:
            if not line.strip():
                continue
            parsed = parse_line(line)
            if parsed is None:
                self.skipped += 1
                logger.debug("%s: skipping unparseable line %r", self.name, line)
                continue
            key, quantity = parsed
            self.entries[key] = quantity  # последнее значение побеждает
            self.kept += 1

    def finish(self) -> CalibrationTable:
        table = CalibrationTable(self.entries)
        logger.info(
            "%s: %d rows parsed, %d skipped, %d distinct levels",
            self.name,
            self.kept,
            self.skipped,
            len(table),
        )
        return table


# ---------------------------------------------------------------------------
# Публичное API
# ---------------------------------------------------------------------------


def load(text: str, batch_size: int = LOAD_BATCH_SIZE, name: str = "calibration") -> CalibrationTable:
    """Синхронная загрузка таблицы из текста."""
    acc = _Accumulator(name, {})
    for batch in _batches(text, batch_size):
        acc.feed(batch)
    return acc.finish()


async def load_async(
    text: str, batch_size: int = LOAD_BATCH_SIZE, name: str = "calibration"
) -> CalibrationTable:
    """Та же загрузка, но с передачей управления циклу событий между пакетами."""
    acc = _Accumulator(name, {})
    for i, batch in enumerate(_batches(text, batch_size)):
        if i:
            await asyncio.sleep(0)
        acc.feed(batch)
        logger.debug("%s: batch %d done (%d lines)", name, i + 1, len(batch))
    return acc.finish()


def load_file(path: PathLike, batch_size: int = LOAD_BATCH_SIZE, encoding: str = "utf-8-sig") -> CalibrationTable:
    path = Path(path)
    return load(path.read_text(encoding=encoding), batch_size, name=path.name)


def load_context(
    surface_path: PathLike,
    volume_path: PathLike,
    batch_size: int = LOAD_BATCH_SIZE,
    encoding: str = "utf-8-sig",
) -> CalibrationContext:
    """Прочитать обе кривые (площадь и объём) из файлов."""
    return CalibrationContext(
        surface=load_file(surface_path, batch_size, encoding),
        volume=load_file(volume_path, batch_size, encoding),
    )


async def load_context_async(
    surface_text: str, volume_text: str, batch_size: int = LOAD_BATCH_SIZE
) -> CalibrationContext:
    """Фоновая загрузка обеих кривых из уже прочитанного текста."""
    surface = await load_async(surface_text, batch_size, name="surface")
    volume = await load_async(volume_text, batch_size, name="volume")
    return CalibrationContext(surface=surface, volume=volume)
