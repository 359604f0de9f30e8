# barrage/store/memory.py

from __future__ import annotations

from typing import Iterable, List, Optional

from . import AbstractRecordStore
from ..domain.reading import RawReading


class MemoryRecordStore(AbstractRecordStore):
    """Volatile store; keeps its own copy of the list."""

    def __init__(self, records: Optional[Iterable[RawReading]] = None) -> None:
        self._records: List[RawReading] = list(records or [])

    def get_records(self) -> List[RawReading]:
        return list(self._records)

    def save_records(self, records: Iterable[RawReading]) -> None:
        self._records = list(records)
