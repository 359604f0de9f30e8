# barrage/store/__init__.py
"""Хранилище журнала: абстракция и фабрика.

Ядро расчётов не зависит от способа хранения: ему нужен только снимок
всех записей (``get_records``) и атомарная запись нового списка
(``save_records``). Реализации:

* :class:`~barrage.store.memory.MemoryRecordStore` - в памяти (тесты, демо);
* :class:`~barrage.store.json_store.JsonRecordStore` - JSON-файл в
  историческом формате журнала.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..domain.reading import RawReading


class AbstractRecordStore(ABC):
    """Интерфейс хранилища суточных записей (ключ - дата)."""

    @abstractmethod
    def get_records(self) -> List[RawReading]:
        """Вернуть снимок всех записей; порядок не гарантируется."""
        ...

    @abstractmethod
    def save_records(self, records: Iterable[RawReading]) -> None:
        """Атомарно заменить содержимое хранилища."""
        ...


def open_store(path: Optional[Union[str, Path]] = None) -> AbstractRecordStore:
    """Хранилище в памяти (``path is None``) или JSON-файл по пути ``path``."""
    if path is None:
        from .memory import MemoryRecordStore

        return MemoryRecordStore()

    from .json_store import JsonRecordStore

    return JsonRecordStore(path)
