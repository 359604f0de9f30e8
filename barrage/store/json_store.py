# barrage/store/json_store.py
"""Журнал в JSON-файле.

Файл содержит список объектов вида::

    {"date": "2024-03-02", "cote": "105,00", "vdf": "1.2", ...,
     "lectureBac": "8"}

Значения хранятся в том виде, в каком их ввели. Запись выполняется
через временный файл и ``os.replace``, поэтому читатель никогда не
увидит частично записанный журнал.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from . import AbstractRecordStore
from ..domain.reading import RawReading

logger = logging.getLogger(__name__)


class JsonRecordStore(AbstractRecordStore):

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8") -> None:
        self.path = Path(path)
        self.encoding = encoding

    def get_records(self) -> List[RawReading]:
        if not self.path.exists():
            logger.warning("Record file %s not found; starting with an empty log", self.path)
            return []

        with self.path.open("r", encoding=self.encoding) as fh:
            raw = json.load(fh)
        if not isinstance(raw, list):
            raise ValueError(f"{self.path}: expected a JSON list of readings")

        records = [RawReading.from_mapping(item) for item in raw]
        logger.info("Loaded %d readings from %s", len(records), self.path)
        return records

    def save_records(self, records: Iterable[RawReading]) -> None:
        payload = [r.to_dict() for r in records]
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=self.encoding) as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info("Saved %d readings to %s", len(payload), self.path)
