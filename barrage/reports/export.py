# barrage/reports/export.py
"""Табличное представление журнала (pandas) и выгрузка в CSV.

Заголовки столбцов совпадают с печатной формой журнала. ``to_frame``
возвращает значения без округления; округление до отображаемой
точности выполняется только при выгрузке (:func:`export_csv`).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Union

import pandas as pd

from ..domain.metrics import DailyMetrics

logger = logging.getLogger(__name__)

# атрибут DailyMetrics -> (заголовок, знаков после запятой)
COLUMNS: Dict[str, tuple] = {
    "date": ("Date", None),
    "cote": ("Cote (m)", 2),
    "surface": ("Surface (ha)", 3),
    "volume": ("Volume (Hm³)", 3),
    "gains": ("Gains (Hm³)", 3),
    "evaporation": ("Évaporation (Hm³)", 3),
    "vdf": ("VDF (Hm³)", 3),
    "dvr": ("DVR (Hm³)", 3),
    "fuites": ("Fuites (Hm³)", 3),
    "transfert": ("Transfert (Hm³)", 3),
    "affluent": ("Affluent (Hm³)", 3),
    "defluent": ("Défluent (Hm³)", 3),
    "pluie": ("Pluie (mm)", 1),
    "lecture_bac": ("Lecture Bac (mm)", 1),
    "taux": ("Taux (%)", 2),
}

DATE_FORMAT = "%d/%m/%Y"


def to_frame(metrics: Iterable[DailyMetrics]) -> pd.DataFrame:
    """DataFrame по суткам, упорядоченный по дате (по возрастанию)."""
    rows = []
    for m in sorted(metrics, key=lambda m: m.date):
        values = m.as_dict()
        rows.append({label: values[attr] for attr, (label, _) in COLUMNS.items()})
    return pd.DataFrame.from_records(rows, columns=[label for label, _ in COLUMNS.values()])


def rounded(frame: pd.DataFrame) -> pd.DataFrame:
    """Копия ``frame`` с точностью печатной формы и датой ``dd/mm/YYYY``."""
    out = frame.copy()
    for attr, (label, digits) in COLUMNS.items():
        if label not in out.columns:
            continue
        if digits is None:
            out[label] = [d.strftime(DATE_FORMAT) for d in out[label]]
        else:
            out[label] = out[label].round(digits)
    return out


def export_csv(metrics: Iterable[DailyMetrics], path: Union[str, Path]) -> Path:
    path = Path(path)
    frame = rounded(to_frame(metrics))
    frame.to_csv(path, index=False, encoding="utf-8")
    logger.info("Exported %d rows to %s", len(frame), path)
    return path
