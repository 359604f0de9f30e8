# barrage/reports/summary.py
"""Текстовые сводки для отправки (мессенджер, почта, SMS, буфер обмена).

Один генератор вместо нескольких почти одинаковых:

* одна запись - **суточный отчёт** (основные данные + водный баланс);
* несколько - **отчёт за период**: итоги (через
  :func:`~barrage.core.aggregator.aggregate`) и подробности по дням.

Стиль ``"markdown"`` выделяет ключевые строки звёздочками (разметка
мессенджеров), ``"plain"`` - обычный текст.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..constants import RESERVOIR_NAME
from ..core.aggregator import EmptyAggregationError, aggregate
from ..core.selection import parse_month
from ..domain.metrics import DailyMetrics

SEPARATOR = "-" * 32
STYLES = ("plain", "markdown")


def format_date(day: dt.date) -> str:
    return day.strftime("%d/%m/%Y")


@dataclass(slots=True, frozen=True)
class Selection:
    """Как была получена выборка: месяц ``YYYY-MM`` или период ``start..end``."""

    month: Optional[str] = None
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None


def report_title(metrics: Sequence[DailyMetrics], selection: Optional[Selection] = None) -> str:
    if len(metrics) == 1:
        return f"RAPPORT JOURNALIER - {format_date(metrics[0].date)}"
    if selection is not None and selection.month:
        year, month = parse_month(selection.month)
        return f"RAPPORT MENSUEL - {month:02d}/{year}"
    if selection is not None and selection.start and selection.end:
        return (
            f"RAPPORT PÉRIODE ({format_date(selection.start)} "
            f"au {format_date(selection.end)})"
        )
    return f"RAPPORT PÉRIODE ({len(metrics)} jours)"


def render_report(
    metrics: Sequence[DailyMetrics],
    selection: Optional[Selection] = None,
    style: str = "plain",
    reservoir_name: str = RESERVOIR_NAME,
    generated_at: Optional[dt.datetime] = None,
) -> str:
    """Собрать текст отчёта по рассчитанным суткам ``metrics``."""
    if style not in STYLES:
        raise ValueError(f"Unknown report style '{style}'")
    if not metrics:
        raise EmptyAggregationError("Nothing to report: no daily metrics selected.")

    def em(text: str) -> str:
        return f"*{text}*" if style == "markdown" else text

    days = sorted(metrics, key=lambda m: m.date)
    lines: List[str] = [em(report_title(days, selection)), reservoir_name, ""]

    if len(days) == 1:
        d = days[0]
        lines += [
            SEPARATOR,
            em("DONNÉES PRINCIPALES:"),
            SEPARATOR,
            f"Cote: {d.cote:.2f} m",
            f"Surface: {d.surface:.3f} ha",
            f"Volume: {d.volume:.3f} Hm³",
            "",
            SEPARATOR,
            em("BILAN HYDRIQUE:"),
            SEPARATOR,
            f"Affluent: {em(f'{d.affluent:.3f} Hm³')}",
            f"Défluent: {em(f'{d.defluent:.3f} Hm³')}",
            f"   - Évaporation: {d.evaporation:.3f} Hm³",
            f"   - VDF: {d.vdf:.3f} Hm³",
            f"   - DVR: {d.dvr:.3f} Hm³",
            f"   - Transfert: {d.transfert:.3f} Hm³",
            f"Pluie: {d.pluie:.1f} mm",
        ]
    else:
        agg = aggregate(days)
        t = agg.total
        lines += [
            SEPARATOR,
            em(f"TOTAUX ({agg.count} jours):"),
            SEPARATOR,
            f"Affluent Total: {em(f'{t.affluent:.3f} Hm³')}",
            f"Défluent Total: {em(f'{t.defluent:.3f} Hm³')}",
            f"Évaporation: {t.evaporation:.3f} Hm³",
            f"VDF: {t.vdf:.3f} Hm³",
            f"DVR: {t.dvr:.3f} Hm³",
            f"Transfert: {t.transfert:.3f} Hm³",
            f"Pluie Totale: {em(f'{t.pluie:.1f} mm')}",
            "",
            SEPARATOR,
            em("DÉTAILS JOURNALIERS:"),
            SEPARATOR,
        ]
        for d in days:
            lines += [
                f"Date: {format_date(d.date)}",
                f"Cote: {d.cote:.2f} m | Surface: {d.surface:.3f} ha | Volume: {d.volume:.3f} Hm³",
                f"Aff: {d.affluent:.3f} | Def: {d.defluent:.3f}",
                f"Evap: {d.evaporation:.3f} | Pluie: {d.pluie:.1f}",
                f"VDF: {d.vdf:.3f} | DVR: {d.dvr:.3f} | Trans: {d.transfert:.3f}",
                SEPARATOR,
            ]

    stamp = generated_at or dt.datetime.now()
    lines += ["", f"Généré le: {stamp:%d/%m/%Y %H:%M}"]
    return "\n".join(lines)
