# barrage/visualization/plots.py
"""Мини‑обёртки над matplotlib для ключевых графиков журнала.

Функции принимают таблицу из :func:`barrage.reports.export.to_frame`
и возвращают объект ``Axes`` (удобно для отчётов и тестов); окно
показывается только при ``show=True``.
"""

from __future__ import annotations

import matplotlib.pyplot as plt
import pandas as pd

from ..core.calibration import CalibrationTable

# ---------------------------------------------------------------------------
# 1) Отметка уровня и процент наполнения
# ---------------------------------------------------------------------------

def plot_levels(df: pd.DataFrame, show: bool = True):
    """Линия отметки уровня по суткам + процент наполнения на второй оси."""
    fig, ax = plt.subplots()
    ax.plot(df["Date"], df["Cote (m)"], marker="o", label="Cote")
    ax.set_xlabel("Date")
    ax.set_ylabel("Cote, m")
    ax.grid(True)

    ax_rate = ax.twinx()
    ax_rate.plot(df["Date"], df["Taux (%)"], ls="--", color="green", label="Taux")
    ax_rate.set_ylabel("Taux, %")

    ax.set_title("Cote et taux de remplissage")
    fig.autofmt_xdate()
    if show:
        plt.show()
    return ax

# ---------------------------------------------------------------------------
# 2) Суточный водный баланс
# ---------------------------------------------------------------------------

def plot_water_balance(df: pd.DataFrame, show: bool = True):
    """Приток и сток (Hm³) по суткам."""
    fig, ax = plt.subplots()
    x = range(len(df))
    ax.bar([i - 0.2 for i in x], df["Affluent (Hm³)"], width=0.4, label="Affluent")
    ax.bar([i + 0.2 for i in x], df["Défluent (Hm³)"], width=0.4, label="Défluent")
    ax.set_xticks(list(x))
    ax.set_xticklabels([d.strftime("%d/%m") for d in df["Date"]], rotation=45)
    ax.set_title("Bilan hydrique journalier")
    ax.set_ylabel("Hm³")
    ax.grid(True)
    ax.legend()
    if show:
        plt.show()
    return ax

# ---------------------------------------------------------------------------
# 3) Кривая тарировки
# ---------------------------------------------------------------------------

def plot_calibration_curve(table: CalibrationTable, ylabel: str, show: bool = True):
    """Кривая «отметка → величина» из таблицы тарировки."""
    levels, values = table.as_arrays()
    fig, ax = plt.subplots()
    ax.plot(levels, values)
    ax.set_xlabel("Cote, m")
    ax.set_ylabel(ylabel)
    ax.grid(True)
    if show:
        plt.show()
    return ax
