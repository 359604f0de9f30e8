# barrage/constants.py
"""Физические и эксплуатационные константы водохранилища."""

RESERVOIR_NAME = "Barrage Beni Haroun"

PAN_COEFFICIENT = 0.78       # пересчёт испарения с бассейна (bac) на водоём
MAX_STORAGE_HM3 = 880.139    # полный объём водохранилища, Hm³ (база для taux)

LEVEL_DECIMALS = 2           # точность ключа отметки в таблицах тарировки
LOAD_BATCH_SIZE = 10_000     # строк CSV на один пакет загрузки
ITEMS_PER_PAGE = 50          # строк журнала на страницу
