# barrage/core/formulas.py

from ..constants import MAX_STORAGE_HM3, PAN_COEFFICIENT


def compute_evaporation(surface: float, pan_reading: float, coefficient: float = PAN_COEFFICIENT) -> float:
    """Испарение с водной поверхности, Hm³.

    Formula: *E* = S × bac / 1000 × 0.78 (S в га, bac в мм).
    """
    return surface * pan_reading / 1000.0 * coefficient


def compute_defluent(evaporation: float, vdf: float, dvr: float, fuites: float, transfert: float) -> float:
    """Сток из водохранилища за сутки, Hm³."""
    return evaporation + vdf + dvr + fuites + transfert


def compute_affluent(gains: float, defluent: float) -> float:
    """Приток = приращение объёма + сток."""
    return gains + defluent


def compute_fill_rate(volume: float, max_storage: float = MAX_STORAGE_HM3) -> float:
    """Процент наполнения относительно полного объёма."""
    return volume * 100.0 / max_storage
