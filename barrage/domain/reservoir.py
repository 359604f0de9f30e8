# barrage/domain/reservoir.py

from dataclasses import dataclass

from ..constants import (
    ITEMS_PER_PAGE,
    LOAD_BATCH_SIZE,
    MAX_STORAGE_HM3,
    PAN_COEFFICIENT,
    RESERVOIR_NAME,
)


@dataclass(slots=True, frozen=True)
class ReservoirConfig:
    """Fixed operating parameters of the dam."""
    name: str = RESERVOIR_NAME
    max_storage: float = MAX_STORAGE_HM3  # Hm³ - volume at 100 % fill
    pan_coefficient: float = PAN_COEFFICIENT  # bac -> lake evaporation
    items_per_page: int = ITEMS_PER_PAGE
    load_batch_size: int = LOAD_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.max_storage <= 0:
            raise ValueError("max_storage must be positive.")
        if self.items_per_page < 1 or self.load_batch_size < 1:
            raise ValueError("Page and batch sizes must be at least 1.")
