import datetime as dt
import importlib
import os
import sys
import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

loader = importlib.import_module('barrage.core.loader')
CalibrationContext = importlib.import_module('barrage.core.calibration').CalibrationContext
RawReading = importlib.import_module('barrage.domain.reading').RawReading
MemoryRecordStore = importlib.import_module('barrage.store.memory').MemoryRecordStore
ReservoirLogbook = importlib.import_module('barrage.facade.logbook').ReservoirLogbook

SURFACE_CSV = "Cote;Surface\n104,00;1150,0\n105,00;1200,5\n106.00;1260.25\n"
VOLUME_CSV = "cote,volume\r\n104.00,290.0\r\n105.00,300.750\r\n106.00,312.5\r\n"


@pytest.fixture
def surface_text():
    return SURFACE_CSV


@pytest.fixture
def volume_text():
    return VOLUME_CSV


@pytest.fixture
def calibration():
    return CalibrationContext(
        surface=loader.load(SURFACE_CSV, name="surface"),
        volume=loader.load(VOLUME_CSV, name="volume"),
    )


@pytest.fixture
def readings():
    return [
        RawReading(date=dt.date(2024, 3, 1), cote="104", lecture_bac="6", vdf="1", pluie="2.5"),
        RawReading(
            date=dt.date(2024, 3, 2), cote="105", lecture_bac="8",
            vdf="1.2", dvr="0.3", fuites="0.05", transfert="0", pluie="0",
        ),
        RawReading(date=dt.date(2024, 3, 3), cote="106,00", lecture_bac="7,5", dvr="0,4", pluie="12"),
        # разрыв в сутки: 4 марта нет
        RawReading(date=dt.date(2024, 3, 5), cote="105.00", lecture_bac="5", transfert="0.8"),
        RawReading(date=dt.date(2024, 4, 1), cote="999.99", vdf="0.5", dvr="0.25"),
    ]


@pytest.fixture
def store(readings):
    return MemoryRecordStore(readings)


@pytest.fixture
def logbook(store, calibration):
    return ReservoirLogbook(store, calibration)
