import datetime as dt
import importlib
import json

import pytest

store_pkg = importlib.import_module('barrage.store')
JsonRecordStore = importlib.import_module('barrage.store.json_store').JsonRecordStore
MemoryRecordStore = importlib.import_module('barrage.store.memory').MemoryRecordStore
RawReading = importlib.import_module('barrage.domain.reading').RawReading


def test_json_roundtrip_keeps_raw_values(tmp_path, readings):
    path = tmp_path / "data" / "barrage.json"
    store = JsonRecordStore(path)
    store.save_records(readings)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw[2]["cote"] == "106,00"
    assert raw[2]["lectureBac"] == "7,5"
    assert raw[0]["date"] == "2024-03-01"

    assert store.get_records() == readings
    assert [p.name for p in path.parent.iterdir()] == ["barrage.json"]


def test_json_missing_file_is_empty(tmp_path):
    assert JsonRecordStore(tmp_path / "none.json").get_records() == []


def test_json_rejects_non_list(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"date": "2024-03-01"}', encoding="utf-8")
    with pytest.raises(ValueError):
        JsonRecordStore(path).get_records()


def test_json_defaults_missing_fields(tmp_path):
    path = tmp_path / "old.json"
    path.write_text('[{"date": "2024-03-01", "cote": "104", "vdf": ""}]', encoding="utf-8")
    (record,) = JsonRecordStore(path).get_records()
    assert record == RawReading(date=dt.date(2024, 3, 1), cote="104")


def test_memory_store_returns_copies(readings):
    store = MemoryRecordStore(readings)
    snapshot = store.get_records()
    snapshot.clear()
    assert len(store.get_records()) == len(readings)


def test_open_store(tmp_path):
    assert isinstance(store_pkg.open_store(), MemoryRecordStore)
    assert isinstance(store_pkg.open_store(tmp_path / "x.json"), JsonRecordStore)
