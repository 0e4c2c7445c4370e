import json

import pytest

from adhnoise.config import WEIGHTS_NUM, Weights
from adhnoise.slots import SLOTS_FILENAME, SLOTS_NUM, Slots, config_dir


def some_weights():
    return Weights([0.5] * WEIGHTS_NUM)


def test_default_slots_hold_default_weights():
    slots = Slots()
    for idx in range(SLOTS_NUM):
        assert slots.recall_slot(idx) == Weights.default()


def test_save_and_recall():
    slots = Slots()
    slots.save_slot(3, some_weights())
    assert slots.recall_slot(3) == some_weights()
    assert slots.recall_slot(2) == Weights.default()


def test_saved_weights_are_copied():
    slots = Slots()
    weights = some_weights()
    slots.save_slot(1, weights)
    weights[0] = 0.0
    assert slots.recall_slot(1) == some_weights()


def test_out_of_range_save_is_ignored_and_recall_gives_default():
    slots = Slots()
    slots.save_slot(SLOTS_NUM, some_weights())
    slots.save_slot(-1, some_weights())
    assert all(slots.recall_slot(i) == Weights.default() for i in range(SLOTS_NUM))
    assert slots.recall_slot(SLOTS_NUM + 5) == Weights.default()


def test_wrong_slot_count_rejected():
    with pytest.raises(ValueError):
        Slots([Weights.default()] * (SLOTS_NUM - 1))


def test_json_layout():
    data = json.loads(Slots().to_json())
    assert len(data["slots"]) == SLOTS_NUM
    assert data["slots"][0]["v"] == [1.0] * WEIGHTS_NUM


def test_json_round_trip():
    slots = Slots()
    slots.save_slot(7, some_weights())
    restored = Slots.from_json(slots.to_json())
    assert restored.recall_slot(7) == some_weights()
    assert restored.recall_slot(0) == Weights.default()


def test_from_json_rejects_malformed():
    with pytest.raises(ValueError):
        Slots.from_json('{"other": []}')
    with pytest.raises(ValueError):
        Slots.from_json("not json")


def test_disk_round_trip(tmp_path):
    slots = Slots()
    slots.save_slot(4, some_weights())
    target = tmp_path / "nested"
    slots.write_to_disk(target)
    assert (target / SLOTS_FILENAME).is_file()
    assert Slots.load_from_disk(target).recall_slot(4) == some_weights()


def test_load_missing_file_gives_defaults(tmp_path, capsys):
    slots = Slots.load_from_disk(tmp_path)
    assert slots.recall_slot(0) == Weights.default()
    assert "not found" in capsys.readouterr().err


def test_load_corrupt_file_gives_defaults(tmp_path):
    (tmp_path / SLOTS_FILENAME).write_text("{broken")
    assert Slots.load_from_disk(tmp_path).recall_slot(0) == Weights.default()


def test_config_dir_follows_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert config_dir() == tmp_path / "adh-rs"


def test_default_directory_used(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    slots = Slots()
    slots.save_slot(9, some_weights())
    slots.write_to_disk()
    assert Slots.load_from_disk().recall_slot(9) == some_weights()