from pathlib import Path

import pytest

from adhnoise.config import (
    SEGMENTS_WEIGHT_MAX,
    WEIGHTS_NUM,
    Weights,
    is_development,
    socket_path,
)


def test_default_weights_are_all_max():
    weights = Weights.default()
    assert len(weights) == WEIGHTS_NUM
    assert all(w == SEGMENTS_WEIGHT_MAX for w in weights)


def test_weights_reject_wrong_length():
    with pytest.raises(ValueError):
        Weights([0.5] * (WEIGHTS_NUM - 1))


def test_weights_indexing_and_to_list():
    values = [i / WEIGHTS_NUM for i in range(WEIGHTS_NUM)]
    weights = Weights(values)
    assert weights[3] == values[3]
    assert weights[-1] == values[-1]
    assert weights.to_list() == values
    assert list(weights) == values


def test_to_list_is_a_copy():
    weights = Weights.default()
    copy = weights.to_list()
    copy[0] = 0.0
    assert weights[0] == SEGMENTS_WEIGHT_MAX


def test_weights_set_item_and_equality():
    weights = Weights.default()
    weights[5] = 0.25
    assert weights[5] == 0.25
    assert weights != Weights.default()
    weights[5] = SEGMENTS_WEIGHT_MAX
    assert weights == Weights.default()


def test_is_development_without_arguments():
    assert is_development([]) is False


def test_is_development_with_dev_flag():
    assert is_development(["--dev"]) is True


def test_is_development_rejects_unknown_argument():
    with pytest.raises(ValueError):
        is_development(["--verbose"])


def test_socket_path_development():
    assert socket_path(True) == Path("/tmp/adh-rs.sock")


def test_socket_path_uses_runtime_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_RUNTIME_DIR", str(tmp_path))
    assert socket_path(False) == tmp_path / "adh-rs.sock"


def test_socket_path_requires_runtime_dir(monkeypatch):
    monkeypatch.delenv("XDG_RUNTIME_DIR", raising=False)
    with pytest.raises(RuntimeError):
        socket_path(False)