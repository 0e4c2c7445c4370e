"""Ten slots to save weights into, kept in a JSON file in the config directory."""

from __future__ import annotations

import json
import os
import sys
from collections.abc import Iterable
from pathlib import Path

from .config import WEIGHTS_NUM, Weights

SLOTS_NUM = 10
SLOTS_FILENAME = "slots.txt"
APP_NAME = "adh-rs"


def config_dir() -> Path:
    """The application's directory below the XDG config home."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / APP_NAME


class Slots:
    """Saved weights, indexed 0 to SLOTS_NUM - 1."""

    def __init__(self, slots: Iterable[Weights] | None = None) -> None:
        if slots is None:
            self._slots = [Weights.default() for _ in range(SLOTS_NUM)]
            return
        slots = [Weights(w) for w in slots]
        if len(slots) != SLOTS_NUM:
            raise ValueError(f"expected {SLOTS_NUM} slots, got {len(slots)}")
        self._slots = slots

    def save_slot(self, idx: int, weights: Weights) -> None:
        """Store a copy of ``weights``; an index out of range is ignored."""
        if 0 <= idx < SLOTS_NUM:
            self._slots[idx] = Weights(weights)

    def recall_slot(self, idx: int) -> Weights:
        """A copy of the weights in slot ``idx``, or the defaults if out of range."""
        if 0 <= idx < SLOTS_NUM:
            return Weights(self._slots[idx])
        return Weights.default()

    def to_json(self) -> str:
        return json.dumps({"slots": [{"v": w.to_list()} for w in self._slots]}, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> "Slots":
        data = json.loads(text)
        try:
            entries = data["slots"]
            weights = [Weights(entry["v"]) for entry in entries]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed slots data: {exc}") from exc
        if any(len(w) != WEIGHTS_NUM for w in weights):
            raise ValueError("malformed slots data")
        return cls(weights)

    def write_to_disk(self, directory: str | os.PathLike | None = None) -> None:
        directory = Path(directory) if directory is not None else config_dir()
        directory.mkdir(parents=True, exist_ok=True)
        (directory / SLOTS_FILENAME).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load_from_disk(cls, directory: str | os.PathLike | None = None) -> "Slots":
        """Read the slots file; on any problem report it and return defaults."""
        directory = Path(directory) if directory is not None else config_dir()
        path = directory / SLOTS_FILENAME
        try:
            if not path.is_file():
                raise FileNotFoundError("Slots config file not found.")
            return cls.from_json(path.read_bytes())
        except (OSError, ValueError) as exc:
            print(exc, file=sys.stderr)
            return cls()