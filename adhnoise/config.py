"""Shared constants, the frequency-band weights and runtime settings."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

WEIGHTS_NUM = 32
SEGMENTS_WEIGHT_MAX = 1.0

DEV_SOCKET_PATH = Path("/tmp/adh-rs.sock")
SOCKET_NAME = "adh-rs.sock"


class Weights:
    """Weights of the frequency bands, one per band, WEIGHTS_NUM in total."""

    __slots__ = ("_values",)

    def __init__(self, values: Iterable[float]) -> None:
        values = [float(v) for v in values]
        if len(values) != WEIGHTS_NUM:
            raise ValueError(f"expected {WEIGHTS_NUM} weights, got {len(values)}")
        self._values = values

    @classmethod
    def default(cls) -> "Weights":
        """Every band at full weight, which gives white noise."""
        return cls([SEGMENTS_WEIGHT_MAX] * WEIGHTS_NUM)

    def __getitem__(self, idx):
        return self._values[idx]

    def __setitem__(self, idx: int, value: float) -> None:
        self._values[idx] = float(value)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Weights):
            return NotImplemented
        return self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Weights({self._values!r})"

    def to_list(self) -> list[float]:
        """Return the weights as a new list."""
        return list(self._values)


def is_development(argv: Sequence[str] | None = None) -> bool:
    """Tell whether the program was started with ``--dev``.

    ``argv`` holds the command-line arguments without the program name.
    Any other first argument is an error.
    """
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        return False
    if argv[0] == "--dev":
        return True
    raise ValueError(f"Unknown command line argument: {argv[0]}")


def socket_path(development: bool | None = None) -> Path:
    """Path of the datagram socket shared by the daemon and the GUI."""
    if development is None:
        development = is_development()
    if development:
        return DEV_SOCKET_PATH
    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    if not runtime_dir:
        raise RuntimeError("XDG_RUNTIME_DIR is unset")
    return Path(runtime_dir) / SOCKET_NAME