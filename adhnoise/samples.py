"""Chunks of audio samples and endless stereo streams built from them."""

from __future__ import annotations

import enum
import itertools
from collections.abc import Iterable, Iterator

import numpy as np

CHUNK_SAMPLES = 44_100 * 3
BLEND_WINDOW = 1000


class Sample:
    """One chunk of exactly CHUNK_SAMPLES mono audio samples."""

    __slots__ = ("_data",)

    def __init__(self, data: Iterable[float]) -> None:
        array = np.asarray(list(data) if not isinstance(data, np.ndarray) else data, dtype=np.float32)
        if array.ndim != 1 or array.shape[0] != CHUNK_SAMPLES:
            raise ValueError("Length mismatch")
        self._data = array

    def get(self, idx: int) -> float | None:
        """The sample at ``idx``, or None when it is out of range."""
        if 0 <= idx < CHUNK_SAMPLES:
            return float(self._data[idx])
        return None

    def __getitem__(self, idx: int) -> float:
        return float(self._data[idx])

    def __len__(self) -> int:
        return CHUNK_SAMPLES

    def __iter__(self) -> Iterator[float]:
        return iter(self._data.tolist())

    def __reversed__(self) -> Iterator[float]:
        return iter(self._data[::-1].tolist())


class BlendType(enum.Enum):
    """How two chunks are faded into each other."""

    LINEAR = "linear"
    SIGMOID = "sigmoid"

    def blend(self, a, b, t):
        """Interpolate between ``a`` and ``b`` at position ``t`` in 0..1.

        Works on scalars and on numpy arrays alike.
        """
        if self is BlendType.LINEAR:
            weight = t
        else:
            # The logistic function settles quickly between -6 and 6.
            weight = 1.0 / (1.0 + np.exp(-(12.0 * np.asarray(t, dtype=np.float64) - 6.0)))
        result = a * (1.0 - weight) + b * weight
        return float(result) if np.ndim(result) == 0 else result


class SmoothingType(enum.Enum):
    """How the end of a chunk is joined to what follows it."""

    MIRROR = "mirror"
    BLEND = "blend"


class BlendingSamples:
    """A set of chunks played endlessly as a stereo stream."""

    def __init__(self, chunks: Iterable[Sample]) -> None:
        chunks = list(chunks)
        if not chunks:
            raise ValueError("Empty chunks")
        self._samples = chunks
        self.smoothing_type = SmoothingType.MIRROR
        self.blend_type: BlendType | None = None

    def with_mirror(self) -> "BlendingSamples":
        """Play the first chunk forwards and then backwards, repeatedly."""
        self.smoothing_type = SmoothingType.MIRROR
        self.blend_type = None
        return self

    def with_blend(self, blend_type: BlendType) -> "BlendingSamples":
        """Cycle through all chunks, fading each into the next."""
        self.smoothing_type = SmoothingType.BLEND
        self.blend_type = blend_type
        return self

    def __iter__(self) -> Iterator[tuple[float, float]]:
        if self.smoothing_type is SmoothingType.MIRROR:
            return self._mirrored()
        return self._blended(self.blend_type)

    def _mirrored(self) -> Iterator[tuple[float, float]]:
        first = self._samples[0]
        period = [(s, s) for s in itertools.chain(first, reversed(first))]
        return itertools.cycle(period)

    def _blended(self, blend_type: BlendType) -> Iterator[tuple[float, float]]:
        chunks = itertools.cycle(self._samples)
        ramp = np.arange(BLEND_WINDOW, dtype=np.float64) / BLEND_WINDOW
        current = next(chunks)._data.astype(np.float64)
        offset = 0
        while True:
            following = next(chunks)._data.astype(np.float64)
            head = current[offset:CHUNK_SAMPLES - BLEND_WINDOW]
            tail = blend_type.blend(current[-BLEND_WINDOW:], following[:BLEND_WINDOW], ramp)
            for s in np.concatenate((head, tail)).tolist():
                yield (s, s)
            current, offset = following, BLEND_WINDOW