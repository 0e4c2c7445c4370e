"""Generation of noise with weighted frequency bands."""

from __future__ import annotations

import math

import numpy as np
from scipy import fft

from .config import WEIGHTS_NUM, Weights
from .samples import CHUNK_SAMPLES, Sample

SAMPLE_FREQ = 44_100.0
MIN_FREQ = 20.0
MAX_FREQ = 20_000.0

# Ratio between the frequencies of two neighbouring weights.
_FREQ_RATIO = (MAX_FREQ / MIN_FREQ) ** (1.0 / (WEIGHTS_NUM - 1))


def get_freq_weight(weights: Weights, freq: float) -> float:
    """Weight of ``freq``, interpolated on a log scale between the band weights."""
    if freq <= MIN_FREQ:
        return weights[0]
    if freq >= MAX_FREQ:
        return weights[-1]
    weight_bin = math.log(freq / MIN_FREQ) / math.log(_FREQ_RATIO)
    weight_bin = min(max(weight_bin, 0.0), float(WEIGHTS_NUM - 1))
    left, right = math.floor(weight_bin), math.ceil(weight_bin)
    t = weight_bin - left
    return weights[left] * (1.0 - t) + weights[right] * t


def _freq_weights(weights: Weights, freqs: np.ndarray) -> np.ndarray:
    clipped = np.clip(freqs, MIN_FREQ, MAX_FREQ)
    bins = np.clip(np.log(clipped / MIN_FREQ) / math.log(_FREQ_RATIO), 0.0, WEIGHTS_NUM - 1)
    return np.interp(bins, np.arange(WEIGHTS_NUM), weights.to_list())


def freq_domain_bin(i):
    """Frequency that DCT bin ``i`` of a chunk stands for."""
    return SAMPLE_FREQ * i / (2.0 * CHUNK_SAMPLES)


def idct(values) -> np.ndarray:
    """Inverse DCT (type III) that turns frequencies back into a waveform."""
    array = np.asarray(values, dtype=np.float64)
    if array.ndim != 1 or array.size == 0:
        raise ValueError("idct needs a non-empty one-dimensional input")
    # scipy's unnormalised DCT-III is twice the textbook sum.
    return fft.dct(array, type=3) / 2.0 * math.sqrt(2.0 / array.size)


def gen_white_freqs(rng: np.random.Generator | None = None) -> np.ndarray:
    """Frequencies of white noise, uniform in -1..1."""
    if rng is None:
        rng = np.random.default_rng()
    return rng.uniform(-1.0, 1.0, CHUNK_SAMPLES).astype(np.float32)


def gen_weighted_noise(weights: Weights, rng: np.random.Generator | None = None) -> Sample:
    """One chunk of noise whose frequency bands are weighted by ``weights``."""
    freqs = gen_white_freqs(rng).astype(np.float64)
    bins = freq_domain_bin(np.arange(CHUNK_SAMPLES, dtype=np.float64))
    return Sample(idct(freqs * _freq_weights(weights, bins)))