import itertools

import numpy as np
import pytest

from adhnoise.samples import (
    BLEND_WINDOW,
    CHUNK_SAMPLES,
    BlendingSamples,
    BlendType,
    Sample,
    SmoothingType,
)


def ramp_sample():
    return Sample(np.arange(CHUNK_SAMPLES, dtype=np.float32) / CHUNK_SAMPLES)


def constant_sample(value):
    return Sample(np.full(CHUNK_SAMPLES, value, dtype=np.float32))


def test_sample_rejects_wrong_length():
    with pytest.raises(ValueError):
        Sample([0.0] * 10)


def test_sample_get_in_and_out_of_range():
    sample = ramp_sample()
    assert sample.get(0) == 0.0
    assert sample.get(CHUNK_SAMPLES) is None
    assert sample.get(-1) is None
    assert sample[1] == pytest.approx(1 / CHUNK_SAMPLES)


def test_sample_iteration_both_ways():
    sample = ramp_sample()
    assert len(sample) == CHUNK_SAMPLES
    forward = list(sample)
    backward = list(reversed(sample))
    assert len(forward) == CHUNK_SAMPLES
    assert backward == forward[::-1]


def test_linear_blend_endpoints():
    assert BlendType.LINEAR.blend(2.0, 4.0, 0.0) == 2.0
    assert BlendType.LINEAR.blend(2.0, 4.0, 1.0) == 4.0


def test_sigmoid_blend_midpoint_and_monotonic():
    assert BlendType.SIGMOID.blend(0.0, 1.0, 0.5) == pytest.approx(0.5)
    values = [BlendType.SIGMOID.blend(0.0, 1.0, t / 10) for t in range(11)]
    assert values == sorted(values)
    assert values[0] < 0.01
    assert values[-1] > 0.99


def test_empty_chunks_rejected():
    with pytest.raises(ValueError):
        BlendingSamples([])


def test_default_is_mirror_and_plays_forward_then_backward():
    sample = ramp_sample()
    samples = BlendingSamples([sample])
    assert samples.smoothing_type is SmoothingType.MIRROR
    out = list(itertools.islice(iter(samples), 2 * CHUNK_SAMPLES + 3))
    left = [l for l, _ in out]
    right = [r for _, r in out]
    assert left == right
    assert left[:CHUNK_SAMPLES] == list(sample)
    assert left[CHUNK_SAMPLES:2 * CHUNK_SAMPLES] == list(reversed(sample))
    assert left[2 * CHUNK_SAMPLES:] == list(sample)[:3]


def test_with_mirror_after_blend_switches_back():
    samples = BlendingSamples([ramp_sample()]).with_blend(BlendType.LINEAR).with_mirror()
    assert samples.smoothing_type is SmoothingType.MIRROR


def test_linear_blend_fades_between_chunks():
    zeros, ones = constant_sample(0.0), constant_sample(1.0)
    samples = BlendingSamples([zeros, ones]).with_blend(BlendType.LINEAR)
    assert samples.smoothing_type is SmoothingType.BLEND
    plain = CHUNK_SAMPLES - BLEND_WINDOW
    out = [l for l, _ in itertools.islice(iter(samples), plain + BLEND_WINDOW + plain + BLEND_WINDOW)]

    assert all(v == 0.0 for v in out[:plain])
    fade_in = out[plain:plain + BLEND_WINDOW]
    assert fade_in == pytest.approx(list(np.arange(BLEND_WINDOW) / BLEND_WINDOW))

    # The second chunk already gave up its first window to the fade.
    body = out[plain + BLEND_WINDOW:plain + BLEND_WINDOW + CHUNK_SAMPLES - 2 * BLEND_WINDOW]
    assert all(v == 1.0 for v in body)
    fade_out = out[-BLEND_WINDOW:]
    assert fade_out == sorted(fade_out, reverse=True)
    assert fade_out[0] == pytest.approx(1.0)


def test_blend_output_is_stereo_identical():
    samples = BlendingSamples([ramp_sample(), constant_sample(0.5)]).with_blend(BlendType.SIGMOID)
    for left, right in itertools.islice(iter(samples), CHUNK_SAMPLES + 10):
        assert left == right