import numpy as np
import pytest

from procaud.graph import (
    bandpass_hz,
    dc,
    lfo,
    lowpole,
    lowpole_hz,
    noise,
    reverb2_stereo,
    sine,
    sine_hz,
    split,
    var,
    wet_dry,
)
from procaud.param import ParamHandle


def _rms(x):
    return float(np.sqrt(np.mean(np.square(x))))


def test_dc_single_and_tuple():
    assert np.array_equal(dc(0.5).process(3), np.full((1, 3), 0.5))
    out = dc((0.25, -1.0)).process(4)
    assert out.shape == (2, 4)
    assert np.array_equal(out[1], np.full(4, -1.0))
    assert np.array_equal(dc(0.25, -1.0).process(4), out)


def test_dc_requires_values():
    with pytest.raises(ValueError):
        dc()


def test_sum_and_product_of_units():
    assert np.allclose((dc(2.0) + dc(3.0)).process(5), 5.0)
    assert np.allclose((dc(2.0) * dc(3.0)).process(5), 6.0)
    assert np.allclose((dc(2.0) * 0.5).process(2), 1.0)
    assert np.allclose((1.0 + dc(2.0)).process(2), 3.0)


def test_mismatched_outputs_raise():
    with pytest.raises(ValueError):
        dc(1.0) + dc(1.0, 2.0)
    with pytest.raises(ValueError):
        sine_hz(100.0) >> sine_hz(100.0)


def test_stack_and_split():
    assert (dc(1.0) | dc(2.0)).process(3).shape == (2, 3)
    out = (dc(0.7) >> split(3)).process(4)
    assert out.shape == (3, 4)
    assert np.allclose(out, 0.7)
    with pytest.raises(ValueError):
        split(0)


def test_sine_quarter_period():
    osc = sine_hz(1.0)
    osc.set_sample_rate(8)
    out = osc.process(8)[0]
    assert out[0] == pytest.approx(0.0, abs=1e-12)
    assert out[2] == pytest.approx(1.0)
    assert out.sum() == pytest.approx(0.0, abs=1e-9)


def test_sine_input_is_frequency():
    a = (dc(440.0) >> sine()).process(300)
    b = sine_hz(440.0).process(300)
    assert np.allclose(a, b)
    assert np.max(np.abs(a)) <= 1.0


def test_sine_chunking_is_seamless():
    whole = sine_hz(330.0).process(500)
    osc = sine_hz(330.0)
    parts = np.hstack((osc.process(123), osc.process(377)))
    assert np.allclose(whole, parts)


def test_noise_range_and_seed():
    out = noise(3).process(2000)
    assert out.min() >= -1.0 and out.max() < 1.0
    assert np.array_equal(out, noise(3).process(2000))
    assert not np.array_equal(out, noise(4).process(2000))


def test_lfo_linear_function_is_exact():
    out = lfo(lambda t: 2.0 * t).process(200)[0]
    expected = 2.0 * np.arange(200) / 44100.0
    assert np.allclose(out, expected)


def test_var_follows_param():
    param = ParamHandle("gain", 0.2, 0.0, 1.0)
    unit = var(param)
    assert np.allclose(unit.process(4), 0.2)
    param.set(0.9)
    assert np.allclose(unit.process(4), 0.9)


def test_lowpole_settles_to_dc():
    out = (dc(1.0) >> lowpole_hz(200.0)).process(44100)[0]
    assert out[-1] == pytest.approx(1.0, abs=1e-6)
    assert np.all(np.diff(out) >= -1e-12)


def test_lowpole_with_cutoff_input_matches_fixed():
    fixed = (noise(5) >> lowpole_hz(800.0)).process(1000)
    driven = ((noise(5) | dc(800.0)) >> lowpole()).process(1000)
    assert np.allclose(fixed, driven)


def test_lowpole_attenuates_high_frequencies():
    low = (sine_hz(50.0) >> lowpole_hz(500.0)).process(44100)
    high = (sine_hz(10000.0) >> lowpole_hz(500.0)).process(44100)
    assert _rms(high) < 0.2 * _rms(low)


def test_bandpass_passes_center():
    center = (sine_hz(1000.0) >> bandpass_hz(1000.0, 2.0)).process(44100)[0, 22050:]
    off = (sine_hz(100.0) >> bandpass_hz(1000.0, 2.0)).process(44100)[0, 22050:]
    assert _rms(center) == pytest.approx(_rms(sine_hz(1000.0).process(22050)), rel=0.02)
    assert _rms(off) < 0.2 * _rms(center)


def test_bandpass_chunking_is_seamless():
    whole = (noise(9) >> bandpass_hz(3000.0, 1.5)).process(700)
    unit = noise(9) >> bandpass_hz(3000.0, 1.5)
    parts = np.hstack((unit.process(50), unit.process(650)))
    assert np.allclose(whole, parts)


def test_bandpass_rejects_bad_q():
    with pytest.raises(ValueError):
        bandpass_hz(1000.0, 0.0)


def test_clone_and_reset():
    graph = noise(7) >> lowpole_hz(500.0)
    twin = graph.clone()
    first = graph.process(100)
    assert np.array_equal(first, twin.process(100))
    graph.reset()
    assert np.array_equal(first, graph.process(100))


def test_set_sample_rate_rejects_non_positive():
    with pytest.raises(ValueError):
        sine_hz(1.0).set_sample_rate(0)


def test_reverb_is_stereo_and_decays():
    burst = lfo(lambda t: 1.0 if t < 0.01 else 0.0) >> split(2)
    graph = burst >> reverb2_stereo(0.5, 1.0, 0.7, 1.0, lowpole_hz(3500.0).sample_rate / 10)
    out = graph.process(44100 * 4)
    assert out.shape == (2, 44100 * 4)
    assert np.all(np.isfinite(out))
    early = _rms(out[:, :44100])
    late = _rms(out[:, 3 * 44100 :])
    assert early > 0.0
    assert late < 0.01 * early


def test_reverb_rejects_bad_time():
    with pytest.raises(ValueError):
        reverb2_stereo(0.5, 0.0, 0.5, 1.0, 3000.0)


def test_wet_dry_zero_mix_is_dry():
    graph = sine_hz(220.0) >> split(2)
    mixed = wet_dry(graph.clone(), reverb2_stereo(0.5, 1.0, 0.5, 1.0, 3000.0), 0.0)
    assert np.allclose(mixed.process(1000), graph.process(1000))


def test_wet_dry_full_mix_is_wet():
    graph = sine_hz(220.0) >> split(2)
    wet_only = graph.clone() >> reverb2_stereo(0.5, 1.0, 0.5, 1.0, 3000.0)
    mixed = wet_dry(graph, reverb2_stereo(0.5, 1.0, 0.5, 1.0, 3000.0), 1.0)
    assert np.allclose(mixed.process(5000), wet_only.process(5000))