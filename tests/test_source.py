import itertools

import numpy as np
import pytest

from procaud.graph import dc, lowpole_hz, noise, sine_hz, split
from procaud.source import ProceduralAudio


def test_decoder_interleaves_channels():
    audio = ProceduralAudio(dc(0.25, -0.5), 44100, 2)
    samples = list(itertools.islice(audio.decoder(), 6))
    assert samples == [0.25, -0.5, 0.25, -0.5, 0.25, -0.5]


def test_mono_uses_first_output():
    audio = ProceduralAudio(dc(0.25, -0.5), 44100, 1)
    assert list(itertools.islice(audio.decoder(), 4)) == [0.25] * 4


def test_extra_channels_are_silent():
    audio = ProceduralAudio(dc(0.25, -0.5), 48000, 3)
    block = audio.render(0.001)
    assert block.shape == (48, 3)
    assert np.all(block[:, 2] == 0.0)
    assert np.all(block[:, 0] == 0.25)


def test_decoder_properties():
    decoder = ProceduralAudio(sine_hz(440.0) >> split(2), 22050, 2).decoder()
    assert decoder.sample_rate == 22050
    assert decoder.channels == 2
    assert decoder.total_duration is None
    assert decoder.current_frame_len is None


def test_decoders_are_independent_and_identical():
    audio = ProceduralAudio(noise(11) >> lowpole_hz(1000.0) >> split(2), 44100, 2)
    first = list(itertools.islice(audio.decoder(), 500))
    second = list(itertools.islice(audio.decoder(), 500))
    assert first == second


def test_stream_crosses_block_boundaries():
    audio = ProceduralAudio(sine_hz(100.0) >> split(2), 44100, 2)
    rendered = audio.render(0.01)
    assert rendered.shape == (441, 2)
    assert np.array_equal(rendered[:, 0], rendered[:, 1])
    direct = (sine_hz(100.0)).process(441)[0].astype(np.float32)
    assert np.allclose(rendered[:, 0], direct, atol=1e-6)


def test_render_rejects_negative_duration():
    audio = ProceduralAudio(dc(0.0, 0.0), 44100, 2)
    with pytest.raises(ValueError):
        audio.render(-1.0)


def test_invalid_construction():
    with pytest.raises(ValueError):
        ProceduralAudio(dc(0.0, 0.0), 44100, 0)
    with pytest.raises(ValueError):
        ProceduralAudio(dc(0.0), 44100, 2)
    with pytest.raises(ValueError):
        ProceduralAudio(dc(0.0, 0.0), 0, 2)