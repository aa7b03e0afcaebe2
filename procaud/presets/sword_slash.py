"""One-shot sword slash: FM synthesis of a metal blade with a noise whoosh."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..graph import (
    AudioUnit,
    dc,
    lfo,
    lowpole,
    noise,
    reverb2_stereo,
    sine,
    sine_hz,
    split,
    wet_dry,
)


@dataclass
class SwordSlash:
    """Metal blade sound.

    High FM modulation indices give dense inharmonic spectra; as the index
    decays the sidebands vanish from the outside in.
    """

    intensity: float = 0.8
    """Overall intensity (0.0 to 1.0)."""
    pitch_shift: float = 1.0
    """Pitch multiplier (1.0 normal, below 1 lower, above 1 higher)."""
    reverb_mix: float = 0.0
    """Reverb wet/dry mix (0.0 dry, 1.0 fully wet)."""


def _fm_voice(
    carrier: float,
    modulator: float,
    index: float,
    index_decay: float,
    cutoff_time: float,
    amp_decay: float,
    level: float,
) -> AudioUnit:
    def depth(t: float) -> float:
        return index * modulator * math.exp(-t * index_decay)

    def env(t: float) -> float:
        if t > cutoff_time:
            return 0.0
        return min(t * 500.0, 1.0) * math.exp(-t * amp_decay) * level

    fm = (dc(carrier) + sine_hz(modulator) * lfo(depth)) >> sine()
    return fm * lfo(env)


def build_sword_slash_graph(ss: SwordSlash) -> AudioUnit:
    """Build the stereo sword slash graph; it has no runtime parameters."""
    intensity = ss.intensity
    pitch = ss.pitch_shift

    # Low metallic body, mid presence and high shimmer.
    v1 = _fm_voice(720.0 * pitch, 487.0 * pitch, 20.0, 3.0, 1.2, 6.0, 0.02 * intensity)
    v2 = _fm_voice(2100.0 * pitch, 1430.0 * pitch, 18.0, 5.0, 0.6, 10.0, 0.015 * intensity)
    v3 = _fm_voice(4200.0 * pitch, 2870.0 * pitch, 12.0, 8.0, 0.3, 15.0, 0.008 * intensity)

    # Broadband transient through a lowpass closing from 10 kHz to 300 Hz.
    noise_base = 300.0 * pitch
    noise_range = 9700.0 * pitch

    def cutoff(t: float) -> float:
        return noise_base + noise_range * math.exp(-t * 8.0)

    def noise_env(t: float) -> float:
        if t > 0.5:
            return 0.0
        return min(t * 1000.0, 1.0) * math.exp(-t * 10.0) * 0.07 * intensity

    noise_layer = ((noise() | lfo(cutoff)) >> lowpole()) * lfo(noise_env)

    graph = (v1 + v2 + v3 + noise_layer) >> split(2)

    if ss.reverb_mix > 0.001:
        reverb = reverb2_stereo(0.3, 0.6, 0.4, 1.0, 5000.0)
        return wet_dry(graph, reverb, ss.reverb_mix)
    return graph