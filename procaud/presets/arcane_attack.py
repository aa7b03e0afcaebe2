"""One-shot arcane attack: shimmering, sparkling, sweeping magic effect."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..graph import (
    AudioUnit,
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
    wet_dry,
)

# Five cents up: 2 ** (5 / 1200).
_DETUNE_UP = 1.002893
_DETUNE_DOWN = 1.0 / _DETUNE_UP


@dataclass
class ArcaneAttack:
    """Magic attack sound of about 0.7 s, built from five layers."""

    intensity: float = 0.8
    """Overall intensity (0.0 to 1.0)."""
    pitch_shift: float = 1.0
    """Pitch multiplier (1.0 standard, above 1 higher, below 1 deeper)."""
    reverb_mix: float = 0.3
    """Reverb wet/dry mix (0.0 dry, 1.0 fully wet)."""
    lowpass: float = 20_000.0
    """Cutoff in Hz of the lowpass over the whole output (20 kHz is effectively off)."""


def build_arcane_attack_graph(aa: ArcaneAttack) -> AudioUnit:
    """Build the stereo arcane attack graph; it has no runtime parameters."""
    intensity = aa.intensity
    pitch = aa.pitch_shift

    # Shimmer core: two detuned sine clusters.
    base_a = 880.0 * pitch
    base_b = 1320.0 * pitch

    def shimmer_env(t: float) -> float:
        if t > 0.55:
            return 0.0
        attack = min(t * 40.0, 1.0)
        decay = math.exp(-t * 5.5)
        return attack * decay * 0.15 * intensity

    shimmer_layer = (
        (
            sine_hz(base_a)
            + sine_hz(base_a * _DETUNE_UP)
            + sine_hz(base_a * _DETUNE_DOWN)
            + sine_hz(base_b)
            + sine_hz(base_b * _DETUNE_UP)
            + sine_hz(base_b * _DETUNE_DOWN)
        )
        * dc(1.0 / 6.0)
        * lfo(shimmer_env)
    )

    # Crystalline sparkle: bandpassed noise with a stuttering envelope.
    sparkle_center = 6000.0 * pitch

    def sparkle_env(t: float) -> float:
        if t > 0.6:
            return 0.0
        onset = min(t * 80.0, 1.0)
        decay = math.exp(-t * 4.5)
        s1 = math.sin(t * 73.0 * math.tau)
        s2 = math.sin(t * 113.0 * math.tau)
        stutter = max(s1 * s2, 0.0)
        return onset * decay * stutter * 0.25 * intensity

    sparkle_layer = (noise() >> bandpass_hz(sparkle_center, 2.0)) * lfo(sparkle_env)

    # Rising sweep with a little vibrato.
    sweep_lo = 300.0 * pitch
    sweep_hi = 1800.0 * pitch

    def sweep_freq(t: float) -> float:
        if t > 0.45:
            return 0.0
        return sweep_lo + (sweep_hi - sweep_lo) * (t / 0.45)

    def sweep_env(t: float) -> float:
        if t > 0.45:
            return 0.0
        attack = min(t * 30.0, 1.0)
        decay = math.exp(-max(t - 0.35, 0.0) * 20.0) * attack
        return decay * 0.12 * intensity

    fm_mod = sine_hz(7.0 * pitch) * dc(30.0 * pitch)
    sweep_layer = ((lfo(sweep_freq) + fm_mod) >> sine()) * lfo(sweep_env)

    # Ethereal wash: noise through a lowpass that opens and closes.
    wash_lo = 200.0 * pitch
    wash_hi = 1200.0 * pitch

    def wash_cutoff(t: float) -> float:
        if t > 0.6:
            return wash_lo
        x = t / 0.6
        curve = math.exp(-((x - 0.4) ** 2) * 12.0)
        return wash_lo + (wash_hi - wash_lo) * curve

    def wash_env(t: float) -> float:
        if t > 0.6:
            return 0.0
        attack = min(t * 20.0, 1.0)
        decay = math.exp(-t * 3.5)
        return attack * decay * 0.30 * intensity

    wash_layer = ((noise() | lfo(wash_cutoff)) >> lowpole()) * lfo(wash_env)

    # Harmonic cluster: inharmonic, bell-like partials.
    h1, h2, h3, h4, h5 = (f * pitch for f in (1320.0, 1720.0, 2150.0, 2680.0, 3200.0))

    def cluster_env(t: float) -> float:
        if t > 0.4:
            return 0.0
        attack = min(t * 120.0, 1.0)
        decay = math.exp(-t * 8.0)
        return attack * decay * 0.08 * intensity

    cluster_layer = (
        (
            sine_hz(h1)
            + sine_hz(h2) * dc(0.8)
            + sine_hz(h3) * dc(0.6)
            + sine_hz(h4) * dc(0.4)
            + sine_hz(h5) * dc(0.2)
        )
        * dc(1.0 / 3.0)
        * lfo(cluster_env)
    )

    mono_mix = shimmer_layer + sparkle_layer + sweep_layer + wash_layer + cluster_layer
    graph = (mono_mix >> lowpole_hz(aa.lowpass) >> lowpole_hz(aa.lowpass)) >> split(2)

    if aa.reverb_mix > 0.001:
        reverb = reverb2_stereo(0.5, 1.0, 0.7, 1.0, 3500.0)
        return wet_dry(graph, reverb, aa.reverb_mix)
    return graph