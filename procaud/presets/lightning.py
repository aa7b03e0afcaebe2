"""One-shot lightning sounds: an electrical zap and a thunderous strike."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..graph import (
    AudioUnit,
    bandpass_hz,
    dc,
    lfo,
    lowpole_hz,
    noise,
    reverb2_stereo,
    sine,
    sine_hz,
    split,
    wet_dry,
)


@dataclass
class LightningZap:
    """Buzzy electrical arc discharge of about 0.4 s."""

    intensity: float = 0.8
    """Overall intensity (0.0 to 1.0)."""
    pitch_shift: float = 1.0
    """Pitch multiplier (1.0 normal, below 1 lower, above 1 higher)."""
    reverb_mix: float = 0.0
    """Reverb wet/dry mix (0.0 dry, 1.0 fully wet)."""


def build_lightning_zap_graph(zap: LightningZap) -> AudioUnit:
    """Build the stereo lightning zap graph; it has no runtime parameters."""
    intensity = zap.intensity
    pitch = zap.pitch_shift

    # Core zap: bandpassed noise near 5 kHz, gated by a chaotic stutter.
    def zap_env(t: float) -> float:
        if t > 0.55:
            return 0.0
        s1 = math.sin(t * 127.3 * math.tau)
        s2 = math.sin(t * 89.7 * math.tau)
        s3 = math.sin(t * 211.1 * math.tau)
        stutter = max(s1 * s2 * s3, 0.0)
        overall = math.exp(-t * 3.5)
        return stutter * overall * 0.65 * intensity

    zap_layer = (noise() >> bandpass_hz(5000.0 * pitch, 1.5)) * lfo(zap_env)

    # High sizzle: brightness and air.
    def sizzle_env(t: float) -> float:
        if t > 0.5:
            return 0.0
        s1 = math.sin(t * 173.9 * math.tau)
        s2 = math.sin(t * 67.3 * math.tau)
        stutter = max(s1 * s2, 0.0)
        overall = math.exp(-t * 4.0)
        return stutter * overall * 0.4 * intensity

    sizzle_layer = (noise() >> bandpass_hz(7000.0 * pitch, 1.0)) * lfo(sizzle_env)

    # Mid crackle around 3 to 4 kHz.
    def mid_env(t: float) -> float:
        if t > 0.5:
            return 0.0
        s1 = math.sin(t * 151.7 * math.tau)
        s2 = math.sin(t * 103.3 * math.tau)
        s3 = math.sin(t * 197.9 * math.tau)
        stutter = max(s1 * s2 * s3, 0.0)
        overall = math.exp(-t * 3.0)
        return stutter * overall * 0.35 * intensity

    mid_layer = (noise() >> bandpass_hz(3500.0 * pitch, 1.5)) * lfo(mid_env)

    graph = (zap_layer + sizzle_layer + mid_layer) >> split(2)

    if zap.reverb_mix > 0.001:
        reverb = reverb2_stereo(0.2, 0.4, 0.3, 1.0, 8000.0)
        return wet_dry(graph, reverb, zap.reverb_mix)
    return graph


@dataclass
class LightningStrike:
    """Thunder boom with an electrical crack, about 2.5 s long."""

    intensity: float = 0.8
    """Overall intensity (0.0 to 1.0)."""
    pitch_shift: float = 1.0
    """Pitch multiplier (1.0 normal, below 1 lower, above 1 higher)."""
    reverb_mix: float = 0.15
    """Reverb wet/dry mix (0.0 dry, 1.0 fully wet)."""


def build_lightning_strike_graph(ls: LightningStrike) -> AudioUnit:
    """Build the stereo lightning strike graph; it has no runtime parameters."""
    intensity = ls.intensity
    pitch = ls.pitch_shift

    # Initial crack: full-spectrum noise burst.
    def crack_env(t: float) -> float:
        if t > 0.15:
            return 0.0
        attack = min(t * 5000.0, 1.0)
        decay = math.exp(-t * 20.0)
        return attack * decay * 0.5 * intensity

    crack_layer = noise() * lfo(crack_env)

    # Low boom: the dominant thunder body.
    boom_cutoff = 80.0 * pitch

    def boom_env(t: float) -> float:
        if t > 2.5:
            return 0.0
        attack = min(t * 100.0, 1.0)
        decay = math.exp(-t * 1.2)
        return attack * decay * 0.7 * intensity

    boom_layer = (
        noise() >> lowpole_hz(boom_cutoff) >> lowpole_hz(boom_cutoff)
    ) * lfo(boom_env)

    # Mid body between crack and boom.
    def mid_env(t: float) -> float:
        if t > 1.5:
            return 0.0
        attack = min(t * 200.0, 1.0)
        decay = math.exp(-t * 2.0)
        return attack * decay * 0.3 * intensity

    mid_layer = (noise() >> lowpole_hz(400.0 * pitch)) * lfo(mid_env)

    # Electrical crackle: FM with a decaying modulation index.
    carrier = 1800.0 * pitch
    modulator = 1270.0 * pitch

    def mod_depth(t: float) -> float:
        return 30.0 * modulator * math.exp(-t * 6.0)

    fm = (dc(carrier) + sine_hz(modulator) * lfo(mod_depth)) >> sine()

    def crackle_env(t: float) -> float:
        if t > 0.8:
            return 0.0
        attack = min(t * 1000.0, 1.0)
        decay = math.exp(-t * 4.0)
        return attack * decay * 0.06 * intensity

    crackle_layer = fm * lfo(crackle_env)

    graph = (crack_layer + boom_layer + mid_layer + crackle_layer) >> split(2)

    if ls.reverb_mix > 0.001:
        reverb = reverb2_stereo(0.6, 1.5, 0.5, 1.0, 2000.0)
        return wet_dry(graph, reverb, ls.reverb_mix)
    return graph