"""One-shot explosion or fireball: blast, boom, rumble, body, whoosh and crackle."""

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
    sine_hz,
    split,
    wet_dry,
)


@dataclass
class Explosion:
    """Explosion sound of about 2 s.

    Low pitch shifts give a deep detonation; high ones let the whoosh
    dominate for a fiery fireball.
    """

    intensity: float = 0.8
    """Overall intensity (0.0 to 1.0)."""
    pitch_shift: float = 1.0
    """Pitch multiplier (1.0 standard, above 1 fireball, below 1 deep boom)."""
    reverb_mix: float = 0.1
    """Reverb wet/dry mix (0.0 dry, 1.0 fully wet)."""
    lowpass: float = 20_000.0
    """Cutoff in Hz of the lowpass over the whole output (20 kHz is effectively off)."""


def build_explosion_graph(ex: Explosion) -> AudioUnit:
    """Build the stereo explosion graph; it has no runtime parameters."""
    intensity = ex.intensity
    pitch = ex.pitch_shift

    # Higher pitch decays faster (small fireball), lower pitch slower.
    decay_scale = math.sqrt(pitch)

    # Initial blast: a bright broadband transient.
    def blast_env(t: float) -> float:
        if t > 0.2 / decay_scale:
            return 0.0
        attack = min(t * 5000.0, 1.0)
        decay = math.exp(-t * 18.0 * decay_scale)
        return attack * decay * 0.2 * intensity

    blast_layer = (noise() >> lowpole_hz(3000.0 * pitch)) * lfo(blast_env)

    # Tonal boom: a low pitched thump under the noise.
    boom_freq = 80.0 * pitch
    boom_harm = 130.0 * pitch

    def boom_env(t: float) -> float:
        if t > 2.5 / decay_scale:
            return 0.0
        attack = min(t * 60.0, 1.0)
        decay = math.exp(-t * 1.5 * decay_scale)
        return attack * decay * 0.12 * intensity

    boom_layer = (sine_hz(boom_freq) + sine_hz(boom_harm) * dc(0.5)) * lfo(boom_env)

    # Sub rumble: noise-based low end.
    rumble_cutoff = 250.0 * pitch

    def rumble_env(t: float) -> float:
        if t > 3.0 / decay_scale:
            return 0.0
        attack = min(t * 80.0, 1.0)
        decay = math.exp(-t * 1.0 * decay_scale)
        return attack * decay * 0.6 * intensity

    rumble_layer = (
        noise() >> lowpole_hz(rumble_cutoff) >> lowpole_hz(rumble_cutoff)
    ) * lfo(rumble_env)

    # Mid body.
    mid_cutoff = 800.0 * pitch

    def mid_env(t: float) -> float:
        if t > 1.5 / decay_scale:
            return 0.0
        attack = min(t * 150.0, 1.0)
        decay = math.exp(-t * 2.5 * decay_scale)
        return attack * decay * 0.4 * intensity

    mid_layer = (noise() >> lowpole_hz(mid_cutoff)) * lfo(mid_env)

    # Fireball whoosh: noise through a closing lowpass.
    whoosh_hi = 4000.0 * pitch
    whoosh_lo = 200.0 * pitch

    def whoosh_cutoff(t: float) -> float:
        return whoosh_lo + (whoosh_hi - whoosh_lo) * math.exp(-t * 3.0 * decay_scale)

    def whoosh_env(t: float) -> float:
        if t > 1.5 / decay_scale:
            return 0.0
        onset = min(max((t - 0.02) * 60.0, 0.0), 1.0)
        decay = math.exp(-t * 2.0 * decay_scale)
        return onset * decay * 0.35 * intensity

    whoosh_layer = ((noise() | lfo(whoosh_cutoff)) >> lowpole()) * lfo(whoosh_env)

    # Crackle tail: debris and sparks.
    crackle_bp = 5000.0 * pitch

    def crackle_env(t: float) -> float:
        if t > 1.8 / decay_scale:
            return 0.0
        onset = min(max((t - 0.05) * 20.0, 0.0), 1.0)
        s1 = math.sin(t * 97.3 * math.tau)
        s2 = math.sin(t * 143.7 * math.tau)
        stutter = max(s1 * s2, 0.0)
        decay = math.exp(-t * 2.0 * decay_scale)
        return onset * stutter * decay * 0.04 * intensity

    crackle_layer = (noise() >> bandpass_hz(crackle_bp, 1.5)) * lfo(crackle_env)

    mono_mix = (
        blast_layer + boom_layer + rumble_layer + mid_layer + whoosh_layer + crackle_layer
    )
    graph = (mono_mix >> lowpole_hz(ex.lowpass) >> lowpole_hz(ex.lowpass)) >> split(2)

    if ex.reverb_mix > 0.001:
        reverb = reverb2_stereo(0.6, 1.5, 0.5, 1.0, 2500.0)
        return wet_dry(graph, reverb, ex.reverb_mix)
    return graph