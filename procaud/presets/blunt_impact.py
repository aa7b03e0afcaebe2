"""One-shot blunt impact: a mace, hammer or club striking a body."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..graph import (
    AudioUnit,
    dc,
    lfo,
    lowpole_hz,
    noise,
    reverb2_stereo,
    sine,
    split,
    wet_dry,
)


@dataclass
class BluntImpact:
    """Impact sound of about 0.3 s: crack, thud and metallic clang."""

    intensity: float = 0.8
    """Overall intensity (0.0 to 1.0)."""
    pitch_shift: float = 1.0
    """Pitch multiplier (1.0 normal, below 1 lower, above 1 higher)."""
    reverb_mix: float = 0.0
    """Reverb wet/dry mix (0.0 dry, 1.0 fully wet)."""


def build_blunt_impact_graph(bi: BluntImpact) -> AudioUnit:
    """Build the stereo blunt impact graph; it has no runtime parameters."""
    intensity = bi.intensity
    pitch = bi.pitch_shift

    # Impact crack: a punchy broadband noise burst.
    def crack_env(t: float) -> float:
        if t > 0.1:
            return 0.0
        attack = min(t * 500.0, 1.0)
        decay = math.exp(-t * 35.0)
        return attack * decay * 0.5 * intensity

    crack = (noise() >> lowpole_hz(5000.0 * pitch)) * lfo(crack_env)

    # Body thud: low-frequency weight.
    thud_lo = 45.0 * pitch
    thud_hi = 90.0 * pitch

    def thud_env(t: float) -> float:
        if t > 0.15:
            return 0.0
        attack = min(t * 200.0, 1.0)
        decay = math.exp(-t * 20.0)
        return attack * decay * 0.35 * intensity

    thud = (dc(thud_lo) >> sine() + dc(thud_hi) >> sine()) * lfo(thud_env)

    # Weapon clang: inharmonic sine cluster.
    c1, c2, c3, c4 = (f * pitch for f in (780.0, 1850.0, 3100.0, 4700.0))

    def clang_env(t: float) -> float:
        if t > 0.2:
            return 0.0
        attack = min(t * 500.0, 1.0)
        decay = math.exp(-t * 18.0)
        return attack * decay * 0.08 * intensity

    clang_src = dc(c1) >> sine() + dc(c2) >> sine() + dc(c3) >> sine() + dc(c4) >> sine()
    clang = clang_src * lfo(clang_env)

    graph = (crack + thud + clang) >> split(2)

    if bi.reverb_mix > 0.001:
        reverb = reverb2_stereo(0.4, 0.8, 0.5, 1.0, 4000.0)
        return wet_dry(graph, reverb, bi.reverb_mix)
    return graph