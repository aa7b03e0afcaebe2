"""Heartbeat: a rhythmic lub-dub thump with adjustable rate and arrhythmia."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..graph import AudioUnit, lfo, lowpole_hz, split
from ..param import ParamHandle


@dataclass
class Heartbeat:
    """Continuous heartbeat; change the fields to update a running sound."""

    heart_rate: float = 72.0
    """Beats per minute (30 to 220)."""
    arrhythmic_strength: float = 0.0
    """Jitter on beat timing (0.0 regular, 1.0 chaotic)."""
    intensity: float = 0.5
    """Overall intensity (0.0 to 1.0)."""


@dataclass
class HeartbeatParams:
    """Live parameters of a running heartbeat graph."""

    rate: ParamHandle
    intensity: ParamHandle
    arrhythmia: ParamHandle


def heart_sound(local_t: float, freq_lo: float, freq_hi: float, decay: float) -> float:
    """One damped two-harmonic burst at ``local_t`` seconds after its onset."""
    if local_t < 0.0:
        return 0.0
    attack = min(local_t * 500.0, 1.0)
    env = attack * math.exp(-decay * local_t)
    lo = math.sin(math.tau * freq_lo * local_t)
    hi = math.sin(math.tau * freq_hi * local_t) * 0.4
    return (lo + hi) * env


def build_heartbeat_graph(hb: Heartbeat) -> tuple[AudioUnit, HeartbeatParams]:
    """Build the stereo heartbeat graph and its live parameters.

    Each beat is a deep S1 ("lub") followed a third of a period later by a
    higher, sharper S2 ("dub").
    """
    rate = ParamHandle("heart_rate", hb.heart_rate, 30.0, 220.0)
    intensity = ParamHandle("intensity", hb.intensity, 0.0, 1.0)
    arrhythmia = ParamHandle("arrhythmia", hb.arrhythmic_strength, 0.0, 1.0)

    def beat(t: float) -> float:
        bpm = max(rate.value, 30.0)
        beat_period = 60.0 / bpm

        # Incommensurate sines give a chaotic-feeling timing jitter.
        jitter = arrhythmia.value * 0.4 * (
            math.sin(math.tau * 0.37 * t) * 0.5
            + math.sin(math.tau * 0.83 * t) * 0.3
            + math.sin(math.tau * 1.71 * t) * 0.2
        )
        phase = math.fmod(t / beat_period + jitter, 1.0)

        s1 = heart_sound(phase * beat_period, 45.0, 90.0, 25.0)
        s2 = heart_sound((phase - 0.33) * beat_period, 65.0, 130.0, 35.0) * 0.7
        return (s1 + s2) * intensity.value

    graph = lfo(beat) >> lowpole_hz(150.0) >> split(2)
    params = HeartbeatParams(rate=rate, intensity=intensity, arrhythmia=arrhythmia)
    return graph, params