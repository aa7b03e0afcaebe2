"""Ear ringing (tinnitus): beating high tones circling the listener's head."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..graph import AudioUnit, dc, lfo, sine, split, var
from ..param import ParamHandle


@dataclass
class EarRinging:
    """Continuous tinnitus tone."""

    intensity: float = 0.3
    """Overall intensity (0.0 to 1.0)."""


@dataclass
class EarRingingParams:
    """Live parameters of a running ear ringing graph."""

    intensity: ParamHandle


def _amp_mod(t: float) -> float:
    throb = 0.55 + 0.45 * math.sin(math.tau * 0.14 * t)
    flutter = 0.8 + 0.2 * math.sin(math.tau * 0.7 * t)
    return throb * flutter


def _left_gain(t: float) -> float:
    return 0.3 + 0.7 * math.cos(math.tau * 0.12 * t) ** 2


def _right_gain(t: float) -> float:
    return 0.3 + 0.7 * math.sin(math.tau * 0.12 * t) ** 2


def build_ear_ringing_graph(er: EarRinging) -> tuple[AudioUnit, EarRingingParams]:
    """Build the stereo ear ringing graph and its live parameters.

    Detuned high tones beat against each other; slow amplitude modulation
    and opposed channel gains make the sound circle the head.
    """
    intensity = ParamHandle("intensity", er.intensity, 0.0, 1.0)

    tones = (
        (
            dc(4000.0) >> sine()
            + dc(4015.0) >> sine()
            + dc(5200.0) >> sine()
            + dc(5230.0) >> sine()
            + dc(6800.0) >> sine()
            + dc(6790.0) >> sine()
        )
        * dc(1.0 / 6.0)
        * var(intensity)
    )

    stereo = (tones * lfo(_amp_mod)) >> split(2)
    graph = stereo * (lfo(_left_gain) | lfo(_right_gain))
    return graph, EarRingingParams(intensity=intensity)