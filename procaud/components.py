"""Components describing synth voices, filters, effects and one-shot lifetimes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class Reverb:
    """Reverb effect attached to a synth voice."""

    room_size: float = 0.5
    decay_time: float = 1.5
    damping: float = 0.3
    mix: float = 0.3
    """Wet/dry mix (0.0 = fully dry, 1.0 = fully wet)."""


@dataclass
class Delay:
    """Delay effect attached to a synth voice."""

    time_seconds: float = 0.3
    feedback: float = 0.4
    mix: float = 0.3


@dataclass
class Distortion:
    """Soft-clip waveshaper; a drive of 1.0 is clean."""

    drive: float = 2.0
    mix: float = 0.5


@dataclass
class LowPass:
    """Low-pass filter attached to a synth voice."""

    cutoff_hz: float = 1000.0
    resonance: float = 1.0


@dataclass
class HighPass:
    """High-pass filter attached to a synth voice."""

    cutoff_hz: float = 200.0
    resonance: float = 1.0


@dataclass
class BandPass:
    """Band-pass filter attached to a synth voice."""

    center_hz: float = 1000.0
    bandwidth: float = 200.0


@dataclass
class Synth:
    """Marker that asks for a synth graph to be built for its entity."""


class OscillatorType(Enum):
    """Oscillator waveform; SINE is the default."""

    SINE = "sine"
    SAW = "saw"
    SQUARE = "square"
    TRIANGLE = "triangle"
    NOISE = "noise"


@dataclass
class Frequency:
    """Oscillator frequency in Hz."""

    value: float = 440.0


@dataclass
class Amplitude:
    """Output amplitude (0.0 to 1.0)."""

    value: float = 0.3


@dataclass
class OneShotLifetime:
    """Counts down the life of a one-shot sound entity."""

    duration: float
    elapsed: float = 0.0

    def tick(self, dt: float) -> bool:
        """Advance by ``dt`` seconds and report whether the lifetime is over."""
        self.elapsed += dt
        return self.elapsed >= self.duration