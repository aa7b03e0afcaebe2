"""Command line tool that renders a sound preset to a WAV file."""

from __future__ import annotations

import argparse
import dataclasses
import wave
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from .components import OneShotLifetime
from .presets.arcane_attack import ArcaneAttack
from .presets.blunt_impact import BluntImpact
from .presets.ear_ringing import EarRinging
from .presets.explosion import Explosion
from .presets.heartbeat import Heartbeat
from .presets.lightning import LightningStrike, LightningZap
from .presets.sword_slash import SwordSlash
from .world import CHANNELS, SAMPLE_RATE, build_preset

PRESETS: dict[str, type] = {
    "arcane-attack": ArcaneAttack,
    "blunt-impact": BluntImpact,
    "ear-ringing": EarRinging,
    "explosion": Explosion,
    "heartbeat": Heartbeat,
    "lightning-strike": LightningStrike,
    "lightning-zap": LightningZap,
    "sword-slash": SwordSlash,
}

# Seconds rendered for continuous presets when no duration is given.
DEFAULT_CONTINUOUS_SECONDS = 5.0

# Option name -> (preset field, allowed range, logarithmic display hint unused).
_OPTIONS: dict[str, tuple[str, float, float]] = {
    "intensity": ("intensity", 0.0, 1.0),
    "pitch": ("pitch_shift", 0.3, 3.0),
    "reverb": ("reverb_mix", 0.0, 1.0),
    "lowpass": ("lowpass", 200.0, 20_000.0),
    "heart_rate": ("heart_rate", 30.0, 220.0),
    "arrhythmia": ("arrhythmic_strength", 0.0, 1.0),
}

_PCM_MAX = 32767


def write_wav(path, samples, sample_rate: int, channels: int) -> None:
    """Write float samples in [-1, 1] as 16-bit PCM.

    ``samples`` is either an array of shape (frames, channels) or a flat,
    interleaved sequence. Values outside [-1, 1] are clipped.
    """
    if channels < 1:
        raise ValueError(f"channel count must be at least 1, got {channels}")
    if sample_rate <= 0:
        raise ValueError(f"sample rate must be positive, got {sample_rate}")
    data = np.asarray(samples, dtype=np.float64)
    if data.ndim == 2:
        if data.shape[1] != channels:
            raise ValueError(
                f"samples have {data.shape[1]} channels, {channels} expected"
            )
    elif data.ndim == 1:
        if data.size % channels:
            raise ValueError(
                f"{data.size} interleaved samples do not divide into {channels} channels"
            )
    else:
        raise ValueError("samples must be one- or two-dimensional")
    pcm = np.round(np.clip(data, -1.0, 1.0) * _PCM_MAX).astype("<i2")
    with wave.open(str(path), "wb") as out:
        out.setnchannels(channels)
        out.setsampwidth(2)
        out.setframerate(int(sample_rate))
        out.writeframes(pcm.tobytes())


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procaud", description="Render a procedural sound preset to a WAV file."
    )
    parser.add_argument("preset", choices=sorted(PRESETS), help="sound to render")
    parser.add_argument("-o", "--output", required=True, type=Path, help="WAV file to write")
    parser.add_argument(
        "-d",
        "--duration",
        type=float,
        help="seconds to render (default: the preset's lifetime, "
        f"or {DEFAULT_CONTINUOUS_SECONDS} for continuous sounds)",
    )
    parser.add_argument("--intensity", type=float, help="overall intensity, 0 to 1")
    parser.add_argument("--pitch", type=float, help="pitch multiplier, 0.3 to 3")
    parser.add_argument("--reverb", type=float, help="reverb wet/dry mix, 0 to 1")
    parser.add_argument("--lowpass", type=float, help="output lowpass in Hz, 200 to 20000")
    parser.add_argument("--heart-rate", type=float, help="beats per minute, 30 to 220")
    parser.add_argument("--arrhythmia", type=float, help="beat timing jitter, 0 to 1")
    return parser


def _preset_from_args(parser: argparse.ArgumentParser, args: argparse.Namespace):
    kind = PRESETS[args.preset]
    field_names = {f.name for f in dataclasses.fields(kind)}
    values = {}
    for option, (field, low, high) in _OPTIONS.items():
        value = getattr(args, option)
        if value is None:
            continue
        flag = "--" + option.replace("_", "-")
        if field not in field_names:
            parser.error(f"{flag} does not apply to {args.preset}")
        if not low <= value <= high:
            parser.error(f"{flag} must be between {low:g} and {high:g}, got {value:g}")
        values[field] = value
    return kind(**values)


def main(argv: Sequence[str] | None = None) -> int:
    """Render the chosen preset and write it to the output file."""
    parser = _parser()
    args = parser.parse_args(argv)
    preset = _preset_from_args(parser, args)

    audio, extra = build_preset(preset)
    if args.duration is not None:
        if args.duration < 0:
            parser.error("--duration cannot be negative")
        seconds = args.duration
    elif isinstance(extra, OneShotLifetime):
        seconds = extra.duration
    else:
        seconds = DEFAULT_CONTINUOUS_SECONDS

    samples = audio.render(seconds)
    try:
        write_wav(args.output, samples, SAMPLE_RATE, CHANNELS)
    except OSError as exc:
        parser.exit(1, f"procaud: cannot write {args.output}: {exc}\n")
    print(f"wrote {args.output} ({seconds:g} s, {args.preset})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())