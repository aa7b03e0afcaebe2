"""Playable audio sources that pull interleaved samples from a signal graph."""

from __future__ import annotations

import itertools
import threading

import numpy as np

from .graph import BLOCK_SIZE, AudioUnit


class ProceduralAudio:
    """A signal graph prepared for playback at a given rate and channel count."""

    def __init__(self, graph: AudioUnit, sample_rate: int, channels: int) -> None:
        if channels < 1:
            raise ValueError(f"channel count must be at least 1, got {channels}")
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        needed = min(channels, 2)
        if graph.outputs < needed:
            raise ValueError(f"graph has {graph.outputs} outputs, {needed} needed")
        graph.set_sample_rate(sample_rate)
        self._graph = graph
        self._lock = threading.Lock()
        self.sample_rate = int(sample_rate)
        self.channels = int(channels)

    def decoder(self) -> ProceduralAudioDecoder:
        """A fresh, independent sample stream from a copy of the graph."""
        with self._lock:
            unit = self._graph.clone()
        unit.set_sample_rate(self.sample_rate)
        return ProceduralAudioDecoder(unit, self.sample_rate, self.channels)

    def render(self, seconds: float) -> np.ndarray:
        """Render ``seconds`` of audio as a float32 array of shape (frames, channels)."""
        if seconds < 0:
            raise ValueError("duration cannot be negative")
        frames = round(seconds * self.sample_rate)
        count = frames * self.channels
        data = np.fromiter(
            itertools.islice(self.decoder(), count), dtype=np.float32, count=count
        )
        return data.reshape(frames, self.channels)


class ProceduralAudioDecoder:
    """Endless iterator of interleaved float samples.

    Channel 0 and, when present, channel 1 come from the graph's first two
    outputs; any further channels are silent.
    """

    current_frame_len = None
    total_duration = None

    def __init__(self, graph: AudioUnit, sample_rate: int, channels: int) -> None:
        self._graph = graph
        self.sample_rate = sample_rate
        self.channels = channels
        self._buffer = np.zeros(BLOCK_SIZE * channels, dtype=np.float32)
        self._pos = self._buffer.size

    def __iter__(self) -> ProceduralAudioDecoder:
        return self

    def __next__(self) -> float:
        if self._pos >= self._buffer.size:
            self._fill_block()
        sample = float(self._buffer[self._pos])
        self._pos += 1
        return sample

    def _fill_block(self) -> None:
        output = self._graph.process(BLOCK_SIZE)
        frames = np.zeros((BLOCK_SIZE, self.channels), dtype=np.float32)
        frames[:, 0] = output[0]
        if self.channels >= 2:
            frames[:, 1] = output[1]
        self._buffer = frames.ravel()
        self._pos = 0