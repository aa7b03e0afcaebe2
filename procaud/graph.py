"""Composable signal graphs processed in blocks with numpy.

Units combine with ``+`` and ``*`` (outputs combined, inputs kept apart),
``>>`` (pipe) and ``|`` (stack). Plain numbers act as constants.
"""

from __future__ import annotations

import abc
import copy
import itertools
import math
import operator
from collections.abc import Callable, Iterator, Sequence

import numpy as np

from .param import ParamHandle

BLOCK_SIZE = 64
DEFAULT_SAMPLE_RATE = 44100.0
LFO_INTERVAL = 0.002
TAU = 2.0 * math.pi

_EXPONENTS = np.subtract.outer(np.arange(BLOCK_SIZE), np.arange(BLOCK_SIZE))
_seeds = itertools.count(1)

_REVERB_DELAYS = (0.0297, 0.0371, 0.0411, 0.0437, 0.0533, 0.0613, 0.0677, 0.0743)
_H2 = np.array([[1.0, 1.0], [1.0, -1.0]])
_HADAMARD = np.kron(np.kron(_H2, _H2), _H2) / math.sqrt(8.0)


def _blocks(n: int) -> Iterator[slice]:
    for start in range(0, n, BLOCK_SIZE):
        yield slice(start, min(start + BLOCK_SIZE, n))


def _one_pole(x: np.ndarray, b: float, y0: float) -> tuple[np.ndarray, float]:
    """Run y = (1 - b) x + b y[-1] over a chunk of at most BLOCK_SIZE samples."""
    m = x.shape[0]
    if m == 0:
        return x.copy(), y0
    lag = _EXPONENTS[:m, :m]
    weights = np.where(lag >= 0, b ** np.maximum(lag, 0), 0.0)
    y = (1.0 - b) * (weights @ x) + b ** np.arange(1, m + 1) * y0
    return y, float(y[-1])


def _biquad_run(coeffs, xs, state):
    b0, b1, b2, a1, a2 = coeffs
    z1, z2 = state
    ys, states = [], []
    for x in xs:
        y = b0 * x + z1
        z1 = b1 * x - a1 * y + z2
        z2 = b2 * x - a2 * y
        ys.append(y)
        states.append((z1, z2))
    return ys, states


class AudioUnit(abc.ABC):
    """A signal processor with a fixed number of inputs and outputs."""

    def __init__(self, inputs: int, outputs: int, children: Sequence[AudioUnit] = ()) -> None:
        self.inputs = inputs
        self.outputs = outputs
        self._children = tuple(children)
        self._sample_rate = DEFAULT_SAMPLE_RATE
        self._reset_state()

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    def _units(self) -> Iterator[AudioUnit]:
        yield self
        for child in self._children:
            yield from child._units()

    def set_sample_rate(self, rate: float) -> None:
        """Set the sample rate of the whole graph and reset its state."""
        if rate <= 0:
            raise ValueError(f"sample rate must be positive, got {rate}")
        for unit in self._units():
            unit._sample_rate = float(rate)
        self.reset()

    def reset(self) -> None:
        """Return every unit in the graph to its initial state."""
        for unit in self._units():
            unit._reset_state()

    def clone(self) -> AudioUnit:
        """An independent copy, including current state; parameters stay shared."""
        return copy.deepcopy(self)

    def process(self, frames: int) -> np.ndarray:
        """Render ``frames`` samples with silent inputs; shape (outputs, frames)."""
        if frames < 0:
            raise ValueError("frame count cannot be negative")
        return self._process(np.zeros((self.inputs, frames)), frames)

    def _reset_state(self) -> None:
        pass

    @abc.abstractmethod
    def _process(self, x: np.ndarray, n: int) -> np.ndarray:
        """Process inputs ``x`` (inputs, n) into outputs (outputs, n)."""

    def __add__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Combine(self, other, operator.add)

    def __radd__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Combine(other, self, operator.add)

    def __sub__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Combine(self, other, operator.sub)

    def __mul__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Combine(self, other, operator.mul)

    def __rmul__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Combine(other, self, operator.mul)

    def __rshift__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Pipe(self, other)

    def __or__(self, other):
        other = _as_unit(other)
        return NotImplemented if other is None else _Stack(self, other)


def _as_unit(value) -> AudioUnit | None:
    if isinstance(value, AudioUnit):
        return value
    if isinstance(value, (int, float)):
        return _Constant((float(value),))
    return None


class _Combine(AudioUnit):
    def __init__(self, a: AudioUnit, b: AudioUnit, op: Callable) -> None:
        if a.outputs != b.outputs:
            raise ValueError(f"cannot combine {a.outputs} outputs with {b.outputs}")
        self._op = op
        super().__init__(a.inputs + b.inputs, a.outputs, (a, b))

    def _process(self, x, n):
        a, b = self._children
        return self._op(a._process(x[: a.inputs], n), b._process(x[a.inputs :], n))


class _Pipe(AudioUnit):
    def __init__(self, a: AudioUnit, b: AudioUnit) -> None:
        if a.outputs != b.inputs:
            raise ValueError(f"cannot pipe {a.outputs} outputs into {b.inputs} inputs")
        super().__init__(a.inputs, b.outputs, (a, b))

    def _process(self, x, n):
        a, b = self._children
        return b._process(a._process(x, n), n)


class _Stack(AudioUnit):
    def __init__(self, a: AudioUnit, b: AudioUnit) -> None:
        super().__init__(a.inputs + b.inputs, a.outputs + b.outputs, (a, b))

    def _process(self, x, n):
        a, b = self._children
        return np.vstack((a._process(x[: a.inputs], n), b._process(x[a.inputs :], n)))


class _Constant(AudioUnit):
    def __init__(self, values: Sequence[float]) -> None:
        self._values = np.asarray(values, dtype=float)
        super().__init__(0, len(self._values))

    def _process(self, x, n):
        return np.repeat(self._values[:, None], n, axis=1)


class _Var(AudioUnit):
    def __init__(self, param: ParamHandle) -> None:
        self._param = param
        super().__init__(0, 1)

    def _process(self, x, n):
        return np.full((1, n), self._param.value)


class _Sine(AudioUnit):
    def __init__(self) -> None:
        super().__init__(1, 1)

    def _reset_state(self):
        self._phase = 0.0

    def _process(self, x, n):
        if n == 0:
            return np.zeros((1, 0))
        step = x[0] / self._sample_rate
        advanced = np.cumsum(step)
        phases = self._phase + advanced - step
        self._phase = float((self._phase + advanced[-1]) % 1.0)
        return np.sin(TAU * phases)[None, :]


class _Noise(AudioUnit):
    def __init__(self, seed: int) -> None:
        self._seed = seed
        super().__init__(0, 1)

    def _reset_state(self):
        self._rng = np.random.default_rng(self._seed)

    def _process(self, x, n):
        return self._rng.uniform(-1.0, 1.0, size=(1, n))


class _Lfo(AudioUnit):
    def __init__(self, func: Callable[[float], float]) -> None:
        self._func = func
        super().__init__(0, 1)

    def _reset_state(self):
        self._sample_index = 0

    def _process(self, x, n):
        if n == 0:
            return np.zeros((1, 0))
        times = (self._sample_index + np.arange(n)) / self._sample_rate
        self._sample_index += n
        first = math.floor(times[0] / LFO_INTERVAL)
        last = math.ceil(times[-1] / LFO_INTERVAL)
        knots = np.arange(first, last + 1) * LFO_INTERVAL
        values = np.array([float(self._func(float(t))) for t in knots])
        return np.interp(times, knots, values)[None, :]


class _LowPole(AudioUnit):
    def __init__(self, cutoff: float | None) -> None:
        self._cutoff = cutoff
        super().__init__(2 if cutoff is None else 1, 1)

    def _reset_state(self):
        self._y = 0.0

    def _process(self, x, n):
        signal = x[0]
        cutoff = x[1] if self._cutoff is None else np.full(n, float(self._cutoff))
        out = np.empty(n)
        for block in _blocks(n):
            hz = max(float(np.mean(cutoff[block])), 0.0)
            b = math.exp(-TAU * hz / self._sample_rate)
            out[block], self._y = _one_pole(signal[block], b, self._y)
        return out[None, :]


class _BandPass(AudioUnit):
    def __init__(self, center: float, q: float) -> None:
        if q <= 0:
            raise ValueError(f"bandpass Q must be positive, got {q}")
        self._center = float(center)
        self._q = float(q)
        super().__init__(1, 1)

    def _reset_state(self):
        rate = self._sample_rate
        freq = min(max(self._center, 1e-3), 0.49 * rate)
        w0 = TAU * freq / rate
        alpha = math.sin(w0) / (2.0 * self._q)
        a0 = 1.0 + alpha
        self._coeffs = (alpha / a0, 0.0, -alpha / a0, -2.0 * math.cos(w0) / a0, (1.0 - alpha) / a0)
        self._matrices: dict[int, tuple[np.ndarray, ...]] = {}
        self._state = np.zeros(2)

    def _block_matrices(self, m: int) -> tuple[np.ndarray, ...]:
        cached = self._matrices.get(m)
        if cached is None:
            h, h_states = _biquad_run(self._coeffs, [1.0] + [0.0] * (m - 1), (0.0, 0.0))
            e1, e1_states = _biquad_run(self._coeffs, [0.0] * m, (1.0, 0.0))
            e2, e2_states = _biquad_run(self._coeffs, [0.0] * m, (0.0, 1.0))
            lag = _EXPONENTS[:m, :m]
            transfer = np.where(lag >= 0, np.array(h)[np.maximum(lag, 0)], 0.0)
            from_state = np.column_stack((e1, e2))
            state_step = np.column_stack((e1_states[-1], e2_states[-1]))
            state_in = np.array(h_states[::-1]).T
            cached = (transfer, from_state, state_step, state_in)
            self._matrices[m] = cached
        return cached

    def _process(self, x, n):
        signal = x[0]
        out = np.empty(n)
        state = self._state
        for block in _blocks(n):
            chunk = signal[block]
            transfer, from_state, state_step, state_in = self._block_matrices(chunk.shape[0])
            out[block] = transfer @ chunk + from_state @ state
            state = state_in @ chunk + state_step @ state
        self._state = state
        return out[None, :]


class _Split(AudioUnit):
    def __init__(self, channels: int) -> None:
        if channels < 1:
            raise ValueError("split needs at least one channel")
        super().__init__(1, channels)

    def _process(self, x, n):
        return np.repeat(x[:1], self.outputs, axis=0)


class _Reverb(AudioUnit):
    """Stereo feedback-delay-network reverb with damped feedback."""

    def __init__(self, room_size, time, diffusion, modulation_speed, damping_hz) -> None:
        if time <= 0:
            raise ValueError(f"reverb time must be positive, got {time}")
        if damping_hz <= 0:
            raise ValueError(f"damping frequency must be positive, got {damping_hz}")
        self._room_size = float(room_size)
        self._time = float(time)
        self._diffusion = min(max(float(diffusion), 0.0), 1.0)
        self._modulation_speed = float(modulation_speed)
        self._damping_hz = float(damping_hz)
        super().__init__(2, 2)

    def _reset_state(self):
        rate = self._sample_rate
        scale = 0.5 + self._room_size
        self._lengths = [max(BLOCK_SIZE, round(d * scale * rate)) for d in _REVERB_DELAYS]
        self._lines = [np.zeros(length) for length in self._lengths]
        self._positions = [0] * len(self._lengths)
        self._gains = np.array([10.0 ** (-3.0 * length / (self._time * rate)) for length in self._lengths])
        self._damp = math.exp(-TAU * self._damping_hz / rate)
        self._damp_state = [0.0] * len(self._lengths)
        self._sample_index = 0

    def _process(self, x, n):
        out = np.zeros((2, n))
        for block in _blocks(n):
            out[:, block] = self._block(x[:, block])
        return out

    def _block(self, x: np.ndarray) -> np.ndarray:
        m = x.shape[1]
        offsets = np.arange(m)
        indices = [(pos + offsets) % length for pos, length in zip(self._positions, self._lengths)]
        reads = np.array([line[idx] for line, idx in zip(self._lines, indices)])

        damped = np.empty_like(reads)
        for i, row in enumerate(reads):
            damped[i], self._damp_state[i] = _one_pole(row, self._damp, self._damp_state[i])
        feedback = _HADAMARD @ (damped * self._gains[:, None])

        spread = self._diffusion / 2.0
        left, right = x[0], x[1]
        own = np.array([left if i % 2 == 0 else right for i in range(len(self._lines))])
        other = np.array([right if i % 2 == 0 else left for i in range(len(self._lines))])
        written = (1.0 - spread) * own + spread * other + feedback

        for line, idx, row in zip(self._lines, indices, written):
            line[idx] = row
        self._positions = [(pos + m) % length for pos, length in zip(self._positions, self._lengths)]

        times = (self._sample_index + offsets) / self._sample_rate
        self._sample_index += m
        wobble = 1.0 + 0.05 * np.sin(
            TAU * 0.1 * self._modulation_speed * times[None, :]
            + np.arange(len(self._lines))[:, None]
        )
        weighted = reads * wobble
        return np.vstack((weighted[0::2].sum(axis=0), weighted[1::2].sum(axis=0))) / 2.0


def dc(*args) -> AudioUnit:
    """Constant outputs: ``dc(1.0)``, ``dc(a, b)`` or ``dc((a, b))``."""
    values = args[0] if len(args) == 1 and isinstance(args[0], (tuple, list)) else args
    if not values:
        raise ValueError("dc needs at least one value")
    return _Constant(tuple(float(v) for v in values))


def var(param: ParamHandle) -> AudioUnit:
    """Output the current value of a shared parameter."""
    return _Var(param)


def sine() -> AudioUnit:
    """Sine oscillator whose frequency in Hz is its input."""
    return _Sine()


def sine_hz(freq: float) -> AudioUnit:
    """Sine oscillator at a fixed frequency."""
    return dc(freq) >> sine()


def noise(seed: int | None = None) -> AudioUnit:
    """Uniform white noise in [-1, 1); each unit gets its own stream by default."""
    return _Noise(next(_seeds) if seed is None else seed)


def lfo(func: Callable[[float], float]) -> AudioUnit:
    """A function of time in seconds, sampled every LFO_INTERVAL and interpolated."""
    return _Lfo(func)


def lowpole() -> AudioUnit:
    """One-pole lowpass; inputs are the signal and the cutoff in Hz."""
    return _LowPole(None)


def lowpole_hz(cutoff: float) -> AudioUnit:
    """One-pole lowpass at a fixed cutoff."""
    return _LowPole(float(cutoff))


def bandpass_hz(center: float, q: float) -> AudioUnit:
    """Biquad bandpass with unity gain at the centre frequency."""
    return _BandPass(center, q)


def split(channels: int) -> AudioUnit:
    """Copy one input to ``channels`` outputs."""
    return _Split(channels)


def reverb2_stereo(room_size, time, diffusion, modulation_speed, damping_hz) -> AudioUnit:
    """Stereo reverb decaying by 60 dB over ``time`` seconds."""
    return _Reverb(room_size, time, diffusion, modulation_speed, damping_hz)


def wet_dry(graph: AudioUnit, reverb: AudioUnit, mix: float) -> AudioUnit:
    """Crossfade ``graph`` with ``graph >> reverb``; a mix of 0 is fully dry."""
    dry = (1.0 - mix,) * graph.outputs
    wet = (mix,) * graph.outputs
    return graph.clone() * dc(dry) + (graph >> reverb) * dc(wet)