# procaud

Procedural sound effects for games. Each sound is computed from a small
signal graph built out of oscillators, noise, one-pole and band-pass filters,
envelopes and a stereo reverb. There are no sample files. A sound comes from a
handful of parameters, so changing the pitch or intensity gives a new
variation.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

`numpy` is the only runtime dependency.

## Presets

Each preset is a dataclass in `procaud.presets`, and each one comes with a
builder function that returns a stereo graph.

One-shot effects play once and then go silent:

| Preset (module)                     | Builder                        | Character                                      | Lifetime |
|-------------------------------------|--------------------------------|------------------------------------------------|----------|
| `SwordSlash` (`sword_slash`)        | `build_sword_slash_graph`      | FM metal ring with a closing-filter whoosh     | 1.5 s    |
| `BluntImpact` (`blunt_impact`)      | `build_blunt_impact_graph`     | crack, body thud and inharmonic clang          | 0.5 s    |
| `LightningZap` (`lightning`)        | `build_lightning_zap_graph`    | stuttering high-frequency electrical sizzle    | 0.7 s    |
| `LightningStrike` (`lightning`)     | `build_lightning_strike_graph` | bright crack followed by a rolling thunder boom | 3 s     |
| `Explosion` (`explosion`)           | `build_explosion_graph`        | blast, boom, rumble, whoosh and crackle        | 3 s      |
| `ArcaneAttack` (`arcane_attack`)    | `build_arcane_attack_graph`    | shimmering sine clusters, sparkle, rising sweep | 1 s     |

The one-shot presets take the following fields:

- `intensity`, from 0 to 1.
- `pitch_shift`, where 1.0 is the standard pitch.
- `reverb_mix`, where 0 is dry and 1 is fully wet. A mix of 0.001 or less adds no reverb.

`Explosion` and `ArcaneAttack` also take a `lowpass` cutoff in Hz. Its default
is 20 000.

Continuous effects keep playing. Their builders return a graph together with
live parameter handles:

| Preset       | Fields                                                  | Builder                   |
|--------------|---------------------------------------------------------|---------------------------|
| `Heartbeat`  | `heart_rate` (30–220 BPM), `arrhythmic_strength`, `intensity` | `build_heartbeat_graph` |
| `EarRinging` | `intensity`                                             | `build_ear_ringing_graph` |

## Rendering a sound

A builder returns a graph. Wrap it in `procaud.source.ProceduralAudio` to get
samples out of it:

```python
from procaud.presets.explosion import Explosion, build_explosion_graph
from procaud.source import ProceduralAudio
from procaud.cli import write_wav

graph = build_explosion_graph(Explosion(intensity=0.9, pitch_shift=2.0))
audio = ProceduralAudio(graph, 44100, 2)
samples = audio.render(3.0)          # float32 array, shape (frames, 2)
write_wav("fireball.wav", samples, 44100, 2)
```

`ProceduralAudio.decoder()` returns an endless iterator of interleaved float
samples, which you can feed to an audio callback. Each decoder runs on its own
copy of the graph, so two decoders made from the same `ProceduralAudio` play
independently.

`write_wav` writes 16-bit PCM. It accepts either a `(frames, channels)` array
or a flat interleaved sequence, and clips any value outside [-1, 1].

## Live parameters

The continuous presets return a `ParamHandle` for each live parameter.
Calling `set` on a handle changes the sound that is already playing. The new
value is clamped to the handle's `min` and `max`, and the `value` property
holds the current value.

```python
from procaud.presets.heartbeat import Heartbeat, build_heartbeat_graph

graph, params = build_heartbeat_graph(Heartbeat(heart_rate=72.0))
params.rate.set(140.0)     # speed up
params.intensity.set(0.9)  # louder
```

Copies of a graph share its handles, and so does every decoder made from it.

## Building your own graphs

`procaud.graph` has the following building blocks:

| Function | What it does |
|----------|--------------|
| `dc` | constant output |
| `var` | reads a `ParamHandle` |
| `sine`, `sine_hz` | sine oscillator |
| `noise` | white noise |
| `lfo` | a Python function of time, in seconds |
| `lowpole`, `lowpole_hz` | one-pole lowpass |
| `bandpass_hz` | band-pass filter |
| `split` | copies one input to several outputs |
| `reverb2_stereo` | stereo reverb |
| `wet_dry` | crossfades a graph with its reverberated copy |

Units combine with these operators:

- `+`, `-` and `*` combine the outputs.
- `>>` pipes one unit into the next.
- `|` stacks units side by side.

Plain numbers act as constants. `AudioUnit.process(frames)` returns an array
of shape `(outputs, frames)`.

## Managing many sounds

`procaud.world.World` stores entities and their components. On each
`update(dt)` it does the following:

- ticks one-shot lifetimes and despawns the entities whose lifetime has run out;
- copies the current `Heartbeat` and `EarRinging` field values into their parameter handles;
- for each preset added since the previous update, attaches a `ProceduralAudio` along with either a `OneShotLifetime` or the preset's parameters.

```python
from procaud.world import World
from procaud.presets.sword_slash import SwordSlash
from procaud.source import ProceduralAudio

world = World()
slash = world.spawn(SwordSlash(intensity=0.8))
world.update(1 / 60)                       # graph is built here
audio = world.get(slash, ProceduralAudio)
```

`World` also has `insert`, `remove`, `despawn` and `query`. Removing a
preset's parameter component also removes its `ProceduralAudio` on the next
update. `build_preset(component)` builds the same components without a world.
It raises `TypeError` if the component is not a preset.

## Command line

The `procaud` command renders a preset to a WAV file at 44.1 kHz in stereo:

```
procaud explosion -o boom.wav --pitch 2 --reverb 0.3
procaud heartbeat -o heart.wav --heart-rate 120 -d 10
```

The presets are `arcane-attack`, `blunt-impact`, `ear-ringing`, `explosion`,
`heartbeat`, `lightning-strike`, `lightning-zap` and `sword-slash`.

Options:

- `--intensity`
- `--pitch`
- `--reverb`
- `--lowpass`
- `--heart-rate`
- `--arrhythmia`

An option is accepted only by the presets that have the matching field, and
its value must lie within the allowed range.

Without `-d`/`--duration`, a one-shot preset renders for its lifetime and a
continuous one renders for 5 seconds. Run `procaud --help` for the full list.

## What this package does not do

- **No audio device output.** It produces sample arrays, decoder iterators
  and WAV files. Getting them to a sound card is up to your own audio
  library.
- **The free-form synth components are plain data.** `procaud.components`
  defines `Synth`, `OscillatorType`, `Frequency`, `Amplitude`, `LowPass`,
  `HighPass`, `BandPass`, `Reverb`, `Delay` and `Distortion`, but nothing
  turns them into a graph. `World` does not build audio for a `Synth` entity.
  To get a custom voice, build it yourself with `procaud.graph`.