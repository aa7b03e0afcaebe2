from procaud.components import (
    Amplitude,
    BandPass,
    Delay,
    Distortion,
    Frequency,
    HighPass,
    LowPass,
    OneShotLifetime,
    OscillatorType,
    Reverb,
    Synth,
)


def test_effect_defaults():
    assert Reverb() == Reverb(room_size=0.5, decay_time=1.5, damping=0.3, mix=0.3)
    assert Delay() == Delay(time_seconds=0.3, feedback=0.4, mix=0.3)
    assert Distortion() == Distortion(drive=2.0, mix=0.5)


def test_filter_defaults():
    assert LowPass() == LowPass(cutoff_hz=1000.0, resonance=1.0)
    assert HighPass() == HighPass(cutoff_hz=200.0, resonance=1.0)
    assert BandPass() == BandPass(center_hz=1000.0, bandwidth=200.0)


def test_synth_defaults():
    assert Frequency().value == 440.0
    assert Amplitude().value == 0.3
    assert Synth() == Synth()


def test_oscillator_members():
    looked_up = [OscillatorType(member.value) for member in OscillatorType]
    assert looked_up == list(OscillatorType)
    assert {member.name for member in looked_up} == {
        "SINE",
        "SAW",
        "SQUARE",
        "TRIANGLE",
        "NOISE",
    }


def test_components_are_mutable():
    lp = LowPass()
    lp.cutoff_hz = 2000.0
    assert lp == LowPass(cutoff_hz=2000.0, resonance=1.0)


def test_lifetime_starts_at_zero():
    assert OneShotLifetime(1.5).elapsed == 0.0


def test_lifetime_tick_until_finished():
    lifetime = OneShotLifetime(0.5)
    assert lifetime.tick(0.25) is False
    assert lifetime.elapsed == 0.25
    assert lifetime.tick(0.25) is True


def test_lifetime_zero_duration_finishes_immediately():
    assert OneShotLifetime(0.0).tick(0.0) is True