import copy

import pytest

from procaud.param import ParamHandle


def test_initial_value_is_kept_unclamped():
    handle = ParamHandle("rate", 500.0, 30.0, 220.0)
    assert handle.value == 500.0


def test_set_within_range():
    handle = ParamHandle("intensity", 0.5, 0.0, 1.0)
    handle.set(0.75)
    assert handle.value == 0.75


def test_set_clamps_high_and_low():
    handle = ParamHandle("heart_rate", 72.0, 30.0, 220.0)
    handle.set(1000.0)
    assert handle.value == 220.0
    handle.set(-5.0)
    assert handle.value == 30.0


def test_attributes():
    handle = ParamHandle("arrhythmia", 0.0, 0.0, 1.0)
    assert (handle.name, handle.min, handle.max) == ("arrhythmia", 0.0, 1.0)


def test_copies_share_the_value():
    handle = ParamHandle("intensity", 0.3, 0.0, 1.0)
    twin = copy.deepcopy(handle)
    assert twin is handle
    twin.set(0.9)
    assert handle.value == 0.9
    assert copy.copy(handle) is handle


def test_inverted_range_is_rejected():
    with pytest.raises(ValueError):
        ParamHandle("bad", 0.0, 1.0, 0.0)