"""Shared, clamped parameter values read by running signal graphs."""

from __future__ import annotations


class ParamHandle:
    """A named value shared between control code and a signal graph.

    Copies of a handle are the handle itself, so a cloned graph keeps
    listening to the same parameter.
    """

    def __init__(self, name: str, initial: float, min: float, max: float) -> None:
        if min > max:
            raise ValueError(f"parameter {name!r}: min {min} exceeds max {max}")
        self.name = name
        self.min = float(min)
        self.max = float(max)
        self._value = float(initial)

    @property
    def value(self) -> float:
        """The current value."""
        return self._value

    def set(self, value: float) -> None:
        """Store ``value`` clamped to the parameter's range."""
        value = float(value)
        if value < self.min:
            value = self.min
        elif value > self.max:
            value = self.max
        self._value = value

    def __copy__(self) -> ParamHandle:
        return self

    def __deepcopy__(self, memo: dict) -> ParamHandle:
        # Record the handle as its own copy so every reference in a deep
        # copied graph resolves to this one shared instance.
        memo[id(self)] = self
        return memo[id(self)]

    def __repr__(self) -> str:
        return (
            f"ParamHandle(name={self.name!r}, value={self._value}, "
            f"min={self.min}, max={self.max})"
        )