"""Procedural game sound effects synthesised from composable DSP graphs."""

__version__ = "0.1.0"