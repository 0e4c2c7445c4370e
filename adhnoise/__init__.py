"""Weighted colored-noise generation, a playback daemon and an equalizer window."""

__version__ = "0.2.0"