"""Falling block puzzle core with a Gymnasium environment on top."""

__version__ = "0.1.0"
