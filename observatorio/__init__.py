"""Observatorio Legislativo - legislative record analytics for a single deputy."""

__version__ = "0.1.0"
