"""Concurrent shell command runner with result consolidation."""

__version__ = "0.1.0"
