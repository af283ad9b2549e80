"""Metrics module for tournament runs."""

from .tracker import RunMetrics

__all__ = ["RunMetrics"]
