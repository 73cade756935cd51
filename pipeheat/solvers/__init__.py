"""Solvers: closed-form references for verification."""

from pipeheat.solvers.analytical import AnalyticalPipe

__all__ = [
    "AnalyticalPipe",
]
