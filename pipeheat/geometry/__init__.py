"""Geometry: along-pipe sections and the buried-pipe soil grid."""

from pipeheat.geometry.pipe import PipeGeometry
from pipeheat.geometry.grid import SoilGrid

__all__ = [
    "PipeGeometry",
    "SoilGrid",
]
