"""Along-pipe discretisation.

Classes
-------
PipeGeometry
    Per-section areas and capacities of a pipe split into N equal
    sections.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from pipeheat.materials.base import PipeConstruction


@dataclass(frozen=True)
class PipeGeometry:
    """A pipe of given construction divided into *n_sections* sections.

    Args:
        construction: Lumped wall and insulation description.
        length: Total pipe length (m).
        n_sections: Number of along-pipe sections N.
    """

    construction: PipeConstruction
    length: float
    n_sections: int = 20

    @property
    def inner_diameter(self) -> float:
        return self.construction.inner_diameter

    @property
    def section_length(self) -> float:
        """Length of one section (m)."""
        return self.length / self.n_sections

    @property
    def flow_area(self) -> float:
        """Internal cross-sectional area (m²)."""
        return np.pi * 0.25 * self.inner_diameter ** 2

    @property
    def inside_area(self) -> float:
        """Fluid-side wall area of one section (m²)."""
        return np.pi * self.inner_diameter * self.section_length

    @property
    def outside_area(self) -> float:
        """Outer (insulation) surface area of one section (m²)."""
        return np.pi * self.construction.insulation_outer_diameter * self.section_length

    @property
    def wall_heat_capacity(self) -> float:
        """Heat capacity of the pipe wall of one section (J/K)."""
        c = self.construction
        wall_area = np.pi * 0.25 * (c.pipe_outer_diameter ** 2 - c.inner_diameter ** 2)
        return c.pipe_density * c.pipe_specific_heat * wall_area * self.section_length

    def fluid_heat_capacity(self, density: float, specific_heat: float) -> float:
        """Heat capacity of the fluid held in one section (J/K)."""
        return self.flow_area * self.section_length * density * specific_heat

    def section_positions(self) -> np.ndarray:
        """Distance from the inlet of nodes 0..N (m)."""
        return np.arange(self.n_sections + 1) * self.section_length

    def __repr__(self) -> str:
        return (
            f"PipeGeometry(ID={self.inner_diameter}, length={self.length}, "
            f"n_sections={self.n_sections})"
        )
