"""Cartesian soil grid around a buried pipe.

The grid is a symmetric half-domain: width index 0 is the vertical
centreline through the pipe, width index ``n_width - 1`` the far-field
boundary.  Depth index 0 is the ground surface, ``n_depth - 1`` the deep
boundary.  Along the pipe there is one cross-section per pipe section.

Classes
-------
SoilGrid
    Node counts, spacing, and the location of the pipe node.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class SoilGrid:
    """Regular grid with equal spacing in depth and width.

    Args:
        n_depth: Number of depth nodes D.
        n_width: Number of width nodes W.
        n_sections: Number of cross-sections (pipe sections N).
        spacing: Node spacing Δs (m).
        pipe_depth_index: Depth index of the node containing the pipe.
    """

    n_depth: int
    n_width: int
    n_sections: int
    spacing: float
    pipe_depth_index: int

    pipe_width_index = 0

    @classmethod
    def around_pipe(
        cls,
        cover_depth: float,
        inner_diameter: float,
        n_sections: int,
        n_depth: int = 8,
        n_width: int | None = None,
    ) -> "SoilGrid":
        """Build the grid for a pipe buried under *cover_depth* of soil.

        The domain extends to twice the depth of the pipe axis and the
        pipe sits at depth index ``n_depth // 2 - 1``.

        Args:
            cover_depth: Soil thickness above the pipe crown (m).
            inner_diameter: Pipe internal diameter (m).
            n_sections: Number of pipe sections.
            n_depth: Number of depth nodes.
            n_width: Number of width nodes, ``n_depth // 2`` by default.
        """
        if n_depth < 2:
            raise ValueError(f"n_depth must be >= 2, got {n_depth}.")
        pipe_depth = cover_depth + inner_diameter / 2.0
        domain_depth = 2.0 * pipe_depth
        return cls(
            n_depth=n_depth,
            n_width=n_width if n_width is not None else max(n_depth // 2, 2),
            n_sections=n_sections,
            spacing=domain_depth / (n_depth - 1),
            pipe_depth_index=max(n_depth // 2 - 1, 0),
        )

    @property
    def shape(self) -> tuple[int, int, int]:
        """``(n_width, n_depth, n_sections)``."""
        return (self.n_width, self.n_depth, self.n_sections)

    @property
    def domain_depth(self) -> float:
        return self.spacing * (self.n_depth - 1)

    @property
    def node_depths(self) -> np.ndarray:
        """Depth of each depth index (m)."""
        return np.arange(self.n_depth) * self.spacing

    def boundary_mask(self) -> np.ndarray:
        """Boolean ``(n_width, n_depth)`` mask of fixed far-field/deep nodes."""
        mask = np.zeros((self.n_width, self.n_depth), dtype=bool)
        mask[-1, :] = True
        mask[:, -1] = True
        return mask

    def validate(self) -> list[str]:
        """Return a list of consistency problems (empty if OK)."""
        issues: list[str] = []
        if self.n_depth < 2:
            issues.append(f"n_depth must be >= 2, got {self.n_depth}.")
        if self.n_width < 2:
            issues.append(f"n_width must be >= 2, got {self.n_width}.")
        if self.n_sections < 1:
            issues.append(f"n_sections must be >= 1, got {self.n_sections}.")
        if self.spacing <= 0:
            issues.append(f"spacing must be > 0, got {self.spacing}.")
        if not 0 <= self.pipe_depth_index < self.n_depth - 1:
            issues.append(
                f"pipe_depth_index {self.pipe_depth_index} must lie above the "
                f"deep boundary (0..{self.n_depth - 2})."
            )
        return issues

    def __repr__(self) -> str:
        return (
            f"SoilGrid(W={self.n_width}, D={self.n_depth}, N={self.n_sections}, "
            f"spacing={self.spacing:.4g})"
        )
