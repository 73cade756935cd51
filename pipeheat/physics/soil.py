"""Finite-difference soil temperatures around a buried pipe.

Governing equation (per cross-section, implicit in time)::

    T = a1 Σ T_nb + a2 T',    a1 = Fo / (1 + 4 Fo),  a2 = 1 / (1 + 4 Fo)

with ``Fo = α Δt / Δs²``.  The ground surface carries a full energy
balance with convection, sky radiation, and solar gain; the node holding
the pipe is coupled to the near-pipe model of its section.  The far-width
and deep boundaries follow the undisturbed ground temperature.

The system is solved by successive substitution: each sweep recomputes
every free node from the previous sweep's values until the largest
change falls below the tolerance.

Classes
-------
SweepResult
    Outcome of one iterative solve.
BuriedSoilSolver
    Soil grid solver for one sub-step.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from pipeheat.boundaries.ground import GroundTemperatureModel
from pipeheat.physics.base import PipeSolver, StepContext
from pipeheat.physics.correlations import (
    absorbed_solar,
    exterior_surface_convection,
    sky_radiation_coefficient,
)
from pipeheat.physics.nearpipe import NearPipeSolver
from pipeheat.time.state import ThermalState, TimeSlot

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 200
CONVERGENCE_TOLERANCE = 0.05  # K

_sky_radiation = np.vectorize(sky_radiation_coefficient, otypes=[float])


@dataclass(frozen=True)
class SweepResult:
    """Outcome of :meth:`BuriedSoilSolver.solve`.

    Attributes:
        iterations: Sweeps performed.
        converged: Whether the tolerance was met.
        max_change: Largest nodal change in the last sweep (K).
    """

    iterations: int
    converged: bool
    max_change: float


class BuriedSoilSolver(PipeSolver):
    """Iterative soil solver coupled to the near-pipe model.

    Args:
        config: Ground-coupled :class:`~pipeheat.config.PipeConfiguration`.
        near_pipe: Solver used for the pipe node of each section.
        ground: Undisturbed ground temperature for the boundaries.
        max_iterations: Sweep cap.
        tolerance: Largest nodal change accepted as converged (K).
    """

    name = "soil"

    def __init__(
        self,
        config,
        near_pipe: NearPipeSolver,
        ground: GroundTemperatureModel,
        max_iterations: int = MAX_ITERATIONS,
        tolerance: float = CONVERGENCE_TOLERANCE,
    ) -> None:
        super().__init__(config)
        self.grid = config.grid
        self.soil = config.soil
        self.near_pipe = near_pipe
        self.ground = ground
        self.max_iterations = max_iterations
        self.tolerance = tolerance

    def validate(self) -> list[str]:
        issues = super().validate()
        if self.grid is None or self.soil is None:
            issues.append("Soil solver needs a ground-coupled configuration.")
        if self.max_iterations < 1:
            issues.append(f"max_iterations must be >= 1, got {self.max_iterations}.")
        return issues

    # ------------------------------------------------------------------
    # Coefficients and boundaries
    # ------------------------------------------------------------------

    def fourier_number(self, dt: float) -> float:
        return self.soil.diffusivity * dt / self.grid.spacing ** 2

    def weights(self, dt: float) -> tuple[float, float]:
        """Neighbour and history weights ``(a1, a2)``."""
        fo = self.fourier_number(dt)
        return fo / (1.0 + 4.0 * fo), 1.0 / (1.0 + 4.0 * fo)

    def boundary_temperatures(self, day: float) -> np.ndarray:
        """Undisturbed temperature at each depth index."""
        return np.asarray(self.ground.temperature(self.grid.node_depths, day), dtype=float)

    def initialize(self, state: ThermalState, day: float) -> None:
        """Set every grid node, in all slots, to the undisturbed profile."""
        profile = self.boundary_temperatures(day)
        state.soil[...] = profile[np.newaxis, np.newaxis, :, np.newaxis]

    def refresh_boundaries(self, state: ThermalState, day: float) -> None:
        """Set far-width and deep nodes, in all slots, for *day*."""
        profile = self.boundary_temperatures(day)
        mask = self.grid.boundary_mask()
        depth_index = np.nonzero(mask)[1]
        state.soil[:, mask, :] = profile[depth_index][np.newaxis, :, np.newaxis]

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def solve(self, state: ThermalState, ctx: StepContext) -> SweepResult:
        """Iterate the tentative grid to convergence for one sub-step.

        Heat lost by the pipe is taken from the final sweep and added to
        ``state.environment_heat_loss``.

        Returns:
            Iteration count, convergence flag, and last nodal change.
        """
        self.refresh_boundaries(state, ctx.day)
        soil = state.soil
        past = soil[TimeSlot.PREVIOUS]
        temp = soil[TimeSlot.TENTATIVE]
        n_sections = self.grid.n_sections

        a1, a2 = self.weights(ctx.dt)
        env_coef = self.near_pipe.environment_coefficient(ctx)
        coeffs = self.near_pipe.coefficients(ctx, env_coef)
        surface = self._surface_terms(ctx, past[:-1, 0, :])
        section_loss = np.zeros(n_sections)

        converged = False
        max_change = np.inf
        iterations = 0
        for iterations in range(1, self.max_iterations + 1):
            old = temp.copy()
            self._sweep_soil(old, temp, past, a1, a2, surface)
            for k in range(n_sections):
                section_loss[k] = self._update_pipe_node(state, ctx, old, k, env_coef, coeffs)
            max_change = float(np.max(np.abs(temp - old)))
            if max_change <= self.tolerance:
                converged = True
                break

        if not converged:
            logger.warning(
                "Pipe %s: soil temperatures did not converge in %d iterations "
                "(max change %.4g K).",
                self.config.name, self.max_iterations, max_change,
            )
        else:
            logger.debug("Pipe %s: soil converged in %d iterations.", self.config.name, iterations)

        state.environment_heat_loss += float(section_loss.sum())
        return SweepResult(iterations=iterations, converged=converged, max_change=max_change)

    def _surface_terms(self, ctx: StepContext, past_surface: np.ndarray) -> dict[str, np.ndarray | float]:
        """Surface balance terms that stay fixed during the iteration."""
        soil = self.soil
        ambient = ctx.ambient
        conduction = soil.conductivity / self.grid.spacing
        storage = soil.volumetric_heat_capacity * self.grid.spacing / ctx.dt
        h_conv = exterior_surface_convection(soil.roughness, ambient.wind_speed)
        if self.config.solar_exposed:
            h_rad = _sky_radiation(past_surface, ambient.sky_temperature, soil.thermal_absorptance)
            q_solar = absorbed_solar(
                soil.solar_absorptance,
                ambient.beam_solar,
                ambient.diffuse_solar,
                ambient.solar_cos_zenith,
            )
        else:
            h_rad = np.zeros_like(past_surface)
            q_solar = 0.0
        return {
            "numerator": (
                q_solar
                + h_rad * ambient.sky_temperature
                + h_conv * ambient.outdoor_dry_bulb
                + storage * past_surface
            ),
            "denominator": h_rad + h_conv + 3.0 * conduction + storage,
            "conduction": conduction,
        }

    @staticmethod
    def _lateral(values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Inward and outward neighbours of width indices 0..W-2.

        At the centreline the inward neighbour mirrors the outward one.
        """
        outward = values[1:]
        inward = np.concatenate([values[1:2], values[:-2]], axis=0)
        return inward, outward

    def _sweep_soil(
        self,
        old: np.ndarray,
        new: np.ndarray,
        past: np.ndarray,
        a1: float,
        a2: float,
        surface: dict,
    ) -> None:
        # interior, depth 1..D-2
        if old.shape[1] > 2:
            inward, outward = self._lateral(old[:, 1:-1])
            vertical = old[:-1, :-2] + old[:-1, 2:]
            new[:-1, 1:-1] = a1 * (vertical + inward + outward) + a2 * past[:-1, 1:-1]

        # surface, depth 0
        inward, outward = self._lateral(old[:, 0])
        neighbours = old[:-1, 1] + inward + outward
        new[:-1, 0] = (
            surface["numerator"] + surface["conduction"] * neighbours
        ) / surface["denominator"]

    def _update_pipe_node(
        self,
        state: ThermalState,
        ctx: StepContext,
        old: np.ndarray,
        k: int,
        env_coef: float,
        coeffs,
    ) -> float:
        d = self.grid.pipe_depth_index
        w = self.grid.pipe_width_index
        neighbours = [old[w, d + 1, k], old[w + 1, d, k]]
        if d > 0:
            neighbours.append(old[w, d - 1, k])
        env_temp = float(np.mean(neighbours))

        loss = self.near_pipe.solve_section(state, ctx, k + 1, env_temp, env_coef, coeffs)
        state.soil[TimeSlot.TENTATIVE, w, d, k] = state.pipe[TimeSlot.TENTATIVE, k + 1]
        return loss
