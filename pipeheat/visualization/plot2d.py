"""2-D plotting utilities.

Functions
---------
plot_pipe_profile
    Fluid and wall temperature along the pipe.
plot_soil_section
    Soil temperature in one cross-section of a buried pipe.
plot_history
    Time series of report fields.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from pipeheat.time.state import ThermalState, TimeSlot


def plot_pipe_profile(
    state: ThermalState,
    geometry: Any,
    slot: TimeSlot = TimeSlot.TENTATIVE,
    title: str = "",
    ax: Any = None,
) -> Any:
    """Plot fluid and pipe-wall temperatures against distance from the inlet.

    Args:
        state: Pipe state.
        geometry: :class:`~pipeheat.geometry.pipe.PipeGeometry` of the pipe.
        slot: History slot to plot.
        title: Plot title.
        ax: Matplotlib axes (creates new figure if None).

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 4))

    x = geometry.section_positions()
    ax.plot(x, state.fluid[slot], "o-", label="fluid")
    ax.plot(x[1:], state.pipe[slot, 1:], "s--", label="pipe wall")
    ax.set_xlabel("Distance from inlet (m)")
    ax.set_ylabel("Temperature (°C)")
    ax.set_title(title)
    ax.legend()
    return ax


def plot_soil_section(
    state: ThermalState,
    grid: Any,
    section: int = 0,
    slot: TimeSlot = TimeSlot.TENTATIVE,
    mirror: bool = True,
    contours: int = 15,
    colorbar: bool = True,
    title: str = "",
    ax: Any = None,
    cmap: str = "coolwarm",
) -> Any:
    """Plot the soil temperature in one cross-section.

    Args:
        state: Pipe state with a soil grid.
        grid: :class:`~pipeheat.geometry.grid.SoilGrid`.
        section: Grid slice along the pipe (0-based).
        slot: History slot to plot.
        mirror: Reflect the half-domain about the centreline.
        contours: Number of contour levels.
        colorbar: Show colour bar.
        title: Plot title.
        ax: Matplotlib axes (creates new figure if None).
        cmap: Matplotlib colour map name.

    Returns:
        Matplotlib axes.

    Raises:
        ValueError: If the state has no soil grid.
    """
    import matplotlib.pyplot as plt

    if state.soil is None:
        raise ValueError("State has no soil grid to plot.")
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(6, 5))

    values = state.soil[slot, :, :, section].T  # (depth, width)
    x = np.arange(grid.n_width) * grid.spacing
    if mirror:
        values = np.hstack([values[:, :0:-1], values])
        x = np.concatenate([-x[:0:-1], x])
    z = -grid.node_depths

    X, Z = np.meshgrid(x, z)
    cs = ax.contourf(X, Z, values, levels=contours, cmap=cmap)
    if colorbar:
        plt.colorbar(cs, ax=ax, label="Temperature (°C)")
    ax.plot([0.0], [-grid.node_depths[grid.pipe_depth_index]], "ko", label="pipe")
    ax.set_aspect("equal")
    ax.set_xlabel("x (m)")
    ax.set_ylabel("z (m)")
    ax.set_title(title)
    return ax


def plot_history(
    history: Any,
    names: Sequence[str] = ("fluid_inlet_temperature", "fluid_outlet_temperature"),
    ylabel: str = "Temperature (°C)",
    ax: Any = None,
) -> Any:
    """Plot report fields of a :class:`~pipeheat.postprocess.report.ReportHistory`.

    Returns:
        Matplotlib axes.
    """
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 4))

    t = history["sim_time"]
    for name in names:
        ax.plot(t, history[name], label=name.replace("_", " "))
    ax.set_xlabel("Time (h)")
    ax.set_ylabel(ylabel)
    ax.legend()
    return ax
