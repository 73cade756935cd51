"""Visualization: pipe profiles, soil sections, and time series."""

from pipeheat.visualization.plot2d import plot_pipe_profile, plot_soil_section, plot_history

__all__ = [
    "plot_pipe_profile",
    "plot_soil_section",
    "plot_history",
]
