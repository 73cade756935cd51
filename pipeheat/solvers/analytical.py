"""Analytical solutions for verification.

Closed-form steady states of a pipe losing heat to a fixed environment,
used to check the lumped near-pipe model.

Solutions
---------
AnalyticalPipe.section_conductance
    Series fluid-to-environment conductance of one section.
AnalyticalPipe.discrete_profile, AnalyticalPipe.discrete_outlet
    Steady fluid profile and outlet of the N-section implicit scheme.
AnalyticalPipe.exponential_outlet
    Continuous (log-mean) steady outlet.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


class AnalyticalPipe:
    """Steady-state references for a pipe in a constant environment.

    With constant inlet and environment temperatures the lumped scheme
    settles where, for each section::

        ṁ c (T_f[k] − T_f[k−1]) = UA_s (T_env − T_f[k])

    which gives a geometric decay of the excess temperature along the pipe.
    """

    @staticmethod
    def section_conductance(inside_conductance: float, environment_conductance: float) -> float:
        """Series combination of h_i A_i and U_e A_o (W/K).

        Args:
            inside_conductance: Fluid-to-wall conductance of a section.
            environment_conductance: Wall-to-environment conductance of a section.
        """
        if inside_conductance <= 0.0 or environment_conductance <= 0.0:
            return 0.0
        return 1.0 / (1.0 / inside_conductance + 1.0 / environment_conductance)

    @staticmethod
    def discrete_profile(
        inlet: float,
        environment: float,
        section_ua: float,
        capacity_rate: float,
        n_sections: int,
    ) -> np.ndarray:
        """Steady fluid temperatures at nodes 0..N of the sectioned pipe.

        T_f[k] − T_env = (T_in − T_env) / (1 + UA_s / ṁc)^k

        Args:
            inlet: Inlet temperature (°C).
            environment: Environment temperature (°C).
            section_ua: Section conductance UA_s (W/K).
            capacity_rate: ṁ c (W/K).
            n_sections: Number of sections N.
        """
        k = np.arange(n_sections + 1)
        ratio = 1.0 / (1.0 + section_ua / capacity_rate)
        return environment + (inlet - environment) * ratio ** k

    @staticmethod
    def discrete_outlet(
        inlet: float,
        environment: float,
        section_ua: float,
        capacity_rate: float,
        n_sections: int,
    ) -> float:
        """Steady outlet temperature of the sectioned pipe (°C)."""
        return float(
            AnalyticalPipe.discrete_profile(
                inlet, environment, section_ua, capacity_rate, n_sections,
            )[-1]
        )

    @staticmethod
    def exponential_outlet(
        inlet: ArrayLike,
        environment: float,
        total_ua: float,
        capacity_rate: float,
    ) -> np.ndarray:
        """Continuous steady outlet ``T_env + (T_in − T_env) exp(−UA / ṁc)``.

        Args:
            inlet: Inlet temperature(s) (°C).
            environment: Environment temperature (°C).
            total_ua: Whole-pipe conductance UA (W/K).
            capacity_rate: ṁ c (W/K).
        """
        inlet_arr = np.asarray(inlet, dtype=float)
        return environment + (inlet_arr - environment) * np.exp(-total_ua / capacity_rate)
