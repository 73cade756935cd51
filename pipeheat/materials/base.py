"""Base material class and pipe construction utilities.

Classes
-------
Material
    Container for thermal properties of a pipe, insulation, or soil layer.
PipeConstruction
    Layered pipe wall (insulation layers plus the pipe itself) reduced to
    the lumped quantities used by the near-pipe model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


class Material:
    """Named layer of pipe wall, insulation, or soil.

    Args:
        name: Library key of the layer.
        **kwargs: Layer properties.  The solvers read:

            * ``thickness``: layer thickness (m).
            * ``thermal_conductivity``: λ (W/(m·K)).
            * ``density``: ρ (kg/m³).
            * ``specific_heat``: c (J/(kg·K)).
            * ``thermal_absorptance``: long-wave absorptivity of a soil surface.
            * ``solar_absorptance``: short-wave absorptivity of a soil surface.
            * ``roughness``: ASHRAE roughness class of a soil surface.

    Example::

        copper = Material(
            name="copper",
            thickness=0.0015,
            thermal_conductivity=400.0,
            density=8900.0,
            specific_heat=385.0,
        )
        copper["thermal_conductivity"]  # 400.0
    """

    def __init__(self, name: str = "unnamed", **kwargs: Any) -> None:
        self.name = name
        self._props: dict[str, Any] = dict(kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._props[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._props[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._props

    def get(self, key: str, default: Any = None) -> Any:
        """Property *key*, or *default* when the layer does not define it."""
        return self._props.get(key, default)

    @property
    def properties(self) -> dict[str, Any]:
        """Copy of the property dictionary."""
        return dict(self._props)

    @property
    def thermal_conductivity(self) -> Any:
        """Thermal conductivity λ."""
        return self._props.get("thermal_conductivity")

    @property
    def thickness(self) -> Any:
        """Layer thickness."""
        return self._props.get("thickness")

    @property
    def diffusivity(self) -> float:
        """Thermal diffusivity λ / (ρ c) in m²/s."""
        return float(
            self["thermal_conductivity"] / (self["density"] * self["specific_heat"])
        )

    def with_properties(self, **kwargs: Any) -> "Material":
        """Return a copy with some properties overridden."""
        props = dict(self._props)
        props.update(kwargs)
        return Material(name=self.name, **props)

    def __repr__(self) -> str:
        keys = ", ".join(sorted(self._props))
        return f"Material({self.name!r}; {keys})"


@dataclass(frozen=True)
class PipeConstruction:
    """Lumped description of a (possibly insulated) pipe wall.

    Attributes:
        inner_diameter: Pipe internal diameter (m).
        pipe_outer_diameter: Outer diameter of the pipe wall itself (m).
        insulation_outer_diameter: Outer diameter including insulation (m).
        insulation_resistance: Σ t/λ over insulation layers (m²·K/W).
        wall_resistance: Σ t/λ over every layer, pipe included (m²·K/W).
            The pipe wall counts even when insulation is present, so an
            insulated pipe has a slightly higher surface resistance than
            its insulation alone.
        pipe_conductivity: Pipe wall λ (W/(m·K)).
        pipe_density: Pipe wall ρ (kg/m³).
        pipe_specific_heat: Pipe wall c (J/(kg·K)).
    """

    inner_diameter: float
    pipe_outer_diameter: float
    insulation_outer_diameter: float
    insulation_resistance: float
    wall_resistance: float
    pipe_conductivity: float
    pipe_density: float
    pipe_specific_heat: float

    @property
    def insulation_thickness(self) -> float:
        return 0.5 * (self.insulation_outer_diameter - self.pipe_outer_diameter)

    @classmethod
    def from_layers(
        cls,
        inner_diameter: float,
        layers: Sequence[Material],
    ) -> "PipeConstruction":
        """Reduce a layered construction to lumped pipe properties.

        Layers are listed outermost first.  A single layer is a bare pipe;
        with two or more, every layer but the last is insulation and the
        last one is the pipe wall.

        Args:
            inner_diameter: Pipe internal diameter (m).
            layers: Construction layers, outermost first.

        Raises:
            ValueError: If no layers are given or a layer has non-positive
                thickness or conductivity.
        """
        if not layers:
            raise ValueError("A pipe construction needs at least one layer.")
        for layer in layers:
            for key in ("thickness", "thermal_conductivity"):
                if key not in layer:
                    raise ValueError(
                        f"Layer {layer.name!r} is missing property {key!r}."
                    )
                if layer[key] <= 0.0:
                    raise ValueError(
                        f"Layer {layer.name!r} must have {key} > 0, got {layer[key]!r}."
                    )

        insulation = list(layers[:-1])
        pipe = layers[-1]

        insulation_resistance = sum(
            m["thickness"] / m["thermal_conductivity"] for m in insulation
        )
        insulation_thickness = sum(m["thickness"] for m in insulation)
        wall_resistance = insulation_resistance + pipe["thickness"] / pipe["thermal_conductivity"]

        pipe_od = inner_diameter + 2.0 * pipe["thickness"]
        return cls(
            inner_diameter=float(inner_diameter),
            pipe_outer_diameter=float(pipe_od),
            insulation_outer_diameter=float(pipe_od + 2.0 * insulation_thickness),
            insulation_resistance=float(insulation_resistance),
            wall_resistance=float(wall_resistance),
            pipe_conductivity=float(pipe["thermal_conductivity"]),
            pipe_density=float(pipe["density"]),
            pipe_specific_heat=float(pipe["specific_heat"]),
        )
