"""Pipe configuration.

Immutable description of one pipe built once from static input.  All
derived geometry (section areas, soil grid) is computed here so the
solvers only ever see validated numbers.

Classes
-------
SoilProperties
    Thermal and surface properties of the soil around a buried pipe.
GroundTemperatureInput
    Annual ground-surface statistics, given directly or as monthly values.
PipeConfiguration
    Everything a pipe instance needs at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping

from pipeheat.boundaries.environment import EnvironmentKind
from pipeheat.boundaries.ground import GroundTemperatureModel, MONTHS_IN_YEAR
from pipeheat.boundaries.time_varying import Schedule
from pipeheat.geometry.grid import SoilGrid
from pipeheat.geometry.pipe import PipeGeometry
from pipeheat.materials.base import Material, PipeConstruction
from pipeheat.materials.library import get_material

DEFAULT_SECTIONS = 20
DEFAULT_DEPTH_NODES = 8


@dataclass(frozen=True)
class SoilProperties:
    """Soil surrounding a buried pipe.

    Args:
        conductivity: λ (W/(m·K)).
        density: ρ (kg/m³).
        specific_heat: c (J/(kg·K)).
        cover_depth: Soil thickness above the pipe crown (m).
        thermal_absorptance: Long-wave absorptivity of the surface (–).
        solar_absorptance: Short-wave absorptivity of the surface (–).
        roughness: Surface roughness class for exterior convection.
    """

    conductivity: float
    density: float
    specific_heat: float
    cover_depth: float
    thermal_absorptance: float = 0.9
    solar_absorptance: float = 0.7
    roughness: str = "MediumRough"

    @property
    def diffusivity(self) -> float:
        """Thermal diffusivity (m²/s)."""
        return self.conductivity / (self.density * self.specific_heat)

    @property
    def volumetric_heat_capacity(self) -> float:
        """ρ c (J/(m³·K))."""
        return self.density * self.specific_heat

    @classmethod
    def from_material(cls, material: Material) -> "SoilProperties":
        """Take soil properties from a material; its thickness is the cover depth."""
        return cls(
            conductivity=float(material["thermal_conductivity"]),
            density=float(material["density"]),
            specific_heat=float(material["specific_heat"]),
            cover_depth=float(material["thickness"]),
            thermal_absorptance=float(material.get("thermal_absorptance", 0.9)),
            solar_absorptance=float(material.get("solar_absorptance", 0.7)),
            roughness=str(material.get("roughness", "MediumRough")),
        )


@dataclass(frozen=True)
class GroundTemperatureInput:
    """Annual surface temperature statistics for the far-field model.

    Either all three of *mean*, *amplitude*, *phase_shift_days* are given,
    or *monthly* holds twelve monthly surface temperatures from which they
    are derived.
    """

    mean: float | None = None
    amplitude: float | None = None
    phase_shift_days: float | None = None
    monthly: tuple[float, ...] | None = None

    @property
    def is_manual(self) -> bool:
        return self.mean is not None

    def validate(self) -> list[str]:
        issues: list[str] = []
        given = [v is not None for v in (self.mean, self.amplitude, self.phase_shift_days)]
        if any(given) and not all(given):
            issues.append(
                "If any one annual ground temperature item is entered, "
                "all 3 items must be entered."
            )
        if not any(given) and self.monthly is None:
            issues.append("Ground temperatures need annual statistics or monthly values.")
        if self.amplitude is not None and self.amplitude < 0.0:
            issues.append(f"Ground temperature amplitude must be >= 0, got {self.amplitude}.")
        if self.phase_shift_days is not None and self.phase_shift_days < 0.0:
            issues.append(f"Phase shift must be >= 0, got {self.phase_shift_days}.")
        if not any(given) and self.monthly is not None and len(self.monthly) != MONTHS_IN_YEAR:
            issues.append(
                f"Expected {MONTHS_IN_YEAR} monthly temperatures, got {len(self.monthly)}."
            )
        return issues

    def model(self, diffusivity: float) -> GroundTemperatureModel:
        """Build the far-field model for soil of the given diffusivity (m²/s)."""
        if self.is_manual:
            return GroundTemperatureModel(
                mean=float(self.mean),
                amplitude=float(self.amplitude),
                phase_shift_days=float(self.phase_shift_days),
                diffusivity=diffusivity,
            )
        return GroundTemperatureModel.from_monthly(self.monthly, diffusivity)


@dataclass(frozen=True)
class PipeConfiguration:
    """Static description of one pipe.

    Args:
        name: Pipe identifier used in diagnostics.
        geometry: Along-pipe discretisation.
        environment: Environment variant of the outer surface.
        soil: Soil properties (ground-coupled only).
        grid: Soil grid (ground-coupled only).
        ground: Annual ground-surface statistics (ground-coupled only).
        solar_exposed: Whether the ground surface above the pipe sees the
            sun and sky.
        temperature_schedule: Environment temperature (schedule variant).
        velocity_schedule: Air velocity over the pipe (schedule variant).
    """

    name: str
    geometry: PipeGeometry
    environment: EnvironmentKind = EnvironmentKind.OUTDOOR_AIR
    soil: SoilProperties | None = None
    grid: SoilGrid | None = None
    ground: GroundTemperatureInput | None = None
    solar_exposed: bool = True
    temperature_schedule: Schedule | None = None
    velocity_schedule: Schedule | None = None

    @property
    def is_ground_coupled(self) -> bool:
        return self.environment is EnvironmentKind.GROUND

    @property
    def n_sections(self) -> int:
        return self.geometry.n_sections

    def ground_model(self) -> GroundTemperatureModel | None:
        """Far-field model, or ``None`` for pipes not in the ground."""
        if not self.is_ground_coupled:
            return None
        return self.ground.model(self.soil.diffusivity)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def buried(
        cls,
        name: str,
        construction: PipeConstruction,
        length: float,
        soil: SoilProperties,
        ground: GroundTemperatureInput,
        n_sections: int = DEFAULT_SECTIONS,
        n_depth: int = DEFAULT_DEPTH_NODES,
        n_width: int | None = None,
        solar_exposed: bool = True,
    ) -> "PipeConfiguration":
        """Configuration of a ground-coupled pipe with its soil grid."""
        config = cls(
            name=name,
            geometry=PipeGeometry(construction, length, n_sections),
            environment=EnvironmentKind.GROUND,
            soil=soil,
            grid=SoilGrid.around_pipe(
                cover_depth=soil.cover_depth,
                inner_diameter=construction.inner_diameter,
                n_sections=n_sections,
                n_depth=n_depth,
                n_width=n_width,
            ),
            ground=ground,
            solar_exposed=solar_exposed,
        )
        config.validate()
        return config

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any]) -> "PipeConfiguration":
        """Build a configuration from plain data.

        Example::

            PipeConfiguration.from_dict({
                "name": "main",
                "environment": "ground",
                "inner_diameter": 0.05,
                "length": 100.0,
                "construction": ["copper"],
                "soil": "sandy_soil",
                "ground_temperature": {"mean": 12.0, "amplitude": 8.0,
                                       "phase_shift_days": 30},
            })

        Construction layers and the soil may be library names or property
        dictionaries.

        Raises:
            ValueError: On invalid or inconsistent input.
            KeyError: On an unknown library material.
        """
        environment = EnvironmentKind.parse(cfg.get("environment", "outdoor_air"))
        layers = [_as_material(item) for item in cfg.get("construction", [])]
        construction = PipeConstruction.from_layers(float(cfg["inner_diameter"]), layers)
        n_sections = int(cfg.get("n_sections", DEFAULT_SECTIONS))
        name = str(cfg.get("name", "pipe"))

        if environment is not EnvironmentKind.GROUND:
            sched = dict(cfg.get("schedule", {}))
            config = cls(
                name=name,
                geometry=PipeGeometry(construction, float(cfg["length"]), n_sections),
                environment=environment,
                temperature_schedule=_as_schedule(sched.get("temperature")),
                velocity_schedule=_as_schedule(sched.get("air_velocity")),
            )
            config.validate()
            return config

        soil_cfg = cfg.get("soil")
        if soil_cfg is None:
            raise ValueError(f"Pipe {name!r}: a buried pipe needs a soil material.")
        soil = SoilProperties.from_material(_as_material(soil_cfg))
        if "cover_depth" in cfg:
            soil = replace(soil, cover_depth=float(cfg["cover_depth"]))

        gt = dict(cfg.get("ground_temperature", {}))
        monthly = gt.get("monthly")
        ground = GroundTemperatureInput(
            mean=gt.get("mean"),
            amplitude=gt.get("amplitude"),
            phase_shift_days=gt.get("phase_shift_days"),
            monthly=tuple(float(v) for v in monthly) if monthly is not None else None,
        )
        return cls.buried(
            name=name,
            construction=construction,
            length=float(cfg["length"]),
            soil=soil,
            ground=ground,
            n_sections=n_sections,
            n_depth=int(cfg.get("n_depth_nodes", DEFAULT_DEPTH_NODES)),
            n_width=cfg.get("n_width_nodes"),
            solar_exposed=bool(cfg.get("solar_exposed", True)),
        )

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def issues(self) -> list[str]:
        """Return a list of configuration problems (empty if OK)."""
        issues: list[str] = []
        geo = self.geometry
        if geo.inner_diameter <= 0.0:
            issues.append(f"Pipe inside diameter must be > 0, got {geo.inner_diameter}.")
        if geo.length <= 0.0:
            issues.append(f"Pipe length must be > 0, got {geo.length}.")
        if geo.n_sections < 1:
            issues.append(f"Number of pipe sections must be >= 1, got {geo.n_sections}.")

        if self.environment is EnvironmentKind.SCHEDULE and (
            self.temperature_schedule is None or self.velocity_schedule is None
        ):
            issues.append(
                "A schedule environment needs both a temperature and an air "
                "velocity schedule."
            )
        if not self.is_ground_coupled:
            return issues

        if self.soil is None:
            issues.append("A buried pipe needs soil properties.")
        if self.ground is None:
            issues.append("A buried pipe needs ground temperature data.")
        else:
            issues.extend(self.ground.validate())
        if self.grid is None:
            issues.append("A buried pipe needs a soil grid.")
            return issues
        issues.extend(self.grid.validate())
        if self.grid.n_sections != geo.n_sections:
            issues.append(
                f"Soil grid has {self.grid.n_sections} cross-sections but the "
                f"pipe has {geo.n_sections} sections."
            )
        if self.grid.spacing <= geo.inner_diameter / 2.0:
            issues.append(
                f"Grid spacing {self.grid.spacing:.4g} m must exceed the pipe "
                f"radius {geo.inner_diameter / 2.0:.4g} m."
            )
        return issues

    def validate(self) -> None:
        """Raise ``ValueError`` listing every configuration problem."""
        issues = self.issues()
        if issues:
            raise ValueError(f"Invalid pipe {self.name!r}: " + " ".join(issues))


def _as_material(item: str | Material | Mapping[str, Any]) -> Material:
    if isinstance(item, Material):
        return item
    if isinstance(item, str):
        return get_material(item)
    props = dict(item)
    return Material(name=str(props.pop("name", "unnamed")), **props)


def _as_schedule(item: Any) -> Schedule | None:
    if item is None or isinstance(item, Schedule):
        return item
    if isinstance(item, (int, float)):
        return Schedule.constant(float(item))
    props = dict(item)
    return Schedule(props["times"], props["values"], props.get("period"))
