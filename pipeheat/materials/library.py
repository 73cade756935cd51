"""Standard materials library.

Pre-configured :class:`~pipeheat.materials.base.Material` instances for
common pipe, insulation, and soil layers.  Property values represent
typical handbook values.

Usage::

    from pipeheat.materials import copper, sandy_soil
    print(copper.thermal_conductivity)  # 401.0 W/(m·K)
"""

from pipeheat.materials.base import Material

# ------------------------------------------------------------------
# Pipe walls
# ------------------------------------------------------------------

copper = Material(
    name="copper",
    thickness=0.0015,              # m
    thermal_conductivity=401.0,    # W/(m·K)
    density=8933.0,                # kg/m³
    specific_heat=385.0,           # J/(kg·K)
)

steel = Material(
    name="steel",
    thickness=0.003,
    thermal_conductivity=45.0,
    density=7850.0,
    specific_heat=475.0,
)

pvc = Material(
    name="pvc",
    thickness=0.004,
    thermal_conductivity=0.19,
    density=1380.0,
    specific_heat=900.0,
)

pex = Material(
    name="pex",
    thickness=0.003,
    thermal_conductivity=0.41,
    density=940.0,
    specific_heat=2300.0,
)

# ------------------------------------------------------------------
# Insulation
# ------------------------------------------------------------------

fiberglass = Material(
    name="fiberglass",
    thickness=0.025,
    thermal_conductivity=0.04,
    density=32.0,
    specific_heat=835.0,
)

elastomeric_foam = Material(
    name="elastomeric_foam",
    thickness=0.013,
    thermal_conductivity=0.036,
    density=60.0,
    specific_heat=1500.0,
)

# ------------------------------------------------------------------
# Soils
# ------------------------------------------------------------------

sandy_soil = Material(
    name="sandy_soil",
    thickness=1.0,                 # cover depth above the pipe (m)
    thermal_conductivity=1.08,
    density=1962.0,
    specific_heat=1500.0,
    thermal_absorptance=0.9,
    solar_absorptance=0.7,
    roughness="MediumRough",
)

clay_soil = Material(
    name="clay_soil",
    thickness=1.0,
    thermal_conductivity=1.3,
    density=1500.0,
    specific_heat=1200.0,
    thermal_absorptance=0.9,
    solar_absorptance=0.75,
    roughness="Rough",
)

loam = Material(
    name="loam",
    thickness=1.0,
    thermal_conductivity=0.9,
    density=1600.0,
    specific_heat=1100.0,
    thermal_absorptance=0.9,
    solar_absorptance=0.8,
    roughness="MediumRough",
)

MATERIALS = {
    m.name: m
    for m in (
        copper, steel, pvc, pex, fiberglass, elastomeric_foam,
        sandy_soil, clay_soil, loam,
    )
}


def get_material(name: str) -> Material:
    """Look up a library material by name.

    Raises:
        KeyError: If *name* is not in the library.
    """
    try:
        return MATERIALS[name]
    except KeyError:
        raise KeyError(f"Material {name!r} not found in library") from None
