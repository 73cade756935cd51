"""Materials: layer properties, pipe constructions, working fluids."""

from pipeheat.materials.base import Material, PipeConstruction
from pipeheat.materials.library import (
    copper,
    steel,
    pvc,
    pex,
    fiberglass,
    elastomeric_foam,
    sandy_soil,
    clay_soil,
    loam,
    get_material,
)
from pipeheat.materials.fluids import FluidProperties, Water, ConstantFluid

__all__ = [
    "Material",
    "PipeConstruction",
    "copper",
    "steel",
    "pvc",
    "pex",
    "fiberglass",
    "elastomeric_foam",
    "sandy_soil",
    "clay_soil",
    "loam",
    "get_material",
    "FluidProperties",
    "Water",
    "ConstantFluid",
]
