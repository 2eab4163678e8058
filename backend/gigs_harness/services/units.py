"""Units of measurement and conversions between them.

Units are looked up in the PROJ database through pyproj. Each unit carries its
category (``linear``, ``angular``, ``scale``, ``time``...) and the factor that
converts a value in that unit to the SI base unit of the category, so
conversion is a scaling through the base unit.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, Optional, Tuple, Union

from pyproj.database import get_units_map

from .errors import ConversionError, UnknownUnitError

LINEAR = "linear"
ANGULAR = "angular"
SCALE = "scale"
TIME = "time"

# Factors read back from the unit table carry ~15 significant digits.
_FACTOR_EPS = 1e-12


@dataclass(frozen=True, eq=False)
class Unit:
    name: str
    category: str
    factor: float
    code: Optional[str] = field(default=None, repr=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return NotImplemented
        return self.category == other.category and math.isclose(
            self.factor, other.factor, rel_tol=_FACTOR_EPS
        )

    def __hash__(self) -> int:
        return hash(self.category)

    def __str__(self) -> str:
        return self.name

    def is_compatible(self, other: "Unit") -> bool:
        return self.category == other.category


METRE = Unit("metre", LINEAR, 1.0, "9001")
FOOT = Unit("foot", LINEAR, 0.3048, "9002")
US_SURVEY_FOOT = Unit("US survey foot", LINEAR, 12 / 39.37, "9003")
KILOMETRE = Unit("kilometre", LINEAR, 1000.0, "9036")
RADIAN = Unit("radian", ANGULAR, 1.0, "9101")
DEGREE = Unit("degree", ANGULAR, math.pi / 180, "9102")
ARC_SECOND = Unit("arc-second", ANGULAR, math.pi / (180 * 3600), "9104")
GRAD = Unit("grad", ANGULAR, math.pi / 200, "9105")
UNITY = Unit("unity", SCALE, 1.0, "9201")
PARTS_PER_MILLION = Unit("parts per million", SCALE, 1e-6, "9202")

_BUILTIN: Dict[str, Unit] = {
    unit.name.lower(): unit
    for unit in (
        METRE, FOOT, US_SURVEY_FOOT, KILOMETRE, RADIAN, DEGREE,
        ARC_SECOND, GRAD, UNITY, PARTS_PER_MILLION,
    )
}


@lru_cache(maxsize=None)
def _database_units(auth_name: str = "EPSG") -> Tuple[Dict[str, Unit], Dict[str, Unit]]:
    """Units of the PROJ database, indexed by lower-case name and by code."""
    by_name: Dict[str, Unit] = {}
    by_code: Dict[str, Unit] = {}
    for name, info in get_units_map(auth_name=auth_name).items():
        # Sexagesimal units have no scale factor (PROJ reports 0).
        if not info.conv_factor:
            continue
        # PROJ spells rates as e.g. "linear_per_time"; they stay distinct categories.
        unit = Unit(
            name=info.name,
            category=info.category.lower(),
            factor=float(info.conv_factor),
            code=str(info.code),
        )
        by_name[name.lower()] = unit
        by_code[unit.code] = unit
    return by_name, by_code


def lookup(name: str) -> Unit:
    """Return the unit of the given name (case-insensitive)."""
    key = name.strip().lower()
    if key in _BUILTIN:
        return _BUILTIN[key]
    try:
        return _database_units()[0][key]
    except KeyError:
        raise UnknownUnitError(f"Unknown unit: {name!r}") from None


def from_code(code: Union[int, str], auth_name: str = "EPSG") -> Unit:
    """Return the unit identified by an authority code."""
    wanted = str(code)
    try:
        return _database_units(auth_name)[1][wanted]
    except KeyError:
        raise UnknownUnitError(f"Unknown unit code: {auth_name}:{wanted}") from None


def resolve(name: str, factor: Optional[float] = None, category: Optional[str] = None) -> Unit:
    """Build a unit for a name reported by an implementation.

    The registry is searched first. When the name is unknown, ``factor`` and
    ``category`` describe the unit; without them an ``UnknownUnitError`` is
    raised.
    """
    try:
        unit = lookup(name)
    except UnknownUnitError:
        if factor is None or category is None:
            raise
        return Unit(name, category, float(factor))
    if factor is not None and not math.isclose(unit.factor, factor, rel_tol=_FACTOR_EPS):
        return Unit(name, unit.category, float(factor))
    return unit


def convert(value: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert ``value`` from ``from_unit`` to ``to_unit``."""
    if from_unit is None or to_unit is None:
        raise ConversionError("Can not convert with a null unit.")
    if not from_unit.is_compatible(to_unit):
        raise ConversionError(
            f"Can not convert from {from_unit.name} ({from_unit.category}) "
            f"to {to_unit.name} ({to_unit.category})."
        )
    if from_unit == to_unit:
        return value
    if not from_unit.factor or not to_unit.factor:
        raise ConversionError(
            f"Can not convert between {from_unit.name} and {to_unit.name}: no scale factor."
        )
    return value * from_unit.factor / to_unit.factor
