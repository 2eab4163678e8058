"""Candidate objects created by PROJ, through pyproj.

The verifiers read candidates through plain attributes (``name``,
``identifiers``, ``axis_unit``...). The classes below adapt pyproj objects to
that contract. Values are read once at creation; candidates are immutable.

Two factories are provided:

* :class:`PyprojAuthorityFactory` creates predefined objects from EPSG codes;
* :class:`PyprojObjectFactory` creates user-defined objects from their
  defining parameters, through PROJJSON.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from pyproj import CRS
from pyproj.crs import Datum, Ellipsoid, PrimeMeridian
from pyproj.exceptions import CRSError

from gigs_harness.models.schemas import Identifier

from . import units
from .errors import NoSuchCodeError, UnknownUnitError
from .units import Unit

log = logging.getLogger(__name__)

Code = Union[int, str]

NAME_KEY = "name"
IDENTIFIERS_KEY = "identifiers"

_UNIT_TYPES = {
    units.LINEAR: "LinearUnit",
    units.ANGULAR: "AngularUnit",
    units.SCALE: "ScaleUnit",
    units.TIME: "TimeUnit",
}
_CATEGORIES = {value: key for key, value in _UNIT_TYPES.items()}


@dataclass(frozen=True)
class UnitCandidate:
    name: str
    identifiers: Tuple[Identifier, ...]
    unit: Unit
    aliases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EllipsoidCandidate:
    name: Optional[str]
    identifiers: Tuple[Identifier, ...]
    axis_unit: Optional[Unit]
    semi_major_axis: float
    semi_minor_axis: float
    inverse_flattening: float
    is_ivf_definitive: bool
    aliases: Tuple[str, ...] = ()

    @property
    def is_sphere(self) -> bool:
        return self.semi_major_axis == self.semi_minor_axis


@dataclass(frozen=True)
class PrimeMeridianCandidate:
    name: Optional[str]
    identifiers: Tuple[Identifier, ...]
    angular_unit: Optional[Unit]
    greenwich_longitude: float
    aliases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AxisCandidate:
    name: Optional[str]
    abbreviation: Optional[str]
    direction: str
    unit: Optional[Unit]


@dataclass(frozen=True)
class CoordinateSystemCandidate:
    name: Optional[str]
    identifiers: Tuple[Identifier, ...]
    type: Optional[str]
    axes: Tuple[AxisCandidate, ...]

    @property
    def dimension(self) -> int:
        return len(self.axes)


@dataclass(frozen=True)
class DatumCandidate:
    name: Optional[str]
    identifiers: Tuple[Identifier, ...]
    ellipsoid: Optional[EllipsoidCandidate]
    prime_meridian: Optional[PrimeMeridianCandidate]
    aliases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CrsCandidate:
    name: Optional[str]
    identifiers: Tuple[Identifier, ...]
    type: str
    datum: Optional[DatumCandidate]
    coordinate_system: Optional[CoordinateSystemCandidate]
    aliases: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# PROJJSON helpers
# ---------------------------------------------------------------------------


def identifiers_of(json_dict: Dict[str, Any]) -> Tuple[Identifier, ...]:
    """Read the ``id`` or ``ids`` member of a PROJJSON object."""
    entries = json_dict.get("ids")
    if entries is None:
        entries = [json_dict["id"]] if "id" in json_dict else []
    return tuple(Identifier(entry["authority"], str(entry["code"])) for entry in entries)


def unit_from_json(value: Any, default: Unit) -> Unit:
    """Read a PROJJSON unit, given either by name or as an object."""
    if value is None:
        return default
    if isinstance(value, str):
        return units.lookup(value)
    category = _CATEGORIES.get(value.get("type"), default.category)
    return units.resolve(value["name"], value.get("conversion_factor"), category)


def unit_to_json(unit: Unit) -> Union[str, Dict[str, Any]]:
    if unit == units.METRE:
        return "metre"
    if unit == units.DEGREE:
        return "degree"
    if unit == units.UNITY:
        return "unity"
    return {
        "type": _UNIT_TYPES.get(unit.category, "Unit"),
        "name": unit.name,
        "conversion_factor": unit.factor,
    }


def _measure(value: Any, default: Unit) -> Tuple[float, Unit]:
    """Split a PROJJSON measure into its value and unit."""
    if isinstance(value, dict):
        return float(value["value"]), unit_from_json(value.get("unit"), default)
    return float(value), default


def _id_json(properties: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    identifier = properties.get(IDENTIFIERS_KEY)
    if identifier is None:
        return None
    if isinstance(identifier, Identifier):
        code_space, code = identifier
    else:
        code_space, code = "GIGS", identifier
    return {"authority": code_space, "code": int(code) if str(code).isdigit() else str(code)}


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------


def adapt_ellipsoid(ellipsoid: Optional[Ellipsoid]) -> Optional[EllipsoidCandidate]:
    if ellipsoid is None:
        return None
    json_dict = ellipsoid.to_json_dict()
    if "radius" in json_dict:
        radius, unit = _measure(json_dict["radius"], units.METRE)
        semi_major = semi_minor = radius
    else:
        semi_major, unit = _measure(json_dict["semi_major_axis"], units.METRE)
        semi_minor = ellipsoid.semi_minor_metre / unit.factor
    inverse_flattening = ellipsoid.inverse_flattening
    if inverse_flattening == 0:
        inverse_flattening = math.inf
    return EllipsoidCandidate(
        name=ellipsoid.name,
        identifiers=identifiers_of(json_dict),
        axis_unit=unit,
        semi_major_axis=semi_major,
        semi_minor_axis=semi_minor,
        inverse_flattening=inverse_flattening,
        is_ivf_definitive="inverse_flattening" in json_dict,
    )


def adapt_prime_meridian(prime_meridian: Optional[PrimeMeridian]) -> Optional[PrimeMeridianCandidate]:
    if prime_meridian is None:
        return None
    unit = units.resolve(
        prime_meridian.unit_name, prime_meridian.unit_conversion_factor, units.ANGULAR
    )
    return PrimeMeridianCandidate(
        name=prime_meridian.name,
        identifiers=identifiers_of(prime_meridian.to_json_dict()),
        angular_unit=unit,
        greenwich_longitude=prime_meridian.longitude,
    )


def _axis_category(cs_type: Optional[str], direction: str) -> str:
    if (cs_type or "").lower() == "ellipsoidal" and direction not in ("up", "down"):
        return units.ANGULAR
    return units.LINEAR


def adapt_coordinate_system(crs: CRS) -> Optional[CoordinateSystemCandidate]:
    cs = crs.coordinate_system
    if cs is None:
        return None
    json_dict = cs.to_json_dict()
    cs_type = json_dict.get("subtype")
    axes = []
    for axis in cs.axis_list:
        try:
            unit = units.resolve(
                axis.unit_name,
                axis.unit_conversion_factor,
                _axis_category(cs_type, axis.direction),
            )
        except UnknownUnitError:
            unit = None
        axes.append(AxisCandidate(axis.name, axis.abbrev, axis.direction, unit))
    return CoordinateSystemCandidate(
        name=json_dict.get("name"),
        identifiers=identifiers_of(json_dict),
        type=cs_type,
        axes=tuple(axes),
    )


def adapt_datum(datum: Optional[Datum]) -> Optional[DatumCandidate]:
    if datum is None:
        return None
    return DatumCandidate(
        name=datum.name,
        identifiers=identifiers_of(datum.to_json_dict()),
        ellipsoid=adapt_ellipsoid(datum.ellipsoid),
        prime_meridian=adapt_prime_meridian(datum.prime_meridian),
    )


def adapt_crs(crs: CRS) -> CrsCandidate:
    return CrsCandidate(
        name=crs.name,
        identifiers=identifiers_of(crs.to_json_dict()),
        type=crs.type_name,
        datum=adapt_datum(crs.datum),
        coordinate_system=adapt_coordinate_system(crs),
    )


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


class PyprojAuthorityFactory:
    """Creates predefined objects from the PROJ database."""

    def __init__(self, authority: str = "EPSG"):
        self.authority = authority

    def _create(self, kind: str, code: Code, build):
        log.debug("Creating %s from %s:%s", kind, self.authority, code)
        try:
            return build(int(code))
        except (CRSError, ValueError) as exc:
            raise NoSuchCodeError(kind, code, str(exc)) from exc

    def create_unit(self, code: Code) -> UnitCandidate:
        try:
            unit = units.from_code(code, self.authority)
        except UnknownUnitError as exc:
            raise NoSuchCodeError("Unit", code, str(exc)) from exc
        return UnitCandidate(
            name=unit.name,
            identifiers=(Identifier(self.authority, str(code)),),
            unit=unit,
        )

    def create_ellipsoid(self, code: Code) -> EllipsoidCandidate:
        return adapt_ellipsoid(self._create("Ellipsoid", code, Ellipsoid.from_epsg))

    def create_prime_meridian(self, code: Code) -> PrimeMeridianCandidate:
        return adapt_prime_meridian(self._create("PrimeMeridian", code, PrimeMeridian.from_epsg))

    def create_datum(self, code: Code) -> DatumCandidate:
        return adapt_datum(self._create("GeodeticDatum", code, Datum.from_epsg))

    def create_crs(self, code: Code) -> CrsCandidate:
        return adapt_crs(self._create("CoordinateReferenceSystem", code, CRS.from_epsg))

    def create_coordinate_system(self, crs_code: Code) -> CoordinateSystemCandidate:
        """Coordinate system of the CRS identified by ``crs_code``."""
        return self.create_crs(crs_code).coordinate_system


class PyprojObjectFactory:
    """Creates user-defined objects from their defining parameters.

    ``properties`` holds the name (``"name"``) and optionally the identifier
    (``"identifiers"``) of the object to create.
    """

    def _build(self, kind: str, cls, json_dict: Dict[str, Any]):
        log.debug("Creating user-defined %s %r", kind, json_dict.get("name"))
        try:
            return cls.from_json_dict(json_dict)
        except CRSError as exc:
            raise NoSuchCodeError(kind, json_dict.get("name"), str(exc)) from exc

    @staticmethod
    def _header(kind: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        json_dict: Dict[str, Any] = {"type": kind, "name": properties[NAME_KEY]}
        identifier = _id_json(properties)
        if identifier is not None:
            json_dict["id"] = identifier
        return json_dict

    def create_flattened_sphere(
        self,
        properties: Dict[str, Any],
        semi_major_axis: float,
        inverse_flattening: float,
        unit: Unit,
    ) -> EllipsoidCandidate:
        json_dict = self._header("Ellipsoid", properties)
        measure = {"value": semi_major_axis, "unit": unit_to_json(unit)}
        if math.isinf(inverse_flattening) or inverse_flattening == 0:
            json_dict["radius"] = measure
        else:
            json_dict["semi_major_axis"] = measure
            json_dict["inverse_flattening"] = inverse_flattening
        return adapt_ellipsoid(self._build("Ellipsoid", Ellipsoid, json_dict))

    def create_ellipsoid(
        self,
        properties: Dict[str, Any],
        semi_major_axis: float,
        semi_minor_axis: float,
        unit: Unit,
    ) -> EllipsoidCandidate:
        json_dict = self._header("Ellipsoid", properties)
        if semi_major_axis == semi_minor_axis:
            json_dict["radius"] = {"value": semi_major_axis, "unit": unit_to_json(unit)}
        else:
            json_dict["semi_major_axis"] = {"value": semi_major_axis, "unit": unit_to_json(unit)}
            json_dict["semi_minor_axis"] = {"value": semi_minor_axis, "unit": unit_to_json(unit)}
        return adapt_ellipsoid(self._build("Ellipsoid", Ellipsoid, json_dict))

    def create_prime_meridian(
        self,
        properties: Dict[str, Any],
        greenwich_longitude: float,
        unit: Unit,
    ) -> PrimeMeridianCandidate:
        json_dict = self._header("PrimeMeridian", properties)
        json_dict["longitude"] = {"value": greenwich_longitude, "unit": unit_to_json(unit)}
        return adapt_prime_meridian(self._build("PrimeMeridian", PrimeMeridian, json_dict))


def properties(code: Optional[Code], name: str, code_space: str = "GIGS") -> Dict[str, Any]:
    """Name and identifier of a user-defined object."""
    values: Dict[str, Any] = {NAME_KEY: name}
    if code is not None:
        values[IDENTIFIERS_KEY] = Identifier(code_space, str(code))
    return values
