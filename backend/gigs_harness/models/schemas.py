from enum import Enum
from typing import List, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from gigs_harness.services import units
from gigs_harness.services.units import Unit

# Expected name which matches any actual name, including a missing one.
UNRESTRICTED = "##unrestricted"

Code = Union[int, str]


class Identifier(NamedTuple):
    code_space: str
    code: str

    def __str__(self) -> str:
        return f"{self.code_space}:{self.code}"


class AxisDirection(str, Enum):
    """ISO 19111 axis directions, spelled as in PROJJSON."""

    NORTH = "north"
    NORTH_NORTH_EAST = "northNorthEast"
    NORTH_EAST = "northEast"
    EAST_NORTH_EAST = "eastNorthEast"
    EAST = "east"
    EAST_SOUTH_EAST = "eastSouthEast"
    SOUTH_EAST = "southEast"
    SOUTH_SOUTH_EAST = "southSouthEast"
    SOUTH = "south"
    SOUTH_SOUTH_WEST = "southSouthWest"
    SOUTH_WEST = "southWest"
    WEST_SOUTH_WEST = "westSouthWest"
    WEST = "west"
    WEST_NORTH_WEST = "westNorthWest"
    NORTH_WEST = "northWest"
    NORTH_NORTH_WEST = "northNorthWest"
    UP = "up"
    DOWN = "down"
    GEOCENTRIC_X = "geocentricX"
    GEOCENTRIC_Y = "geocentricY"
    GEOCENTRIC_Z = "geocentricZ"
    FUTURE = "future"
    PAST = "past"
    COLUMN_POSITIVE = "columnPositive"
    COLUMN_NEGATIVE = "columnNegative"
    ROW_POSITIVE = "rowPositive"
    ROW_NEGATIVE = "rowNegative"
    DISPLAY_RIGHT = "displayRight"
    DISPLAY_LEFT = "displayLeft"
    DISPLAY_UP = "displayUp"
    DISPLAY_DOWN = "displayDown"
    UNSPECIFIED = "unspecified"

    def __str__(self) -> str:
        return self.value


class ComparisonOutcome(BaseModel):
    """Result of one check: pass/fail plus a human-readable explanation."""

    passed: bool
    message: str = ""
    label: Optional[str] = None

    def __bool__(self) -> bool:
        return self.passed


PASS = ComparisonOutcome(passed=True)


class ExpectedRecord(BaseModel):
    """Literal values of one reference object, as given by a test case."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    code: Optional[Code] = None
    name: Optional[str] = None
    aliases: Tuple[str, ...] = ()


class EllipsoidRecord(ExpectedRecord):
    semi_major_axis: float
    axis_unit: Unit = units.METRE
    inverse_flattening: Optional[float] = None
    semi_minor_axis: Optional[float] = None
    is_sphere: bool = False


class PrimeMeridianRecord(ExpectedRecord):
    greenwich_longitude: float
    angular_unit: Unit = units.DEGREE


class CoordinateSystemRecord(ExpectedRecord):
    cs_type: Optional[str] = None
    directions: Tuple[AxisDirection, ...]
    axis_units: Tuple[Unit, ...]


# Request bodies of the HTTP surface. Units travel by name.


class MatchPayload(BaseModel):
    expected: Optional[str] = None
    actual: Optional[str] = None
    ignore_case: bool = True


class EllipsoidPayload(BaseModel):
    code: Code
    name: Optional[str] = None
    semi_major_axis: float
    inverse_flattening: float
    axis_unit: str = "metre"

    def to_record(self) -> EllipsoidRecord:
        return EllipsoidRecord(
            code=self.code,
            name=self.name,
            semi_major_axis=self.semi_major_axis,
            inverse_flattening=self.inverse_flattening,
            axis_unit=units.lookup(self.axis_unit),
        )


class PrimeMeridianPayload(BaseModel):
    code: Code
    name: Optional[str] = None
    greenwich_longitude: float
    angular_unit: str = "degree"

    def to_record(self) -> PrimeMeridianRecord:
        return PrimeMeridianRecord(
            code=self.code,
            name=self.name,
            greenwich_longitude=self.greenwich_longitude,
            angular_unit=units.lookup(self.angular_unit),
        )


class CoordinateSystemPayload(BaseModel):
    """Coordinate system of the CRS identified by ``code``."""

    code: Code
    cs_type: Optional[str] = None
    directions: List[AxisDirection]
    axis_units: List[str] = Field(min_length=1)

    def to_record(self) -> CoordinateSystemRecord:
        return CoordinateSystemRecord(
            code=self.code,
            cs_type=self.cs_type,
            directions=tuple(self.directions),
            axis_units=tuple(units.lookup(name) for name in self.axis_units),
        )


class IdentificationPayload(BaseModel):
    kind: str
    code: Code
    name: Optional[str] = None
