"""Verification of candidate objects against expected EPSG values.

Every function does nothing when the candidate is None: whether a missing
object is acceptable is decided by the caller. Failures raise
:class:`VerificationFailure` labelled with the property that diverged, and
stop the remaining checks of the same call.

Names are compared with the flexibilities of
:func:`gigs_harness.services.names.matches`: only the characters valid in
Unicode identifiers count, ignoring case. ``skip_identification_check`` is set
when an object fetched by EPSG code is verified with values written for a GIGS
user-defined object, whose names intentionally differ.
"""
from typing import Optional, Sequence, Union

from . import units
from .errors import VerificationFailure
from .identification import assert_contains_code, get_name
from .names import assert_unicode_identifier_equals
from .tolerance import (
    INVERSE_FLATTENING_TOLERANCE,
    LONGITUDE_TOLERANCE,
    SEMI_MAJOR_TOLERANCE,
    assert_converted_within_tolerance,
    assert_within_tolerance,
)
from .units import Unit


def _require(value, label: str):
    if value is None:
        raise VerificationFailure(f"{label}: Value is null.", label)
    return value


def verify_ellipsoid(
    ellipsoid,
    name: Optional[str],
    semi_major: float,
    inverse_flattening: float,
    axis_unit: Unit,
    skip_identification_check: bool = False,
) -> None:
    """Compare the name, semi-major axis and inverse flattening of an ellipsoid.

    The ellipsoid does not need to use ``axis_unit``; its semi-major axis is
    converted before comparison. Tolerances are half a unit of the last digit
    published by EPSG: 3 decimal digits of metre for the semi-major axis and
    9 decimal digits for the inverse flattening.
    """
    if ellipsoid is None:
        return
    if name is not None and not skip_identification_check:
        assert_unicode_identifier_equals("Ellipsoid.getName().getCode()", name, get_name(ellipsoid), True)
    actual_unit = _require(ellipsoid.axis_unit, "Ellipsoid.getAxisUnit()")
    assert_converted_within_tolerance(
        "Ellipsoid.getSemiMajorAxis()",
        semi_major,
        axis_unit,
        ellipsoid.semi_major_axis,
        actual_unit,
        units.convert(SEMI_MAJOR_TOLERANCE, units.METRE, axis_unit),
    )
    assert_within_tolerance(
        "Ellipsoid.getInverseFlattening()",
        inverse_flattening,
        ellipsoid.inverse_flattening,
        INVERSE_FLATTENING_TOLERANCE,
    )


def verify_prime_meridian(
    prime_meridian,
    name: Optional[str],
    greenwich_longitude: float,
    angular_unit: Unit,
    skip_identification_check: bool = False,
) -> None:
    """Compare the name and Greenwich longitude of a prime meridian.

    The longitude is converted from the unit of the prime meridian to
    ``angular_unit``; the tolerance is 7 decimal digits of degree.
    """
    if prime_meridian is None:
        return
    if name is not None and not skip_identification_check:
        assert_unicode_identifier_equals(
            "PrimeMeridian.getName().getCode()", name, get_name(prime_meridian), True
        )
    actual_unit = _require(prime_meridian.angular_unit, "PrimeMeridian.getAngularUnit()")
    assert_converted_within_tolerance(
        "PrimeMeridian.getGreenwichLongitude()",
        greenwich_longitude,
        angular_unit,
        prime_meridian.greenwich_longitude,
        actual_unit,
        units.convert(LONGITUDE_TOLERANCE, units.DEGREE, angular_unit),
    )


def verify_coordinate_system(
    cs,
    cs_type: Optional[str],
    directions: Sequence,
    axis_units: Sequence[Unit],
) -> None:
    """Compare the axis directions and units of a coordinate system.

    The length of ``directions`` is the expected dimension. When fewer units
    than axes are given, the last unit applies to the remaining axes; extra
    units are ignored. Names of the system and its axes are not verified.
    """
    if cs is None:
        return
    if not axis_units:
        raise ValueError("At least one axis unit is required.")
    actual_type = getattr(cs, "type", None)
    if cs_type is not None and actual_type is not None and actual_type.lower() != cs_type.lower():
        raise VerificationFailure(
            f'CoordinateSystem.getType(): expected "{cs_type}" but got "{actual_type}".',
            "CoordinateSystem.getType()",
        )
    if cs.dimension != len(directions):
        raise VerificationFailure(
            f"CoordinateSystem.getDimension(): expected {len(directions)} but got {cs.dimension}.",
            "CoordinateSystem.getDimension()",
        )
    for i, direction in enumerate(directions):
        axis = _require(cs.axes[i], "CoordinateSystem.getAxis(*)")
        if axis.direction != direction:
            raise VerificationFailure(
                f"CoordinateSystem.getAxis({i}).getDirection(): expected {direction} but got {axis.direction}.",
                "CoordinateSystem.getAxis(*).getDirection()",
            )
        unit = axis_units[min(i, len(axis_units) - 1)]
        if axis.unit != unit:
            raise VerificationFailure(
                f"CoordinateSystem.getAxis({i}).getUnit(): expected {unit} but got {axis.unit}.",
                "CoordinateSystem.getAxis(*).getUnit()",
            )


def verify_identification(
    obj,
    name: Optional[str],
    identifier: Optional[Union[int, str]],
    skip_identification_check: bool = False,
) -> None:
    """Compare the name and identifier code of an identified object.

    Only the code of the identifiers is verified, ignoring case; code space,
    authority and version are ignored. The object may have more identifiers
    than the expected one, in any order.
    """
    if obj is None or skip_identification_check:
        return
    if name is not None:
        assert_unicode_identifier_equals("getName().getCode()", name, get_name(obj), True)
    if identifier is not None:
        assert_contains_code("getName().getIdentifiers()", None, identifier, obj.identifiers)
