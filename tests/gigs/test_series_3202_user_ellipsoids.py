"""GIGS 3202: user-defined ellipsoids.

Ellipsoids are built from their defining parameters, in the unit given by the
data set, then verified in that unit and in metres. Exact values are only
required when the factory preserves user values.
"""
import math
from dataclasses import dataclass

import pytest

from gigs_harness.services import units
from gigs_harness.services.errors import VerificationFailure
from gigs_harness.services.factory import properties
from gigs_harness.services.session import VerificationSession
from gigs_harness.services.tolerance import INVERSE_FLATTENING_TOLERANCE, assert_within_tolerance
from gigs_harness.services.units import Unit


@dataclass(frozen=True)
class UserEllipsoid:
    code: int
    name: str
    semi_major_in_metres: float
    semi_major_axis: float
    semi_minor_axis: float
    axis_unit: Unit
    axis_tolerance: float
    inverse_flattening: float
    is_ivf_definitive: bool = False
    is_sphere: bool = False

    @property
    def ivf_tolerance(self) -> float:
        return INVERSE_FLATTENING_TOLERANCE if self.is_ivf_definitive else 0.0005


ELLIPSOIDS = [
    UserEllipsoid(
        67030, "GIGS ellipsoid A", 6378137.0, 6378137.0, 6356752.314, units.METRE, 0.0005,
        298.257223563, is_ivf_definitive=True,
    ),
    UserEllipsoid(
        67019, "GIGS ellipsoid F", 6378137.0, 6378.137, 6356.752, units.KILOMETRE, 0.0005,
        298.257222101, is_ivf_definitive=True,
    ),
    UserEllipsoid(
        67011, "GIGS ellipsoid H", 6378249.2, 6378249.2, 6356515.0, units.METRE, 0.05, 293.466,
    ),
    UserEllipsoid(
        67052, "GIGS ellipsoid I", 6370997.0, 6370997.0, 6370997.0, units.METRE, 0.05, math.inf, is_sphere=True,
    ),
    UserEllipsoid(
        67008, "GIGS ellipsoid J", 6378206.4, 20925832.164, 20854892.017, units.US_SURVEY_FOOT, 0.0005,
        294.978698214, is_ivf_definitive=True,
    ),
]


def _assert_equal(label, expected, actual):
    if expected != actual:
        raise VerificationFailure(f"{label}: expected {expected} but got {actual}.", label)


def _create(object_factory, case: UserEllipsoid):
    props = properties(case.code, case.name)
    if case.is_ivf_definitive:
        return object_factory.create_flattened_sphere(
            props, case.semi_major_axis, case.inverse_flattening, case.axis_unit
        )
    return object_factory.create_ellipsoid(props, case.semi_major_axis, case.semi_minor_axis, case.axis_unit)


@pytest.mark.parametrize("case", ELLIPSOIDS, ids=lambda case: case.name)
def test_user_defined_ellipsoid(session, object_factory, case):
    ellipsoid = session.obtain("Ellipsoid", case.code, lambda code: _create(object_factory, case))
    assert ellipsoid is not None

    if session.configuration.is_factory_preserving_user_values:
        with session.tip("is_factory_preserving_user_values"):
            _assert_equal("Ellipsoid.getAxisUnit()", case.axis_unit, ellipsoid.axis_unit)
            assert_within_tolerance(
                "Ellipsoid.getSemiMajorAxis()", case.semi_major_axis, ellipsoid.semi_major_axis, case.axis_tolerance
            )
            assert_within_tolerance(
                "Ellipsoid.getSemiMinorAxis()", case.semi_minor_axis, ellipsoid.semi_minor_axis, case.axis_tolerance
            )
            assert_within_tolerance(
                "Ellipsoid.getInverseFlattening()", case.inverse_flattening, ellipsoid.inverse_flattening,
                case.ivf_tolerance,
            )
            _assert_equal("Ellipsoid.isIvfDefinitive()", case.is_ivf_definitive, ellipsoid.is_ivf_definitive)
            _assert_equal("Ellipsoid.isSphere()", case.is_sphere, ellipsoid.is_sphere)

    session.verify_identification(ellipsoid, case.name, str(case.code))
    if case.is_ivf_definitive:
        session.verify_ellipsoid(ellipsoid, case.name, case.semi_major_axis, case.inverse_flattening, case.axis_unit)
    assert_within_tolerance(
        "Ellipsoid.getSemiMajorAxis()",
        case.semi_major_in_metres,
        units.convert(ellipsoid.semi_major_axis, ellipsoid.axis_unit, units.METRE),
        0.1,
    )


def test_us_survey_foot_ellipsoid_against_metres(session, object_factory):
    case = ELLIPSOIDS[-1]
    ellipsoid = _create(object_factory, case)
    session.verify_ellipsoid(
        ellipsoid, case.name, case.semi_major_axis * units.US_SURVEY_FOOT.factor, case.inverse_flattening, units.METRE
    )


def test_user_defined_ellipsoid_matches_epsg(authority_factory):
    """GIGS ellipsoid A carries the values of EPSG 7030 under another name."""
    session = VerificationSession(authority_factory)
    session.skip_identification_check = True
    epsg = session.obtain("Ellipsoid", 7030, authority_factory.create_ellipsoid)
    case = ELLIPSOIDS[0]
    session.verify_ellipsoid(epsg, case.name, case.semi_major_axis, case.inverse_flattening, case.axis_unit)
    session.verify_identification(epsg, case.name, str(case.code))
