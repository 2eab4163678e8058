"""GIGS 2202: ellipsoids predefined by EPSG.

Each case creates the ellipsoid from its EPSG code, then verifies the
identifier, name, semi-major axis and inverse flattening. When EPSG defines
the ellipsoid by its semi-minor axis, the inverse flattening is derived.
"""
import math

import pytest

from gigs_harness.models.schemas import EllipsoidRecord
from gigs_harness.services import units
from gigs_harness.services.tolerance import SEMI_MAJOR_TOLERANCE, assert_within_tolerance


def _ivf(a: float, b: float) -> float:
    return a / (a - b)


ELLIPSOIDS = [
    EllipsoidRecord(code=7001, name="Airy 1830", semi_major_axis=6377563.396, inverse_flattening=299.3249646),
    EllipsoidRecord(code=7004, name="Bessel 1841", semi_major_axis=6377397.155, inverse_flattening=299.1528128),
    EllipsoidRecord(
        code=7008,
        name="Clarke 1866",
        semi_major_axis=6378206.4,
        semi_minor_axis=6356583.8,
        inverse_flattening=_ivf(6378206.4, 6356583.8),
    ),
    EllipsoidRecord(code=7019, name="GRS 1980", semi_major_axis=6378137.0, inverse_flattening=298.257222101),
    EllipsoidRecord(code=7022, name="International 1924", semi_major_axis=6378388.0, inverse_flattening=297.0),
    EllipsoidRecord(code=7030, name="WGS 84", semi_major_axis=6378137.0, inverse_flattening=298.257223563),
    EllipsoidRecord(code=7043, name="WGS 72", semi_major_axis=6378135.0, inverse_flattening=298.26),
    EllipsoidRecord(
        code=7048,
        name="GRS 1980 Authalic Sphere",
        semi_major_axis=6371007.0,
        inverse_flattening=math.inf,
        is_sphere=True,
    ),
]


@pytest.mark.parametrize("record", ELLIPSOIDS, ids=lambda record: str(record.code))
def test_ellipsoid(session, obtain, record):
    ellipsoid = obtain("Ellipsoid", record.code, session.factory.create_ellipsoid)
    session.verify_epsg_identification(ellipsoid, record.code, record.name, record.aliases, "Ellipsoid")
    session.verify_ellipsoid(
        ellipsoid, record.name, record.semi_major_axis, record.inverse_flattening, record.axis_unit
    )
    assert ellipsoid.is_sphere == record.is_sphere
    if record.semi_minor_axis is not None:
        assert_within_tolerance(
            "Ellipsoid.getSemiMinorAxis()",
            record.semi_minor_axis,
            units.convert(ellipsoid.semi_minor_axis, ellipsoid.axis_unit, record.axis_unit),
            SEMI_MAJOR_TOLERANCE,
        )
