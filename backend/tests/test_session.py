from dataclasses import dataclass
from typing import Optional, Tuple

import pytest

from gigs_harness.models.schemas import Identifier
from gigs_harness.services import units
from gigs_harness.services.config import Configuration
from gigs_harness.services.errors import NoSuchCodeError, UnsupportedCodeError, VerificationFailure
from gigs_harness.services.session import VerificationSession


@dataclass
class FakeEllipsoid:
    name: Optional[str]
    identifiers: Tuple = ()
    aliases: Tuple[str, ...] = ()
    axis_unit: units.Unit = units.METRE
    semi_major_axis: float = 6378137.0
    inverse_flattening: float = 298.257223563


class CountingFactory:
    def __init__(self):
        self.calls = 0

    def create_ellipsoid(self, code):
        self.calls += 1
        if code == 7001:
            raise NoSuchCodeError("Ellipsoid", code)
        return FakeEllipsoid("WGS 84", (Identifier("EPSG", str(code)),))


@pytest.fixture
def session():
    return VerificationSession(CountingFactory(), Configuration())


def test_candidate_is_created_once(session):
    first = session.obtain("Ellipsoid", 7030, session.factory.create_ellipsoid)
    second = session.obtain("Ellipsoid", 7030, session.factory.create_ellipsoid)
    assert first is second
    assert session.candidate is first
    assert session.factory.calls == 1


def test_unsupported_code(session):
    with pytest.raises(UnsupportedCodeError) as info:
        session.obtain("Ellipsoid", 7001, session.factory.create_ellipsoid)
    assert str(info.value) == "Ellipsoid[7001] not supported."
    assert session.candidate is None


def test_unsupported_textual_code():
    assert str(UnsupportedCodeError("Ellipsoid", "GIGS:A")) == 'Ellipsoid["GIGS:A"] not supported.'


def test_set_candidate(session):
    candidate = FakeEllipsoid("Airy 1830")
    session.set_candidate(candidate)
    assert session.obtain("Ellipsoid", 7001, session.factory.create_ellipsoid) is candidate
    assert session.factory.calls == 0
    with pytest.raises(RuntimeError):
        session.set_candidate(candidate)


def test_epsg_identification(session):
    obj = FakeEllipsoid("WGS 84", (Identifier("EPSG", "7030"),), aliases=("WGS84",))
    session.verify_epsg_identification(obj, 7030, "WGS 84", ["WGS84"], "Ellipsoid")


def test_failure_names_configuration_flag(session):
    obj = FakeEllipsoid("WGS 84", (Identifier("EPSG", "7030"),))
    with pytest.raises(VerificationFailure) as info:
        session.verify_epsg_identification(obj, 7030, "World Geodetic System 1984", [], "Ellipsoid")
    assert "GIGS_IS_STANDARD_NAME_SUPPORTED=false" in str(info.value)
    assert session.configuration_tip == "is_standard_name_supported"


def test_disabled_checks_are_skipped():
    config = Configuration(is_standard_name_supported=False, is_standard_alias_supported=False)
    session = VerificationSession(CountingFactory(), config)
    obj = FakeEllipsoid("WGS84", (Identifier("EPSG", "7030"),))
    session.verify_epsg_identification(obj, 7030, "World Geodetic System 1984", ["GRS 67"], "Ellipsoid")
    assert session.configuration_tip is None


def test_null_object_fails(session):
    with pytest.raises(VerificationFailure, match="Value is null"):
        session.verify_epsg_identification(None, 7030, "WGS 84", [], "Ellipsoid")


def test_skip_identification_check(session):
    obj = FakeEllipsoid("WGS 84")
    session.skip_identification_check = True
    session.verify_ellipsoid(obj, "GIGS ellipsoid A", 6378137.0, 298.257223563, units.METRE)
    session.verify_identification(obj, "GIGS ellipsoid A", "67030")
