import logging
from typing import Callable

from fastapi import APIRouter, HTTPException

from gigs_harness.models.schemas import (
    PASS,
    ComparisonOutcome,
    CoordinateSystemPayload,
    EllipsoidPayload,
    IdentificationPayload,
    MatchPayload,
    PrimeMeridianPayload,
)
from gigs_harness.services import names
from gigs_harness.services.config import Configuration
from gigs_harness.services.errors import ConversionError, UnsupportedCodeError, VerificationFailure
from gigs_harness.services.factory import PyprojAuthorityFactory
from gigs_harness.services.session import VerificationSession

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gigs", tags=["gigs"])


def _session() -> VerificationSession:
    return VerificationSession(PyprojAuthorityFactory(), Configuration.from_env())


def _run(check: Callable[[], None]) -> ComparisonOutcome:
    """Run a verification and report its outcome instead of raising."""
    try:
        check()
    except VerificationFailure as exc:
        log.debug("Verification failed: %s", exc)
        return ComparisonOutcome(passed=False, message=str(exc), label=exc.label)
    except UnsupportedCodeError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except (ConversionError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return PASS


@router.post("/match", response_model=ComparisonOutcome)
def match_names(body: MatchPayload):
    return names.matches(body.expected, body.actual, body.ignore_case)


@router.post("/verify/ellipsoid", response_model=ComparisonOutcome)
def verify_ellipsoid(body: EllipsoidPayload):
    session = _session()

    def check():
        record = body.to_record()
        ellipsoid = session.obtain("Ellipsoid", record.code, session.factory.create_ellipsoid)
        session.verify_identification(ellipsoid, None, record.code)
        session.verify_ellipsoid(
            ellipsoid, record.name, record.semi_major_axis, record.inverse_flattening, record.axis_unit
        )

    return _run(check)


@router.post("/verify/prime-meridian", response_model=ComparisonOutcome)
def verify_prime_meridian(body: PrimeMeridianPayload):
    session = _session()

    def check():
        record = body.to_record()
        pm = session.obtain("PrimeMeridian", record.code, session.factory.create_prime_meridian)
        session.verify_identification(pm, None, record.code)
        session.verify_prime_meridian(pm, record.name, record.greenwich_longitude, record.angular_unit)

    return _run(check)


@router.post("/verify/coordinate-system", response_model=ComparisonOutcome)
def verify_coordinate_system(body: CoordinateSystemPayload):
    session = _session()

    def check():
        record = body.to_record()
        cs = session.obtain("CoordinateSystem", record.code, session.factory.create_coordinate_system)
        if cs is None:
            # Compound CRSs have no single coordinate system.
            label = "CoordinateReferenceSystem.getCoordinateSystem()"
            raise VerificationFailure(f"{label}: Value is null.", label)
        session.verify_coordinate_system(cs, record.cs_type, record.directions, record.axis_units)

    return _run(check)


_CREATORS = {
    "unit": "create_unit",
    "ellipsoid": "create_ellipsoid",
    "prime-meridian": "create_prime_meridian",
    "datum": "create_datum",
    "crs": "create_crs",
}


@router.post("/verify/identification", response_model=ComparisonOutcome)
def verify_identification(body: IdentificationPayload):
    creator = _CREATORS.get(body.kind)
    if creator is None:
        raise HTTPException(status_code=422, detail=f"Unknown object kind: {body.kind}")
    session = _session()

    def check():
        obj = session.obtain(body.kind, body.code, getattr(session.factory, creator))
        session.verify_identification(obj, body.name, body.code)

    return _run(check)


@router.get("/configuration", response_model=Configuration)
def get_configuration():
    return Configuration.from_env()
