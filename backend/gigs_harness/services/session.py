"""State of the verification of one reference object.

A session lives for one test case. It creates the candidate object on first
request and keeps it for the remaining checks, turns "no such code" answers of
the factory into :class:`UnsupportedCodeError`, and remembers which
configuration flag governs the check being run so that a failure report can
name the flag to disable.
"""
import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, Sequence

from . import verifiers
from .config import Configuration
from .errors import NoSuchCodeError, UnsupportedCodeError, VerificationFailure
from .identification import assert_contains_all, assert_identifier_equals, assert_name_equals
from .units import Unit

log = logging.getLogger(__name__)


class VerificationSession:
    def __init__(self, factory=None, configuration: Optional[Configuration] = None):
        self.factory = factory
        self.configuration = configuration or Configuration.from_env()
        self.skip_identification_check = False
        self.configuration_tip: Optional[str] = None
        self._candidate = None

    # -- candidate lifecycle ------------------------------------------------

    def obtain(self, kind: str, code, create: Callable):
        """Return the cached candidate, creating it with ``create(code)`` if needed."""
        if self._candidate is None:
            try:
                self._candidate = create(code)
            except NoSuchCodeError as exc:
                log.info("%s[%s] not supported: %s", kind, code, exc)
                raise UnsupportedCodeError(kind, code) from exc
        else:
            log.debug("Reusing cached %s for %s", kind, code)
        return self._candidate

    def set_candidate(self, candidate) -> None:
        """Use an object created elsewhere, e.g. a dependency of another object."""
        if self._candidate is not None:
            raise RuntimeError("Candidate already created.")
        self._candidate = candidate

    @property
    def candidate(self):
        return self._candidate

    # -- configuration tip ---------------------------------------------------

    @contextmanager
    def tip(self, key: str) -> Iterator[None]:
        """Record ``key`` as the flag governing the enclosed checks."""
        previous = self.configuration_tip
        self.configuration_tip = key
        try:
            yield
        except VerificationFailure as exc:
            hint = f"{exc} (disable with {Configuration.env_name(key)}=false)"
            raise VerificationFailure(hint, exc.label) from exc
        self.configuration_tip = previous

    # -- verifications -------------------------------------------------------

    def verify_ellipsoid(self, ellipsoid, name, semi_major: float, inverse_flattening: float, axis_unit: Unit):
        verifiers.verify_ellipsoid(
            ellipsoid, name, semi_major, inverse_flattening, axis_unit,
            skip_identification_check=self.skip_identification_check,
        )

    def verify_prime_meridian(self, prime_meridian, name, greenwich_longitude: float, angular_unit: Unit):
        verifiers.verify_prime_meridian(
            prime_meridian, name, greenwich_longitude, angular_unit,
            skip_identification_check=self.skip_identification_check,
        )

    def verify_coordinate_system(self, cs, cs_type, directions: Sequence, axis_units: Sequence[Unit]):
        verifiers.verify_coordinate_system(cs, cs_type, directions, axis_units)

    def verify_identification(self, obj, name, identifier):
        verifiers.verify_identification(
            obj, name, identifier,
            skip_identification_check=self.skip_identification_check,
        )

    def verify_epsg_identification(
        self,
        obj,
        code: int,
        name: Optional[str],
        aliases: Sequence[str],
        label: str,
    ) -> None:
        """Identifier, name and aliases of a predefined object, as enabled."""
        if obj is None:
            raise VerificationFailure(f"{label}: Value is null.", label)
        config = self.configuration
        if config.is_standard_identifier_supported:
            with self.tip("is_standard_identifier_supported"):
                assert_identifier_equals(code, obj, label)
        if config.is_standard_name_supported and name is not None:
            with self.tip("is_standard_name_supported"):
                assert_name_equals(True, name, obj, label)
        if config.is_standard_alias_supported and aliases:
            with self.tip("is_standard_alias_supported"):
                assert_contains_all(f"{label}.getAlias()", aliases, getattr(obj, "aliases", None))
