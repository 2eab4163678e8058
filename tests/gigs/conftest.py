"""Pytest fixtures for GIGS compliance tests run against PROJ."""
import logging
from typing import Callable

import pytest

from gigs_harness.services.config import Configuration
from gigs_harness.services.errors import UnsupportedCodeError
from gigs_harness.services.factory import PyprojAuthorityFactory, PyprojObjectFactory
from gigs_harness.services.session import VerificationSession

log = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def configuration() -> Configuration:
    """Capabilities of PROJ. Aliases are not exposed by pyproj."""
    return Configuration.from_env().model_copy(update={"is_standard_alias_supported": False})


@pytest.fixture(scope="session")
def authority_factory() -> PyprojAuthorityFactory:
    return PyprojAuthorityFactory()


@pytest.fixture(scope="session")
def object_factory() -> PyprojObjectFactory:
    return PyprojObjectFactory()


@pytest.fixture
def session(authority_factory, configuration) -> VerificationSession:
    """One verification session per test case."""
    return VerificationSession(authority_factory, configuration)


@pytest.fixture
def obtain(session) -> Callable:
    """Create the candidate of a test case, skipping codes PROJ does not define."""

    def _obtain(kind: str, code, create: Callable):
        try:
            return session.obtain(kind, code, create)
        except UnsupportedCodeError as exc:
            log.info("Skipping: %s", exc)
            pytest.skip(str(exc))

    return _obtain
