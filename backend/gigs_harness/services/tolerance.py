"""Tolerance-based comparison of numeric values, with unit conversion."""
from typing import Optional

import numpy as np

from . import units
from .errors import ConversionError, VerificationFailure
from .units import Unit

# Relative tolerance factor from GIGS documentation, multiplied by the
# magnitude of the value being compared.
TOLERANCE = 1e-10

# Absolute angular tolerance from GIGS documentation.
ANGULAR_TOLERANCE = 1e-7

# Half a unit of the last digit published by EPSG.
SEMI_MAJOR_TOLERANCE = 5e-4           # metres, 3 decimal digits
INVERSE_FLATTENING_TOLERANCE = 5e-10  # 9 decimal digits
LONGITUDE_TOLERANCE = 5e-8            # degrees, 7 decimal digits


def relative_tolerance(value: float, factor: float = TOLERANCE) -> float:
    return factor * abs(value)


def within_tolerance(expected: float, actual: float, tolerance: float) -> bool:
    """Return True if ``actual`` is within ``tolerance`` of ``expected``.

    Identical non-finite values (both NaN, or the same infinity) compare equal.
    """
    return bool(np.isclose(actual, expected, rtol=0.0, atol=tolerance, equal_nan=True))


def assert_within_tolerance(
    label: Optional[str], expected: float, actual: Optional[float], tolerance: float
) -> None:
    if actual is None:
        raise VerificationFailure(f"{label}: Value is null.", label)
    if not within_tolerance(expected, actual, tolerance):
        raise VerificationFailure(
            f"{label}: expected {expected!r} but got {actual!r} "
            f"(difference {abs(expected - actual):g} exceeds tolerance {tolerance:g}).",
            label,
        )


def assert_converted_within_tolerance(
    label: Optional[str],
    expected: float,
    expected_unit: Unit,
    actual: Optional[float],
    actual_unit: Unit,
    tolerance: float,
) -> None:
    """Convert ``actual`` to ``expected_unit``, then compare.

    A failed conversion is a failed check: the ``ConversionError`` propagates
    with the label prepended.
    """
    if actual is None:
        raise VerificationFailure(f"{label}: Value is null.", label)
    try:
        converted = units.convert(actual, actual_unit, expected_unit)
    except ConversionError as exc:
        raise ConversionError(f"{label}: {exc}") from exc
    assert_within_tolerance(label, expected, converted, tolerance)
