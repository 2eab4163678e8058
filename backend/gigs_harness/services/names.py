"""Comparison of object names which ignores spacing, punctuation and case.

Implementations spell EPSG names in slightly different ways: ``"WGS 84"``,
``"WGS84"`` or ``"wgs 84"`` all designate the same ellipsoid. Only the
characters valid in Unicode identifiers are compared. The comparison starts at
the first identifier-start character of each string and from there considers
identifier-part characters, so leading digits or punctuation are ignored.
"""
from __future__ import annotations

import unicodedata
from typing import Optional, Tuple

from gigs_harness.models.schemas import PASS, UNRESTRICTED, ComparisonOutcome

from .errors import VerificationFailure


def _is_ignorable(char: str) -> bool:
    # Format characters and the non-whitespace ISO controls.
    code = ord(char)
    return (
        unicodedata.category(char) == "Cf"
        or 0x00 <= code <= 0x08
        or 0x0E <= code <= 0x1B
        or 0x7F <= code <= 0x9F
    )


def is_identifier_start(char: str) -> bool:
    return char != "_" and char.isidentifier()


def is_identifier_part(char: str) -> bool:
    return ("a" + char).isidentifier() or _is_ignorable(char)


def _qualifies(char: str, part: bool) -> bool:
    return is_identifier_part(char) if part else is_identifier_start(char)


def _fold(char: str) -> str:
    # One code point in, one out: "İ".lower() is "i" plus a combining dot.
    return char.lower()[0]


def _prefix(message: Optional[str]) -> str:
    return message.strip() + " " if message else ""


def _join(message: Optional[str], text: str) -> str:
    message = message.strip() if message else ""
    return f"{message} {text}" if message else text


def _check_null(label: Optional[str], expected, actual) -> Tuple[bool, Optional[ComparisonOutcome]]:
    """Return whether both values are null, or the failure if only one is."""
    is_null = actual is None
    if is_null != (expected is None):
        text = "Value is null." if is_null else "Expected null."
        return is_null, ComparisonOutcome(passed=False, message=_join(label, text), label=label)
    return is_null, None


def matches(
    expected: Optional[str],
    actual: Optional[str],
    ignore_case: bool = True,
    label: Optional[str] = None,
) -> ComparisonOutcome:
    """Compare two names using only the characters valid in Unicode identifiers.

    ``expected`` may be :data:`UNRESTRICTED`, in which case anything matches.
    ``label`` is the header of the failure message, if any.
    """
    if expected == UNRESTRICTED:
        return PASS
    both_null, failure = _check_null(label, expected, actual)
    if failure is not None:
        return failure
    if both_null:
        return PASS

    exp_part = False
    val_part = False
    val_offset = 0
    for exp_offset, exp_char in enumerate(expected):
        if not _qualifies(exp_char, exp_part):
            continue
        exp_part = True
        while True:
            if val_offset >= len(actual):
                return ComparisonOutcome(
                    passed=False,
                    label=label,
                    message=(
                        f'{_prefix(label)}Expected "{expected}" but got "{actual}". '
                        f'Missing part: "{expected[exp_offset:]}".'
                    ),
                )
            val_char = actual[val_offset]
            val_offset += 1
            if _qualifies(val_char, val_part):
                break
        val_part = True
        if ignore_case:
            exp_char = _fold(exp_char)
            val_char = _fold(val_char)
        if val_char != exp_char:
            return ComparisonOutcome(
                passed=False,
                label=label,
                message=f'{_prefix(label)}Expected "{expected}" but got "{actual}".',
            )

    for index in range(val_offset, len(actual)):
        if _qualifies(actual[index], val_part):
            return ComparisonOutcome(
                passed=False,
                label=label,
                message=(
                    f'{_prefix(label)}Expected "{expected}", but found it with a unexpected '
                    f'trailing string: "{actual[index:]}".'
                ),
            )
    return PASS


def assert_unicode_identifier_equals(
    label: Optional[str],
    expected: Optional[str],
    actual: Optional[str],
    ignore_case: bool = True,
) -> None:
    """Raise :class:`VerificationFailure` unless :func:`matches` passes."""
    outcome = matches(expected, actual, ignore_case, label=label)
    if not outcome:
        raise VerificationFailure(outcome.message, label)
