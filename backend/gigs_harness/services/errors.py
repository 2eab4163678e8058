"""Exceptions raised while verifying candidate objects."""
from typing import Optional


class VerificationFailure(AssertionError):
    """A verified property did not match the expected value.

    Subclassing ``AssertionError`` lets pytest report these as ordinary test
    failures. ``label`` names the property, e.g. ``Ellipsoid.getSemiMajorAxis()``.
    """

    def __init__(self, message: str, label: Optional[str] = None):
        super().__init__(message)
        self.label = label


class ConversionError(ValueError):
    """Units are incommensurable, or a value could not be converted."""


class UnknownUnitError(ConversionError):
    """No unit of that name or code is known to the unit registry."""


class NoSuchCodeError(LookupError):
    """Raised by a factory when the authority does not define the given code."""

    def __init__(self, kind: str, code: object, reason: Optional[str] = None):
        message = f"No {kind} for code {code!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.kind = kind
        self.code = code


class UnsupportedCodeError(Exception):
    """The implementation under test does not support a code of the data set.

    Test modules turn this into a skipped test; it is an optional-feature gap,
    not a correctness defect.
    """

    def __init__(self, kind: str, code: object):
        quote = not isinstance(code, int)
        text = f'"{code}"' if quote else str(code)
        super().__init__(f"{kind}[{text}] not supported.")
        self.kind = kind
        self.code = code
