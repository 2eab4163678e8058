"""Checks on the identifiers, names and aliases of identified objects.

Identifier codes are compared ignoring case and code space, so an
implementation may attach identifiers from other authorities next to the
expected EPSG one.
"""
from __future__ import annotations

import unicodedata
from typing import Iterable, Optional, Sequence, Tuple, Union

from .errors import VerificationFailure

EPSG = "EPSG"

Pair = Tuple[str, str]


def get_name(obj) -> Optional[str]:
    """Return the name of the given object, or None if none."""
    if obj is None:
        return None
    return getattr(obj, "name", None)


def _code_of(identifier) -> Optional[str]:
    code = identifier[1]
    return None if code is None else str(code)


def contains_code(
    expected_authority: Optional[str],
    expected_code: Union[int, str],
    identifiers: Iterable[Pair],
) -> bool:
    """Return True if any identifier has the expected code, ignoring case.

    ``expected_authority`` is informational; the code space of the identifiers
    is not required to match it.
    """
    wanted = str(expected_code).lower()
    for identifier in identifiers:
        if identifier is None:
            continue
        code = _code_of(identifier)
        if code is not None and code.lower() == wanted:
            return True
    return False


def assert_contains_code(
    label: str,
    expected_authority: Optional[str],
    expected_code: Union[int, str],
    identifiers: Optional[Iterable[Pair]],
) -> None:
    if identifiers is None:
        raise VerificationFailure(f"{label}: Value is null.", label)
    # Stops at the first match; a null element is only reported if reached.
    for identifier in identifiers:
        if identifier is None:
            raise VerificationFailure(f"{label}: null element.", label)
        if contains_code(expected_authority, expected_code, (identifier,)):
            return
    raise VerificationFailure(f"{label}: element “{expected_code}” not found.", label)


def assert_identifier_equals(expected: int, obj, label: str) -> None:
    """Exactly one EPSG identifier, with the expected numeric code."""
    identifiers = getattr(obj, "identifiers", None)
    if identifiers is None:
        raise VerificationFailure(f"{label}.getIdentifiers(): Value is null.", label)
    found = 0
    for identifier in identifiers:
        code_space, code = identifier[0], identifier[1]
        if code_space is None or code_space.strip().upper() != EPSG:
            continue
        found += 1
        try:
            actual = int(code)
        except (TypeError, ValueError) as exc:
            raise VerificationFailure(
                f"{label}.getIdentifiers(…).getCode(): expected {expected} "
                f"but got a non-numerical value: {exc}",
                label,
            ) from exc
        if actual != expected:
            raise VerificationFailure(
                f"{label}.getIdentifiers(…).getCode(): expected {expected} but got {actual}.", label
            )
    if found != 1:
        raise VerificationFailure(
            f"{label}.getIdentifiers(*): occurrence of {EPSG}:{expected}: expected 1 but got {found}.",
            label,
        )


_PUNCTUATION = {"⋅": "*", "∕": "/", "′": "'", "″": '"'}


def to_ascii(text: Optional[str]) -> Optional[str]:
    """Replace typographic characters by their ASCII equivalents.

    Accents are removed after NFKD decomposition; typographic quotes, some
    mathematical symbols and Unicode separators are mapped to ASCII. Other
    punctuation is left unchanged.
    """
    if text is None:
        return None
    buffer = []
    for char in unicodedata.normalize("NFKD", text):
        category = unicodedata.category(char)
        if category in ("Cf", "Cc", "Mn"):
            continue
        if category in ("Zp", "Zl"):
            char = "\n"
        elif category == "Zs":
            char = " "
        elif category == "Pi":
            char = "'" if char == "‘" else '"'
        elif category == "Pf":
            char = "'" if char == "’" else '"'
        elif category in ("Po", "Sm"):
            char = _PUNCTUATION.get(char, char)
        buffer.append(char)
    return "".join(buffer)


def assert_name_equals(full: bool, expected: str, obj, label: str) -> None:
    """Compare the ASCII form of the name: whole, or as a prefix if not ``full``."""
    name = get_name(obj)
    actual = to_ascii(name)
    if full:
        match = expected == actual
    else:
        match = actual is not None and actual.startswith(expected)
    if not match:
        raise VerificationFailure(
            f'{label}.getName(): expected "{expected}" but got "{name}".', label
        )


def assert_contains_all(label: str, expected: Sequence[str], aliases: Optional[Iterable[str]]) -> None:
    """Every expected alias must be present, ignoring case."""
    if aliases is None:
        raise VerificationFailure(f"{label}: Value is null.", label)
    present = {str(alias).lower() for alias in aliases}
    for search in expected:
        if search.lower() not in present:
            raise VerificationFailure(f"{label}: alias not found: {search}", label)
