"""JSON pretty-printing with a raw-text fallback."""

from __future__ import annotations

import json
import math

DEFAULT_INDENT = 2


class NotValidJsonError(ValueError):
    """Raised when text cannot be parsed as strict JSON."""


def _reject_constant(name: str) -> None:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_finite_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {literal}")
    return value


def _has_lone_surrogate(text: str) -> bool:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return True
    return False


def pretty_print(text: str, indent: int = DEFAULT_INDENT) -> str:
    """Parse *text* and re-serialize it with indentation.

    Key order is kept as parsed. ``NaN`` and ``Infinity`` literals are not
    JSON and are rejected, as are numbers too large for a float and nesting
    too deep to walk. Strings holding an unpaired surrogate escape are kept
    escaped so the result can still be written as UTF-8.

    Raises:
        NotValidJsonError: If *text* is not valid JSON.
    """
    try:
        value = json.loads(
            text.lstrip("\ufeff"),
            parse_constant=_reject_constant,
            parse_float=_parse_finite_float,
        )
        result = json.dumps(value, indent=indent, ensure_ascii=False, allow_nan=False)
        if _has_lone_surrogate(result):
            result = json.dumps(value, indent=indent, ensure_ascii=True, allow_nan=False)
    except (ValueError, RecursionError) as exc:
        raise NotValidJsonError(str(exc)) from exc
    return result


def try_pretty_print(text: str, indent: int = DEFAULT_INDENT) -> str:
    """Return the indented form of *text*, or *text* unchanged if it is not JSON."""
    try:
        return pretty_print(text, indent=indent)
    except NotValidJsonError:
        return text
