"""Typed access to fields of untyped JSON objects.

GitHub REST payloads arrive as plain ``dict`` values. The helpers here pull a
single named field out of such an object and check it against the expected
scalar kind, raising :class:`~ghstats.errors.FieldMissingError` or
:class:`~ghstats.errors.FieldTypeMismatchError` instead of returning a
half-valid value.

Examples
--------
>>> get_field({"forks": 3}, "forks", FieldKind.UNSIGNED)
3
>>> get_optional_string({"homepage": ""}, "homepage") is None
True

"""

from __future__ import annotations

import datetime as dt
import enum
import typing as typ

from .errors import FieldMissingError, FieldTypeMismatchError

if typ.TYPE_CHECKING:
    import collections.abc as cabc


class FieldKind(enum.StrEnum):
    """Scalar kinds a JSON field can be read as."""

    STRING = "string"
    UNSIGNED = "unsigned integer"
    FLOAT = "float"
    BOOLEAN = "boolean"


def _convert(value: object, kind: FieldKind) -> str | int | float | bool | None:
    """Return ``value`` converted to ``kind``, or ``None`` when it does not fit."""
    # bool is a subclass of int and must never pass as a number.
    match kind:
        case FieldKind.STRING:
            return value if isinstance(value, str) else None
        case FieldKind.BOOLEAN:
            return value if isinstance(value, bool) else None
        case FieldKind.UNSIGNED:
            if isinstance(value, bool) or not isinstance(value, int):
                return None
            return value if value >= 0 else None
        case FieldKind.FLOAT:
            if isinstance(value, bool) or not isinstance(value, int | float):
                return None
            return float(value)


@typ.overload
def get_field(
    obj: cabc.Mapping[str, typ.Any], name: str, kind: typ.Literal[FieldKind.STRING]
) -> str: ...
@typ.overload
def get_field(
    obj: cabc.Mapping[str, typ.Any], name: str, kind: typ.Literal[FieldKind.UNSIGNED]
) -> int: ...
@typ.overload
def get_field(
    obj: cabc.Mapping[str, typ.Any], name: str, kind: typ.Literal[FieldKind.FLOAT]
) -> float: ...
@typ.overload
def get_field(
    obj: cabc.Mapping[str, typ.Any], name: str, kind: typ.Literal[FieldKind.BOOLEAN]
) -> bool: ...
def get_field(
    obj: cabc.Mapping[str, typ.Any], name: str, kind: FieldKind
) -> str | int | float | bool:
    """Return field ``name`` of ``obj`` converted to ``kind``.

    Parameters
    ----------
    obj
        Decoded JSON object.
    name
        Key to read.
    kind
        Scalar kind the value must convert to.

    Returns
    -------
    str | int | float | bool
        The converted value.

    Raises
    ------
    FieldMissingError
        If ``name`` is not a key of ``obj``.
    FieldTypeMismatchError
        If the stored value, including an explicit ``null``, does not convert
        to ``kind``.

    """
    if name not in obj:
        raise FieldMissingError.missing(name, kind)
    value = obj[name]
    converted = _convert(value, kind)
    if converted is None:
        raise FieldTypeMismatchError.mismatch(name, kind, value)
    return converted


def get_optional_field(
    obj: cabc.Mapping[str, typ.Any], name: str, kind: FieldKind
) -> str | int | float | bool | None:
    """Return field ``name`` converted to ``kind``, or ``None`` if absent or null."""
    if obj.get(name) is None:
        return None
    return get_field(obj, name, kind)


def get_optional_string(obj: cabc.Mapping[str, typ.Any], name: str) -> str | None:
    """Return a nullable string field, mapping absent, null and ``""`` to ``None``."""
    value = get_optional_field(obj, name, FieldKind.STRING)
    return typ.cast("str | None", value) or None


def get_timestamp(obj: cabc.Mapping[str, typ.Any], name: str) -> dt.datetime:
    """Return an ISO-8601 timestamp field as an aware UTC datetime."""
    raw = get_field(obj, name, FieldKind.STRING)
    try:
        parsed = dt.datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as exc:
        raise FieldTypeMismatchError.mismatch(name, "ISO-8601 timestamp", raw) from exc
    if parsed.tzinfo is None:
        raise FieldTypeMismatchError.mismatch(name, "timezone-aware timestamp", raw)
    return parsed.astimezone(dt.UTC)


def require_object(value: object, context: str) -> dict[str, typ.Any]:
    """Return ``value`` as a JSON object, or raise if it is anything else."""
    if not isinstance(value, dict):
        raise FieldTypeMismatchError.mismatch(context, "object", value)
    return typ.cast("dict[str, typ.Any]", value)


__all__ = [
    "FieldKind",
    "get_field",
    "get_optional_field",
    "get_optional_string",
    "get_timestamp",
    "require_object",
]
