import re
from collections.abc import Callable
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import Path
from typing import Any, Literal, get_args, get_origin

from argwright.annotations import is_union, resolve
from argwright.utils import default_name_transform, frozen, is_class_and_subclass


@frozen(kw_only=True)
class Culture:
    """Locale conventions used when parsing numbers."""

    decimal_separator: str = "."

    group_separator: str | None = None
    """Digit grouping character that is ignored, e.g. ``","`` for ``1,000``."""

    def normalize_number(self, s: str) -> str:
        if self.group_separator:
            s = s.replace(self.group_separator, "")
        if self.decimal_separator != ".":
            s = s.replace(self.decimal_separator, ".")
        return s


INVARIANT = Culture()

_NEGATIVE_NUMBER = re.compile(r"^-(\d+([.,]\d*)?|[.,]\d+)([eE][-+]?\d+)?$")


def is_negative_number(s: str) -> bool:
    """Whether ``s`` looks like a negative number rather than an argument name."""
    return bool(_NEGATIVE_NUMBER.match(s))


def _bool(s: str) -> bool:
    s = s.lower()
    if s in {"no", "n", "0", "false", "f"}:
        return False
    elif s in {"yes", "y", "1", "true", "t"}:
        return True
    else:
        # Be conservative when coercing strings into boolean.
        raise ValueError(f"Cannot interpret {s!r} as a boolean.")


def _int(s: str) -> int:
    s = s.lower()
    if s.startswith("0x"):
        return int(s, 16)
    elif s.startswith("0o"):
        return int(s, 8)
    elif s.startswith("0b"):
        return int(s, 2)
    elif "." in s or "e" in s:
        # Only integral values like "30.0" or "1e3".
        f = float(s)
        if not f.is_integer():
            raise ValueError(f"{s!r} is not an integer.")
        return int(f)
    else:
        return int(s)


def _bytes(s: str) -> bytes:
    return bytes(s, encoding="utf8")


def _bytearray(s: str) -> bytearray:
    return bytearray(_bytes(s))


def _datetime(s: str) -> datetime:
    """Parse a datetime string.

    Returns
    -------
    datetime.datetime
    """
    formats = [
        "%Y-%m-%d",  # 1956-01-31
        "%Y-%m-%dT%H:%M:%S",  # 1956-01-31T10:00:00
        "%Y-%m-%d %H:%M:%S",  # 1956-01-31 10:00:00
        "%Y-%m-%dT%H:%M:%S%z",  # 1956-01-31T10:00:00+0000
        "%Y-%m-%dT%H:%M:%S.%f",  # 1956-01-31T10:00:00.123456
        "%Y-%m-%dT%H:%M:%S.%f%z",  # 1956-01-31T10:00:00.123456+0000
    ]

    for fmt in formats:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue

    raise ValueError(f"Could not parse datetime string: {s}")


_DURATION_UNITS = {
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 604800,
    "M": 2592000,  # Approximation: 1 month = 30 days
    "y": 31536000,  # Approximation: 1 year = 365 days
}


def _timedelta(s: str) -> timedelta:
    """Parse a duration string like ``1h30m``."""
    negative = s.startswith("-")
    if negative:
        s = s[1:]

    matches = re.findall(r"((\d+\.\d+|\d+)([smhdwMy]))", s)
    if not matches or "".join(m[0] for m in matches) != s:
        raise ValueError(f"Could not parse duration string: {s}")

    seconds = sum(float(value) * _DURATION_UNITS[unit] for _, value, unit in matches)
    return timedelta(seconds=-seconds if negative else seconds)


_converters: dict[Any, Callable[[str], Any]] = {
    bool: _bool,
    int: _int,
    float: float,
    complex: complex,
    Decimal: Decimal,
    Fraction: Fraction,
    bytes: _bytes,
    bytearray: _bytearray,
    date: date.fromisoformat,
    datetime: _datetime,
    time: time.fromisoformat,
    timedelta: _timedelta,
    Path: Path,
}

_numeric_types = {int, float, complex, Decimal, Fraction}


def get_enum_member(type_: type[Enum], value: str, name_transform: Callable[[str], str] = default_name_transform):
    """Match a string to an enum's member.

    Applies ``name_transform`` to both the value and the member.
    """
    value_transformed = name_transform(value)
    for name, member in type_.__members__.items():
        if name_transform(name) == value_transformed:
            return member
    raise ValueError(f"{value!r} is not a member of {type_.__name__}.")


def convert(
    type_: Any,
    token: str,
    culture: Culture = INVARIANT,
    name_transform: Callable[[str], str] = default_name_transform,
) -> Any:
    """Convert a single string token into ``type_``.

    Parameters
    ----------
    type_: Any
        Target type hint. ``Optional`` and ``Annotated`` wrappers are ignored.
    token: str
        Raw text supplied by the user.
    culture: Culture
        Number formatting conventions.
    name_transform: Callable[[str], str]
        Applied to enum member names and to ``token`` before comparing them.

    Raises
    ------
    Exception
        Any exception raised by the underlying parse function.
    """
    type_ = resolve(type_)
    if type_ is Any or type_ is str:
        return token

    if get_origin(type_) is Literal:
        for choice in get_args(type_):
            try:
                if convert(type(choice), token, culture, name_transform) == choice:
                    return choice
            except Exception:
                continue
        raise ValueError(f"{token!r} is not one of {get_args(type_)}.")

    if is_union(type_):
        for member in get_args(type_):
            try:
                return convert(member, token, culture, name_transform)
            except Exception:
                continue
        raise ValueError(f"{token!r} does not match any of {get_args(type_)}.")

    if is_class_and_subclass(type_, Enum):
        return get_enum_member(type_, token, name_transform)

    if type_ in _numeric_types:
        token = culture.normalize_number(token)

    try:
        func = _converters[type_]
    except KeyError:
        # Any other class is assumed to be constructible from a single string.
        func = type_
    return func(token)
