"""Small helpers shared by every argwright module; nothing else from argwright may be imported here."""

import functools
import inspect
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from attrs import frozen
else:
    from attrs import define

    # Hashable, but without the setattr overhead of a real frozen attrs class.
    frozen = functools.partial(define, unsafe_hash=True)


class _UnsetMeta(type):
    def __repr__(cls) -> str:
        return "<UNSET>"

    def __bool__(cls) -> Literal[False]:
        return False


class UNSET(metaclass=_UnsetMeta):
    """Marks a value that was never supplied; compare with ``is``. Falsy."""

    def __new__(cls):
        raise TypeError("UNSET is a marker and cannot be instantiated.")


def is_iterable(obj) -> bool:
    """Whether ``obj`` holds several values. Strings count as a single value."""
    if isinstance(obj, list | tuple | set | dict):
        return True
    return not isinstance(obj, str) and isinstance(obj, Iterable)


def is_class_and_subclass(hint, target_class) -> bool:
    try:
        return inspect.isclass(hint) and issubclass(hint, target_class)
    except TypeError:
        # Generic aliases such as list[int] pass isclass on some interpreters.
        return False


def to_tuple_converter(value: None | Any | Iterable[Any]) -> tuple[Any, ...]:
    """``attrs`` field converter: :obj:`None` becomes ``()``, a lone item is wrapped."""
    if value is None:
        return ()
    if is_iterable(value):
        return tuple(value)
    return (value,)


_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def default_name_transform(s: str) -> str:
    """Derive an argument name from a member name.

    ``max_count``, ``MaxCount`` and ``_max_count_`` all become ``max-count``;
    runs of capitals stay together, so ``HTTPServer`` becomes ``http-server``.
    Used by :attr:`ParseOptions.name_transform` unless overridden.
    """
    return _WORD_BOUNDARY.sub("_", s).lower().replace("_", "-").strip("-")


def identity_name_transform(s: str) -> str:
    """Use the member name verbatim."""
    return s
