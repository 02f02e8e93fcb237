from collections.abc import Mapping, Sequence, Set
from types import UnionType
from typing import Annotated, Any, Literal, Union, get_args, get_origin

# from types import NoneType is available >=3.10
NoneType = type(None)
AnnotatedType = type(Annotated[int, 0])

_MULTI_VALUE_ORIGINS = (list, tuple, set, frozenset, Sequence, Set)
_DICTIONARY_ORIGINS = (dict, Mapping)


def is_nonetype(hint):
    return hint is NoneType


def is_union(type_: type | None) -> bool:
    """Checks if a type is a union."""
    if type_ is Union or type_ is UnionType:
        return True

    # ``get_origin`` is relatively expensive; skip it for the most common hints.
    if type_ is str or type_ is int or type_ is float or type_ is bool or is_annotated(type_):
        return False
    origin = get_origin(type_)
    return origin is Union or origin is UnionType


def is_annotated(hint) -> bool:
    return type(hint) is AnnotatedType


def is_optional(hint) -> bool:
    """Whether ``None`` is an acceptable member of ``hint``."""
    hint = resolve_annotated(hint)
    return is_union(hint) and any(is_nonetype(x) for x in get_args(hint))


def resolve_annotated(type_: Any) -> Any:
    if type(type_) is AnnotatedType:
        type_ = get_args(type_)[0]
    return type_


def resolve_optional(type_: Any) -> Any:
    """Only resolves Union's of None + one other type (i.e. Optional)."""
    if not is_union(type_):
        return type_

    non_none_types = [t for t in get_args(type_) if t is not NoneType]
    if len(non_none_types) == 1:
        return non_none_types[0]
    return Union[tuple(non_none_types)]  # pyright: ignore  # noqa: UP007


def resolve(type_: Any) -> Any:
    """Strip ``Annotated`` and ``Optional`` wrappers."""
    type_prev = None
    while type_ != type_prev:
        type_prev = type_
        type_ = resolve_annotated(type_)
        type_ = resolve_optional(type_)
    return type_


def is_multi_value_hint(hint) -> bool:
    hint = resolve(hint)
    origin = get_origin(hint) or hint
    if not isinstance(origin, type) or issubclass(origin, (str, bytes, bytearray)):
        return False
    return issubclass(origin, _MULTI_VALUE_ORIGINS)


def is_dictionary_hint(hint) -> bool:
    hint = resolve(hint)
    origin = get_origin(hint) or hint
    return isinstance(origin, type) and issubclass(origin, _DICTIONARY_ORIGINS)


def element_hint(hint) -> Any:
    """Type of a single item of a collection hint; ``str`` if unparametrized.

    ``tuple[int, ...]`` and ``list[int]`` both yield ``int``.
    """
    args = [x for x in get_args(resolve(hint)) if x is not Ellipsis]
    return args[0] if args else str


def key_value_hints(hint) -> tuple[Any, Any]:
    args = get_args(resolve(hint))
    if len(args) == 2:
        return args[0], args[1]
    return str, str


def friendly_type_name(hint) -> str:
    """Human readable name of a type, used as the default value description.

    ``Optional[T]`` is displayed as ``T``; parametrized generics are displayed as
    ``Outer<Inner1, Inner2>``.
    """
    if isinstance(hint, str):
        return hint
    hint = resolve(hint)
    if is_nonetype(hint):
        return "None"
    if hint is Any:
        return "Any"
    if is_union(hint):
        return "|".join(friendly_type_name(arg) for arg in get_args(hint))
    if (origin := get_origin(hint)) is Literal:
        return "|".join(str(arg) for arg in get_args(hint))
    if origin:
        out = friendly_type_name(origin)
        if args := [x for x in get_args(hint) if x is not Ellipsis]:
            out += "<" + ", ".join(friendly_type_name(arg) for arg in args) + ">"
        return out
    if hasattr(hint, "__name__"):
        return hint.__name__
    return str(hint)


def collection_type(hint) -> type:
    """Concrete container used for the values of a multi-value hint."""
    hint = resolve(hint)
    origin = get_origin(hint) or hint
    if origin in (tuple, set, frozenset):
        return origin
    if origin is Set:
        return set
    return list
