from collections.abc import Callable
from typing import Any

from attrs import define, field

from argwright._convert import INVARIANT
from argwright.annotations import (
    collection_type,
    element_hint,
    friendly_type_name,
    is_dictionary_hint,
    is_multi_value_hint,
    is_optional,
    key_value_hints,
    resolve,
)
from argwright.converters import ArgumentConverter, KeyValuePairConverter, NullableConverter, as_converter
from argwright.enums import ArgumentKind, CancelMode, ValidationMode
from argwright.exceptions import DescriptorError
from argwright.options import ParseOptions
from argwright.utils import UNSET, is_iterable, to_tuple_converter

__all__ = [
    "Argument",
    "ArgumentInfo",
]


@define(kw_only=True)
class ArgumentInfo:
    """Everything known about an argument before it is resolved into an :class:`Argument`.

    Only :attr:`member_name` or :attr:`name` is mandatory; everything else is inferred.
    """

    member_name: str | None = None
    """Attribute of the target object that receives the value."""

    hint: Any = str
    """
    Declared type. ``list[T]``-like hints create multi-value arguments,
    ``dict[K, V]``-like hints create dictionary arguments.
    """

    name: str | None = None
    """Argument name. Defaults to :attr:`ParseOptions.name_transform` applied to :attr:`member_name`."""

    short_name: str | bool | None = None
    """
    Single character short name, used in :attr:`ParsingMode.LONG_SHORT` mode.
    :obj:`True` uses the first character of the name.
    """

    aliases: tuple[str, ...] = field(default=(), converter=to_tuple_converter)

    short_aliases: tuple[str, ...] = field(default=(), converter=to_tuple_converter)

    is_long: bool = True
    """If :obj:`False` in long/short mode, the argument only has a short name."""

    position: int | None = None
    """Sort key among positional arguments; the parser renumbers positions from zero."""

    required: bool = False

    default: Any = UNSET
    """Value when the argument is not supplied. Strings are converted like user input."""

    allow_null: bool | None = None
    """Whether :obj:`None` is an acceptable value. Defaults to whether the (value) type is ``Optional``."""

    cancel_parsing: CancelMode = CancelMode.NONE

    hidden: bool = False

    validators: tuple[Callable, ...] = field(default=(), converter=to_tuple_converter)

    converter: ArgumentConverter | Callable[..., Any] | None = None
    """Converts a whole token; for dictionaries, into a ``(key, value)`` tuple."""

    key_converter: ArgumentConverter | Callable[..., Any] | None = None

    value_converter: ArgumentConverter | Callable[..., Any] | None = None

    multi_value_separator: str | None = None
    """Splits a single token into several values, e.g. ``","`` for ``a,b,c``."""

    allow_multi_value_whitespace_separator: bool = False
    """Allow ``-name a b c``; following tokens are consumed until the next argument name."""

    key_value_separator: str | None = None
    """Separator of dictionary keys and values. Defaults to ``=``."""

    allow_duplicate_dictionary_keys: bool = False

    category: Any = None

    description: str = ""

    value_description: str | None = None

    callback: Callable[[Any, Any], Any] | None = None
    """
    For method arguments, called with ``(value, parser)``.
    Returns a :class:`CancelMode`, a ``bool`` (:obj:`False` cancels) or :obj:`None`.
    """

    kind: ArgumentKind | None = None

    init: bool = False
    """Pass the value to the target factory instead of assigning it afterwards."""


@define(frozen=True, kw_only=True)
class Argument:
    """Immutable, resolved description of one command line argument.

    Create instances with :meth:`Argument.from_info`.
    """

    name: str
    member_name: str
    short_name: str | None = None
    aliases: tuple[str, ...] = ()
    short_aliases: tuple[str, ...] = ()
    has_long_name: bool = True
    kind: ArgumentKind = ArgumentKind.SINGLE
    hint: Any = str
    element_type: Any = str
    key_type: Any = None
    value_type: Any = None
    position: int | None = None
    required: bool = False
    default_value: Any = UNSET
    allow_null: bool = False
    cancel_parsing: CancelMode = CancelMode.NONE
    hidden: bool = False
    validators: tuple[Callable, ...] = ()
    converter: ArgumentConverter = field(factory=lambda: as_converter(None, str))
    multi_value_separator: str | None = None
    allow_multi_value_whitespace_separator: bool = False
    key_value_separator: str | None = None
    allow_duplicate_dictionary_keys: bool = False
    category: Any = None
    description: str = ""
    value_description: str = ""
    callback: Callable[[Any, Any], Any] | None = None
    init: bool = False
    prefix: str = "-"
    short_prefix: str = "-"

    @property
    def display_name(self) -> str:
        """Name as the user would type it, including its prefix."""
        if self.has_long_name:
            return self.prefix + self.name
        return self.short_prefix + str(self.short_name)

    @property
    def is_positional(self) -> bool:
        return self.position is not None

    @property
    def is_multi_value(self) -> bool:
        return self.kind in (ArgumentKind.MULTI_VALUE, ArgumentKind.DICTIONARY)

    @property
    def is_switch(self) -> bool:
        """Switches need no value; their presence means :obj:`True`."""
        return self.position is None and resolve(self.element_type) is bool

    @property
    def long_names(self) -> tuple[str, ...]:
        return (self.name, *self.aliases) if self.has_long_name else ()

    @property
    def short_names(self) -> tuple[str, ...]:
        return (self.short_name, *self.short_aliases) if self.short_name else ()

    def validators_for(self, mode: ValidationMode) -> list[Callable]:
        return [v for v in self.validators if getattr(v, "mode", ValidationMode.AFTER_CONVERSION) is mode]

    @classmethod
    def from_info(cls, info: ArgumentInfo, options: ParseOptions | None = None) -> "Argument":
        """Resolve ``info`` into an :class:`Argument`.

        Raises
        ------
        DescriptorError
            The information is inconsistent; this is a programming error.
        """
        if options is None:
            options = ParseOptions()

        name = info.name
        if not name and info.member_name:
            name = options.name_transform(info.member_name)

        short_name = info.short_name
        if short_name is True:
            short_name = name[0] if name else None
        elif short_name is False:
            short_name = None

        has_long_name = True
        if options.long_short:
            has_long_name = info.is_long and bool(name)
            if not has_long_name and not short_name:
                raise DescriptorError(f"Argument {info.member_name!r} has neither a long nor a short name.")
            if not has_long_name:
                name = short_name
        else:
            short_name = None
        if not name:
            raise DescriptorError(f"Argument {info.member_name!r} has no name.")

        if any(not alias for alias in info.aliases):
            raise DescriptorError(f'Argument "{name}" has an empty alias.')
        for short in (short_name, *info.short_aliases) if options.long_short else ():
            if short is not None and len(short) != 1:
                raise DescriptorError(f'Short name {short!r} of argument "{name}" must be a single character.')

        kind = _infer_kind(info)
        element_type, key_type, value_type = _element_types(info, kind, name)

        if info.allow_null is not None:
            allow_null = info.allow_null
        else:
            allow_null = is_optional(value_type if kind is ArgumentKind.DICTIONARY else element_type)

        converter = _build_converter(info, kind, element_type, key_type, value_type, options)
        key_value_separator = None
        if kind is ArgumentKind.DICTIONARY:
            key_value_separator = info.key_value_separator or "="

        if info.value_description:
            value_description = info.value_description
        elif kind is ArgumentKind.DICTIONARY:
            value_description = (
                f"{friendly_type_name(key_type)}{key_value_separator}{friendly_type_name(value_type)}"
            )
        else:
            value_description = friendly_type_name(element_type)

        required = info.required
        default = UNSET if required else _convert_default(info, kind, element_type, converter, name)

        argument = cls(
            name=name,
            member_name=info.member_name or name.replace("-", "_"),
            short_name=short_name,
            aliases=info.aliases,
            short_aliases=info.short_aliases if options.long_short else (),
            has_long_name=has_long_name,
            kind=kind,
            hint=info.hint,
            element_type=element_type,
            key_type=key_type,
            value_type=value_type,
            position=info.position,
            required=required,
            default_value=default,
            allow_null=allow_null,
            cancel_parsing=info.cancel_parsing,
            hidden=info.hidden and not required and info.position is None,
            validators=info.validators,
            converter=converter,
            multi_value_separator=info.multi_value_separator or None,
            allow_multi_value_whitespace_separator=info.allow_multi_value_whitespace_separator,
            key_value_separator=key_value_separator,
            allow_duplicate_dictionary_keys=info.allow_duplicate_dictionary_keys,
            category=info.category,
            description=info.description,
            value_description=value_description,
            callback=info.callback,
            init=info.init,
            prefix=options.display_prefix(long=True),
            short_prefix=options.display_prefix(long=False),
        )
        for validator in argument.validators:
            check = getattr(validator, "check_argument", None)
            if check is not None:
                check(argument)
        return argument


def _infer_kind(info: ArgumentInfo) -> ArgumentKind:
    if info.kind is None:
        if info.callback is not None:
            return ArgumentKind.METHOD
        if is_dictionary_hint(info.hint):
            return ArgumentKind.DICTIONARY
        if is_multi_value_hint(info.hint):
            return ArgumentKind.MULTI_VALUE
        return ArgumentKind.SINGLE

    label = info.name or info.member_name
    if info.kind is ArgumentKind.METHOD and info.callback is None:
        raise DescriptorError(f"Method argument {label!r} requires a callback.")
    if info.kind is ArgumentKind.DICTIONARY and not is_dictionary_hint(info.hint):
        raise DescriptorError(f"Dictionary argument {label!r} must have a mapping type, not {info.hint!r}.")
    if info.kind is ArgumentKind.MULTI_VALUE and (is_dictionary_hint(info.hint) or not is_multi_value_hint(info.hint)):
        raise DescriptorError(f"Multi-value argument {label!r} must have a collection type, not {info.hint!r}.")
    return info.kind


def _element_types(info: ArgumentInfo, kind: ArgumentKind, name: str) -> tuple[Any, Any, Any]:
    match kind:
        case ArgumentKind.MULTI_VALUE:
            return element_hint(info.hint), None, None
        case ArgumentKind.DICTIONARY:
            key_type, value_type = key_value_hints(info.hint)
            if is_optional(key_type):
                raise DescriptorError(f'Dictionary argument "{name}" cannot have an optional key type.')
            return tuple[key_type, value_type], key_type, value_type
        case _:
            return info.hint, None, None


def _maybe_nullable(converter: ArgumentConverter, hint: Any, explicit: bool) -> ArgumentConverter:
    if not explicit and is_optional(hint):
        return NullableConverter(converter)
    return converter


def _build_converter(info, kind, element_type, key_type, value_type, options) -> ArgumentConverter:
    transform = {"name_transform": options.name_transform}
    if kind is not ArgumentKind.DICTIONARY or info.converter is not None:
        converter = as_converter(info.converter, element_type, **transform)
        return _maybe_nullable(converter, element_type, info.converter is not None)

    key_converter = as_converter(info.key_converter, key_type, **transform)
    value_converter = as_converter(info.value_converter, value_type, **transform)
    return KeyValuePairConverter(
        key_converter,
        _maybe_nullable(value_converter, value_type, info.value_converter is not None),
        separator=info.key_value_separator or "=",
        strings=options.strings,
    )


def _convert_default(info: ArgumentInfo, kind: ArgumentKind, element_type: Any, converter: ArgumentConverter, name):
    """Bring a default in line with the element type, always with the invariant culture."""
    default, hint = info.default, info.hint
    if default is UNSET or default is None:
        return default
    try:
        if kind is ArgumentKind.DICTIONARY:
            return _convert_default_mapping(default, converter)
        if kind is ArgumentKind.MULTI_VALUE and is_iterable(default):
            return collection_type(hint)(converter.convert(x, INVARIANT) if isinstance(x, str) else x for x in default)
        if isinstance(default, str) and resolve(element_type) is not str:
            return converter.convert(default, INVARIANT)
    except Exception as e:
        raise DescriptorError(f'Default value {default!r} of argument "{name}" cannot be converted.') from e
    return default


def _convert_default_mapping(default: Any, converter: ArgumentConverter) -> dict:
    mapping = dict(default)
    if not isinstance(converter, KeyValuePairConverter):
        return mapping

    def convert(c: ArgumentConverter, x: Any) -> Any:
        return c.convert(x, INVARIANT) if isinstance(x, str) else x

    return {
        convert(converter.key_converter, key): convert(converter.value_converter, value)
        for key, value in mapping.items()
    }
