"""Strategies that turn one raw token into a typed value."""

import inspect
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from attrs import field

from argwright import _convert
from argwright._convert import INVARIANT, Culture
from argwright.strings import StringProvider
from argwright.utils import default_name_transform, frozen

if TYPE_CHECKING:
    from argwright.argument import Argument


__all__ = [
    "ArgumentConverter",
    "FunctionConverter",
    "KeyValuePairConverter",
    "NullableConverter",
    "PrimitiveConverter",
]


class ArgumentConverter:
    """Base class for value converters.

    A converter must be a pure function of its inputs; failures are signaled by raising
    any exception, which the parser reports as an argument value conversion error.
    """

    def convert(self, value: str, culture: Culture = INVARIANT, argument: "Argument | None" = None) -> Any:
        raise NotImplementedError


@frozen
class PrimitiveConverter(ArgumentConverter):
    """Built-in conversion for ``type_``; see :func:`argwright._convert.convert`."""

    type_: Any = str
    name_transform: Callable[[str], str] = field(default=default_name_transform, kw_only=True)

    def convert(self, value: str, culture: Culture = INVARIANT, argument: "Argument | None" = None) -> Any:
        return _convert.convert(self.type_, value, culture, self.name_transform)


@frozen
class NullableConverter(ArgumentConverter):
    """Converts an empty token to :obj:`None`, anything else through ``base``."""

    base: ArgumentConverter

    def convert(self, value: str, culture: Culture = INVARIANT, argument: "Argument | None" = None) -> Any:
        if not value:
            return None
        return self.base.convert(value, culture, argument)


@frozen
class FunctionConverter(ArgumentConverter):
    """Adapts a user callable ``func(token)``.

    If ``func`` has a parameter named ``culture``, the active :class:`Culture` is passed to it.
    """

    func: Callable[..., Any]
    _pass_culture: bool = field(init=False, eq=False)

    @_pass_culture.default  # pyright: ignore[reportAttributeAccessIssue]
    def _pass_culture_default(self) -> bool:
        try:
            parameters = inspect.signature(self.func).parameters.values()
        except (TypeError, ValueError):
            return False
        return any(p.name == "culture" for p in parameters)

    def convert(self, value: str, culture: Culture = INVARIANT, argument: "Argument | None" = None) -> Any:
        if self._pass_culture:
            return self.func(value, culture=culture)
        return self.func(value)


@frozen
class KeyValuePairConverter(ArgumentConverter):
    """Converts ``key{separator}value`` into a ``(key, value)`` tuple.

    The token is split on the **first** occurrence of ``separator``, so values may contain it.
    """

    key_converter: ArgumentConverter = field(factory=PrimitiveConverter)
    value_converter: ArgumentConverter = field(factory=PrimitiveConverter)
    separator: str = field(default="=", kw_only=True)
    strings: StringProvider = field(factory=StringProvider, kw_only=True, eq=False)

    def convert(self, value: str, culture: Culture = INVARIANT, argument: "Argument | None" = None) -> Any:
        key, separator, item = value.partition(self.separator)
        if not separator:
            raise ValueError(self.strings.missing_key_value_pair_separator(self.separator))
        return (
            self.key_converter.convert(key, culture, argument),
            self.value_converter.convert(item, culture, argument),
        )


def as_converter(converter: ArgumentConverter | Callable[..., Any] | None, type_: Any, **kwargs) -> ArgumentConverter:
    """Normalize a user supplied converter; :obj:`None` selects the built-in conversion for ``type_``."""
    if converter is None:
        return PrimitiveConverter(type_, **kwargs)
    if isinstance(converter, ArgumentConverter):
        return converter
    return FunctionConverter(converter)
