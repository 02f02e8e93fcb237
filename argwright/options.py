import sys
from collections.abc import Callable
from typing import Literal

from attrs import define, field

from argwright._convert import INVARIANT, Culture
from argwright.enums import ErrorMode, ParsingMode, PrefixTerminationMode
from argwright.strings import StringProvider
from argwright.utils import default_name_transform, to_tuple_converter


def _default_prefixes() -> tuple[str, ...]:
    return ("-", "/") if sys.platform == "win32" else ("-",)


@define(kw_only=True)
class ParseOptions:
    """Parser-wide configuration.

    Use :func:`attrs.evolve` to derive a modified copy.
    """

    mode: ParsingMode = ParsingMode.DEFAULT

    argument_name_prefixes: tuple[str, ...] = field(factory=_default_prefixes, converter=to_tuple_converter)
    """
    Prefixes that introduce an argument name.
    In :attr:`ParsingMode.LONG_SHORT` mode these introduce short names.
    Defaults to ``-`` (and ``/`` on Windows).
    """

    long_argument_name_prefix: str = "--"
    """Prefix of long names in :attr:`ParsingMode.LONG_SHORT` mode."""

    name_transform: Callable[[str], str] = default_name_transform
    """Derives an argument name from a member name when no explicit name is given."""

    case_sensitive: bool = False
    """
    Whether long names and aliases are compared case-sensitively.
    Short names are always case-sensitive.
    """

    duplicate_arguments: ErrorMode = ErrorMode.ERROR
    """Policy when a single-value argument is supplied more than once."""

    positional_duplicates: Literal["skip", "check"] = "skip"
    """
    How positional tokens interact with arguments that already have a value.

    * ``"skip"`` - Positional arguments that were already supplied by name are skipped.
    * ``"check"`` - Positional tokens fill positions strictly in order; an already supplied
      argument is subject to :attr:`duplicate_arguments`.
    """

    allow_whitespace_value_separator: bool = True
    """Allow ``-name value`` in addition to ``-name:value``."""

    name_value_separators: tuple[str, ...] = field(default=(":", "="), converter=to_tuple_converter)

    auto_help_argument: bool = True

    auto_version_argument: bool = True
    """Only has an effect if the parser has a version."""

    auto_prefix_aliases: bool = True
    """Any unambiguous prefix of a long name or alias selects that argument."""

    prefix_termination: PrefixTerminationMode = PrefixTerminationMode.NONE

    culture: Culture = INVARIANT

    strings: StringProvider = field(factory=StringProvider)

    @property
    def long_short(self) -> bool:
        return self.mode is ParsingMode.LONG_SHORT

    def display_prefix(self, long: bool = True) -> str:
        """Prefix used when showing an argument name to the user."""
        if self.long_short and long:
            return self.long_argument_name_prefix
        return self.argument_name_prefixes[0]
