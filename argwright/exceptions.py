from typing import TYPE_CHECKING, Any, Optional

from attrs import define, field

from argwright.enums import ErrorCategory
from argwright.strings import StringProvider

if TYPE_CHECKING:
    from rich.console import Console


__all__ = [
    "AmbiguousPrefixAliasError",
    "CommandLineArgumentError",
    "DescriptorError",
    "DuplicateArgumentWarning",
    "create_error",
]


class DescriptorError(Exception):
    """Argument metadata is malformed, or an argument set is inconsistent."""

    # This doesn't derive from CommandLineArgumentError since this is a developer error
    # rather than a runtime error.


class DuplicateArgumentWarning(UserWarning):
    """An argument was supplied more than once while duplicates only warn."""


@define(kw_only=True)
class CommandLineArgumentError(Exception):
    """Root exception for errors caused by user input."""

    msg: str = ""
    """Human readable description of the problem."""

    category: ErrorCategory = ErrorCategory.UNSPECIFIED

    argument_name: str | None = None
    """
    Name of the offending argument, without prefix.
    :obj:`None` for errors that concern the whole command line, like too many arguments.
    """

    cause: BaseException | None = None
    """Exception raised by a converter, callback or target that this error wraps."""

    console: Optional["Console"] = field(default=None)
    """:class:`~rich.console.Console` to display runtime errors."""

    def __attrs_post_init__(self):
        if self.cause is not None:
            self.__cause__ = self.cause

    def __str__(self):
        return self.msg


@define(kw_only=True)
class AmbiguousPrefixAliasError(CommandLineArgumentError):
    """A name prefix matched more than one argument."""

    category: ErrorCategory = ErrorCategory.AMBIGUOUS_PREFIX_ALIAS

    candidates: tuple[str, ...] = ()
    """Arguments the prefix could refer to."""


_NOT_FROM_FACTORY = {ErrorCategory.VALIDATION_FAILED, ErrorCategory.AMBIGUOUS_PREFIX_ALIAS}


def create_error(
    strings: StringProvider,
    category: ErrorCategory,
    argument_name: str | None = None,
    *,
    display_name: str | None = None,
    value: Any = None,
    value_description: str = "",
    cause: BaseException | None = None,
) -> CommandLineArgumentError:
    """Build a :class:`CommandLineArgumentError` with the message for ``category``.

    Parameters
    ----------
    strings: StringProvider
        Source of the message text.
    category: ErrorCategory
        Kind of error. Validation failures and ambiguous prefixes have their own messages
        and cannot be created here.
    argument_name: str | None
        Name of the offending argument, stored on the exception.
    display_name: str | None
        Name as shown in the message, usually including its prefix.
        Defaults to ``argument_name``.
    value: Any
        Offending raw value, if any.
    value_description: str
        Description of the expected value, used by conversion errors.
    cause: BaseException | None
        Wrapped exception.
    """
    if category in _NOT_FROM_FACTORY:
        raise ValueError(f"{category.name} errors must be constructed by their call site.")

    name = display_name or argument_name or ""
    inner = str(cause) if cause is not None else None
    match category:
        case ErrorCategory.ARGUMENT_VALUE_CONVERSION:
            msg = strings.argument_value_conversion(name, value, value_description)
        case ErrorCategory.UNKNOWN_ARGUMENT:
            msg = strings.unknown_argument(name)
        case ErrorCategory.MISSING_NAMED_ARGUMENT_VALUE:
            msg = strings.missing_named_argument_value(name)
        case ErrorCategory.DUPLICATE_ARGUMENT:
            msg = strings.duplicate_argument(name)
        case ErrorCategory.TOO_MANY_ARGUMENTS:
            msg = strings.too_many_arguments()
        case ErrorCategory.MISSING_REQUIRED_ARGUMENT:
            msg = strings.missing_required_argument(name)
        case ErrorCategory.INVALID_DICTIONARY_VALUE:
            msg = strings.invalid_dictionary_value(name, value, inner)
        case ErrorCategory.CREATE_ARGUMENTS_TYPE_ERROR:
            msg = strings.create_arguments_type_error(inner)
        case ErrorCategory.APPLY_VALUE_ERROR:
            msg = strings.apply_value_error(name, inner)
        case ErrorCategory.NULL_ARGUMENT_VALUE:
            msg = strings.null_argument_value(name)
        case ErrorCategory.COMBINED_SHORT_NAME_NON_SWITCH:
            msg = strings.combined_short_name_non_switch(name)
        case _:
            msg = strings.unspecified_error()

    return CommandLineArgumentError(msg=msg, category=category, argument_name=argument_name, cause=cause)
