__version__ = "0.1.0"

__all__ = [
    "AmbiguousPrefixAliasError",
    "Argument",
    "ArgumentConverter",
    "ArgumentInfo",
    "ArgumentKind",
    "ArgumentState",
    "CancelMode",
    "CommandLineArgumentError",
    "CommandLineParser",
    "Culture",
    "DescriptorError",
    "DuplicateArgumentWarning",
    "ErrorCategory",
    "ErrorMode",
    "FunctionConverter",
    "INVARIANT",
    "KeyValuePairConverter",
    "NullableConverter",
    "ParseOptions",
    "ParseResult",
    "ParseSession",
    "ParseStatus",
    "ParsingMode",
    "PrefixTerminationMode",
    "PrimitiveConverter",
    "StringProvider",
    "UNSET",
    "ValidationMode",
    "create_error",
    "default_name_transform",
    "format_usage",
    "identity_name_transform",
    "parse",
    "validators",
]

from argwright import validators
from argwright._convert import INVARIANT, Culture
from argwright.argument import Argument, ArgumentInfo
from argwright.converters import (
    ArgumentConverter,
    FunctionConverter,
    KeyValuePairConverter,
    NullableConverter,
    PrimitiveConverter,
)
from argwright.enums import (
    ArgumentKind,
    CancelMode,
    ErrorCategory,
    ErrorMode,
    ParseStatus,
    ParsingMode,
    PrefixTerminationMode,
    ValidationMode,
)
from argwright.exceptions import (
    AmbiguousPrefixAliasError,
    CommandLineArgumentError,
    DescriptorError,
    DuplicateArgumentWarning,
    create_error,
)
from argwright.options import ParseOptions
from argwright.parser import CommandLineParser, parse
from argwright.result import ParseResult
from argwright.session import ArgumentState, ParseSession
from argwright.strings import StringProvider
from argwright.usage import format_usage
from argwright.utils import UNSET, default_name_transform, identity_name_transform
