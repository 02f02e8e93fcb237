from enum import Enum, auto


class ArgumentKind(Enum):
    """How an argument stores the values it receives."""

    SINGLE = auto()
    MULTI_VALUE = auto()
    DICTIONARY = auto()
    METHOD = auto()


class CancelMode(Enum):
    """What happens to the parse when an argument is encountered."""

    NONE = auto()
    """Parsing continues normally."""

    ABORT = auto()
    """Parsing stops and the results are discarded."""

    ABORT_WITH_HELP = auto()
    """Like :attr:`ABORT`, and usage help should be shown."""

    SUCCESS = auto()
    """Parsing stops, but the results so far are kept; unparsed tokens are returned to the caller."""


class ParsingMode(Enum):
    DEFAULT = auto()
    """Every name, alias and short name share one prefix set."""

    LONG_SHORT = auto()
    """POSIX-like: ``--long`` names and ``-s`` short names, short switches may be combined."""


class ErrorMode(Enum):
    ERROR = auto()
    WARNING = auto()
    ALLOW = auto()


class ValidationMode(Enum):
    BEFORE_CONVERSION = auto()
    AFTER_CONVERSION = auto()
    AFTER_PARSING = auto()


class PrefixTerminationMode(Enum):
    """Behavior of the ``--`` token."""

    NONE = auto()
    POSITIONAL_ONLY = auto()
    CANCEL_WITH_SUCCESS = auto()


class ParseStatus(Enum):
    NONE = auto()
    SUCCESS = auto()
    CANCELED = auto()
    ERROR = auto()


class ErrorCategory(Enum):
    UNSPECIFIED = auto()
    ARGUMENT_VALUE_CONVERSION = auto()
    UNKNOWN_ARGUMENT = auto()
    MISSING_NAMED_ARGUMENT_VALUE = auto()
    DUPLICATE_ARGUMENT = auto()
    TOO_MANY_ARGUMENTS = auto()
    MISSING_REQUIRED_ARGUMENT = auto()
    INVALID_DICTIONARY_VALUE = auto()
    CREATE_ARGUMENTS_TYPE_ERROR = auto()
    APPLY_VALUE_ERROR = auto()
    NULL_ARGUMENT_VALUE = auto()
    COMBINED_SHORT_NAME_NON_SWITCH = auto()
    AMBIGUOUS_PREFIX_ALIAS = auto()
    VALIDATION_FAILED = auto()
    DEPENDENCY_FAILED = auto()
