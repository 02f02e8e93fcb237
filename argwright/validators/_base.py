from typing import TYPE_CHECKING, Any, ClassVar

from argwright.enums import ErrorCategory, ValidationMode
from argwright.strings import StringProvider

if TYPE_CHECKING:
    from argwright.argument import Argument
    from argwright.session import ParseSession


class ArgumentValidator:
    """Base class of the bundled argument validators.

    Any callable ``validator(argument, value, session)`` that raises :exc:`ValueError`,
    :exc:`TypeError` or :exc:`AssertionError` on invalid input can be used as a validator;
    subclassing only adds the :attr:`mode`, :attr:`error_category` and :meth:`usage_help` hooks.
    """

    mode: ClassVar[ValidationMode] = ValidationMode.AFTER_CONVERSION
    """Checkpoint at which the validator runs."""

    error_category: ClassVar[ErrorCategory] = ErrorCategory.VALIDATION_FAILED

    def __call__(self, argument: "Argument", value: Any, session: "ParseSession | None" = None):
        raise NotImplementedError

    def check_argument(self, argument: "Argument") -> None:
        """Raise :exc:`DescriptorError` if the validator cannot be used with ``argument``."""

    def usage_help(self, argument: "Argument", strings: StringProvider) -> str | None:
        """Short description of the rule for the usage help, or :obj:`None`."""
        return None


def get_strings(session: "ParseSession | None") -> StringProvider:
    return session.strings if session is not None else StringProvider()
