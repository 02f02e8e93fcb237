from typing import TYPE_CHECKING, Any, ClassVar

from argwright.enums import ErrorCategory, ValidationMode
from argwright.validators._base import ArgumentValidator

if TYPE_CHECKING:
    from argwright.session import ParseSession


class _DependencyValidator(ArgumentValidator):
    mode: ClassVar[ValidationMode] = ValidationMode.AFTER_PARSING
    error_category: ClassVar[ErrorCategory] = ErrorCategory.DEPENDENCY_FAILED

    def __init__(self, *arguments: str):
        if not arguments:
            raise ValueError("At least one argument name is required.")
        self.arguments = arguments

    def __repr__(self):
        return f"{type(self).__name__}({', '.join(map(repr, self.arguments))})"

    def _display_names(self, session: "ParseSession", names) -> list[str]:
        return [session.state(name).argument.display_name for name in names]


class Requires(_DependencyValidator):
    """If this argument is supplied, every one of ``arguments`` must be supplied too.

    .. code-block:: python

        ArgumentInfo(member_name="password", validators=Requires("user"))
    """

    def __call__(self, argument, value: Any, session: "ParseSession | None" = None):
        if session is None or not session.has_value(argument.name):
            return
        missing = [name for name in self.arguments if not session.has_value(name)]
        if missing:
            raise ValueError(session.strings.validate_requires_failed(self._display_names(session, missing)))

    def usage_help(self, argument, strings):
        return strings.validate_requires_usage_help(self.arguments)


class Prohibits(_DependencyValidator):
    """If this argument is supplied, none of ``arguments`` may be supplied."""

    def __call__(self, argument, value: Any, session: "ParseSession | None" = None):
        if session is None or not session.has_value(argument.name):
            return
        present = [name for name in self.arguments if session.has_value(name)]
        if present:
            raise ValueError(session.strings.validate_prohibits_failed(self._display_names(session, present)))

    def usage_help(self, argument, strings):
        return strings.validate_prohibits_usage_help(self.arguments)


class RequiresAny:
    """Class validator: at least one of ``arguments`` must be supplied."""

    error_category: ClassVar[ErrorCategory] = ErrorCategory.MISSING_REQUIRED_ARGUMENT

    def __init__(self, *arguments: str):
        if len(arguments) < 2:
            raise ValueError("RequiresAny needs at least two argument names.")
        self.arguments = arguments

    def __call__(self, session: "ParseSession"):
        if not any(session.has_value(name) for name in self.arguments):
            names = [session.state(name).argument.display_name for name in self.arguments]
            raise ValueError(session.strings.validate_requires_any_failed(names))
