import re
from typing import Any, ClassVar

from argwright.enums import ValidationMode
from argwright.utils import frozen
from argwright.validators._base import ArgumentValidator, get_strings


@frozen(kw_only=True)
class StringLength(ArgumentValidator):
    """Limit the number of characters of a value."""

    minimum: int = 0
    maximum: int | None = None

    def __call__(self, argument, value: Any, session=None):
        if value is None:
            return
        length = len(str(value))
        if length < self.minimum or (self.maximum is not None and length > self.maximum):
            raise ValueError(get_strings(session).validate_string_length_failed(self.minimum, self.maximum))

    def usage_help(self, argument, strings):
        return strings.validate_string_length_usage_help(self.minimum, self.maximum)


@frozen
class Pattern(ArgumentValidator):
    """Raw token must contain a match of ``pattern``.

    Runs before conversion, so it applies to the text exactly as typed.
    """

    mode: ClassVar[ValidationMode] = ValidationMode.BEFORE_CONVERSION

    pattern: str
    flags: int = 0
    message: str | None = None
    """Replaces the generic failure detail."""

    def __call__(self, argument, value: str, session=None):
        if re.search(self.pattern, value, self.flags) is None:
            raise ValueError(self.message or get_strings(session).validate_pattern_failed(self.pattern))


@frozen
class NotEmpty(ArgumentValidator):
    """Reject an empty token."""

    mode: ClassVar[ValidationMode] = ValidationMode.BEFORE_CONVERSION

    def __call__(self, argument, value: str, session=None):
        if not value:
            raise ValueError(get_strings(session).validate_empty_failed())


@frozen
class NotWhiteSpace(ArgumentValidator):
    """Reject a token that is empty or only white-space."""

    mode: ClassVar[ValidationMode] = ValidationMode.BEFORE_CONVERSION

    def __call__(self, argument, value: str, session=None):
        if not value.strip():
            raise ValueError(get_strings(session).validate_white_space_failed())
