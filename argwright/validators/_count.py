from typing import Any, ClassVar

from argwright.enums import ValidationMode
from argwright.exceptions import DescriptorError
from argwright.utils import frozen
from argwright.validators._base import ArgumentValidator, get_strings


@frozen(kw_only=True)
class Count(ArgumentValidator):
    """Limit the number of values of a multi-value or dictionary argument.

    Only checked when the argument was supplied.
    Using it on a single-value argument raises :exc:`DescriptorError` when the argument is defined.
    """

    mode: ClassVar[ValidationMode] = ValidationMode.AFTER_PARSING

    minimum: int = 0
    maximum: int | None = None

    def __call__(self, argument, value: Any, session=None):
        if session is not None and not session.has_value(argument.name):
            return
        if len(value) < self.minimum or (self.maximum is not None and len(value) > self.maximum):
            raise ValueError(get_strings(session).validate_count_failed(self.minimum, self.maximum))

    def check_argument(self, argument):
        if not argument.is_multi_value:
            raise DescriptorError(f'Count validator cannot be used with single-value argument "{argument.name}".')

    def usage_help(self, argument, strings):
        return strings.validate_count_usage_help(self.minimum, self.maximum)
