"""User-facing text.

Every sentence argwright shows to a user is produced by a :class:`StringProvider` method.
Subclass it and override individual methods to customize or translate the output, then pass
the instance as :attr:`ParseOptions.strings`.
"""

from collections.abc import Iterable
from typing import Any

from argwright.utils import UNSET


def _join(names: Iterable[str]) -> str:
    return ", ".join(names)


class StringProvider:
    # Errors

    def unspecified_error(self) -> str:
        return "An unknown error has occurred."

    def argument_value_conversion(self, argument_name: str, value: Any, value_description: str) -> str:
        return (
            f'The value "{value}" provided for argument "{argument_name}" '
            f'could not be interpreted as a "{value_description}".'
        )

    def unknown_argument(self, argument_name: str) -> str:
        return f'Unknown argument name "{argument_name}".'

    def missing_named_argument_value(self, argument_name: str) -> str:
        return f'No value was supplied for the argument "{argument_name}".'

    def duplicate_argument(self, argument_name: str) -> str:
        return f'The argument "{argument_name}" was supplied more than once.'

    def duplicate_argument_warning(self, argument_name: str) -> str:
        return f'The argument "{argument_name}" was supplied more than once; the last value is used.'

    def too_many_arguments(self) -> str:
        return "Too many arguments were supplied."

    def missing_required_argument(self, argument_name: str) -> str:
        return f'The required argument "{argument_name}" was not supplied.'

    def invalid_dictionary_value(self, argument_name: str, value: Any, message: str | None) -> str:
        return f'The value "{value}" provided for argument "{argument_name}" is not valid: {message}'

    def create_arguments_type_error(self, message: str | None) -> str:
        return f"The arguments object could not be created: {message}"

    def apply_value_error(self, argument_name: str, message: str | None) -> str:
        return f'An error occurred applying the value of argument "{argument_name}": {message}'

    def null_argument_value(self, argument_name: str) -> str:
        return f'The argument "{argument_name}" cannot have a null value.'

    def combined_short_name_non_switch(self, argument_name: str) -> str:
        return f'The combined short argument "{argument_name}" contains an argument that is not a switch.'

    def ambiguous_prefix_alias(self, argument_name: str, candidates: Iterable[str]) -> str:
        return f'The argument name "{argument_name}" is ambiguous. Possible arguments: {_join(candidates)}.'

    def missing_key_value_pair_separator(self, separator: str) -> str:
        return f'The value must contain the key/value separator "{separator}".'

    def duplicate_dictionary_key(self, key: Any) -> str:
        return f'The key "{key}" was supplied more than once.'

    def validation_failed(self, argument_name: str, value: Any = UNSET, detail: str = "") -> str:
        if value is UNSET:
            message = f'The argument "{argument_name}" is not valid.'
        else:
            message = f'Invalid value "{value}" for argument "{argument_name}".'
        return f"{message} {detail}" if detail else message

    def class_validation_failed(self, detail: str = "") -> str:
        return detail or "The combination of supplied arguments is not valid."

    # Validator details

    def validate_number_failed(self, operator: str, bound: Any) -> str:
        return f"Must be {operator} {bound}."

    def validate_modulo_failed(self, modulo: Any) -> str:
        return f"Must be a multiple of {modulo}."

    def validate_string_length_failed(self, minimum: int, maximum: int | None) -> str:
        if maximum is None:
            return f"Must be at least {minimum} characters."
        if minimum == 0:
            return f"Must be at most {maximum} characters."
        return f"Must be between {minimum} and {maximum} characters."

    def validate_count_failed(self, minimum: int, maximum: int | None) -> str:
        if maximum is None:
            return f"Must have at least {minimum} items."
        if minimum == 0:
            return f"Must have at most {maximum} items."
        return f"Must have between {minimum} and {maximum} items."

    def validate_pattern_failed(self, pattern: str) -> str:
        return f'Must match the pattern "{pattern}".'

    def validate_empty_failed(self) -> str:
        return "Must not be empty."

    def validate_white_space_failed(self) -> str:
        return "Must not be empty or contain only white-space."

    def validate_requires_failed(self, dependencies: Iterable[str]) -> str:
        return f"Must be used together with: {_join(dependencies)}."

    def validate_prohibits_failed(self, prohibited: Iterable[str]) -> str:
        return f"Cannot be used together with: {_join(prohibited)}."

    def validate_requires_any_failed(self, names: Iterable[str]) -> str:
        return f"At least one of the following arguments is required: {_join(names)}."

    def validate_all_required_failed(self, missing: Iterable[str]) -> str:
        return f"Missing arguments: {_join(missing)}."

    def validate_limited_choice_failed(self, names: Iterable[str], minimum: int, maximum: int) -> str:
        if minimum == 0 and maximum == 1:
            return f"Mutually exclusive arguments: {{{_join(names)}}}."
        return f"Received {{{_join(names)}}}. Only [{minimum}, {maximum}] of these may be specified."

    # Validator usage help

    def validate_number_usage_help(self, bounds: Iterable[str]) -> str:
        return f"Must be {' and '.join(bounds)}."

    def validate_string_length_usage_help(self, minimum: int, maximum: int | None) -> str:
        return self.validate_string_length_failed(minimum, maximum)

    def validate_count_usage_help(self, minimum: int, maximum: int | None) -> str:
        return self.validate_count_failed(minimum, maximum)

    def validate_requires_usage_help(self, dependencies: Iterable[str]) -> str:
        return f"Requires: {_join(dependencies)}."

    def validate_prohibits_usage_help(self, prohibited: Iterable[str]) -> str:
        return f"Cannot be used with: {_join(prohibited)}."

    # Automatic arguments

    def automatic_help_name(self) -> str:
        return "help"

    def automatic_help_short_name(self) -> str:
        return "?"

    def automatic_help_description(self) -> str:
        return "Displays this help message."

    def automatic_version_name(self) -> str:
        return "version"

    def automatic_version_description(self) -> str:
        return "Displays version information."

    def application_version(self, name: str, version: str) -> str:
        return f"{name} {version}" if name else version

    # Usage

    def usage_title(self) -> str:
        return "Usage"

    def usage_arguments_title(self) -> str:
        return "Arguments"

    def usage_default_value(self, default: Any) -> str:
        return f"[default: {default}]"

    def usage_required(self) -> str:
        return "[required]"

    def usage_aliases(self, aliases: Iterable[str]) -> str:
        return _join(aliases)

    def usage_multi_value_suffix(self) -> str:
        return "..."

    def warning_title(self) -> str:
        return "Warning"

    def error_title(self) -> str:
        return "Error"
