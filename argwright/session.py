"""Per-parse state.

A :class:`ParseSession` is created for every call to :meth:`CommandLineParser.parse`. It owns one
:class:`ArgumentState` per argument, so the parser and its :class:`Argument` descriptors are never
mutated while parsing.
"""

from collections.abc import MutableMapping, MutableSequence, MutableSet, Sequence
from typing import TYPE_CHECKING, Any

from attrs import define, field

from argwright.annotations import collection_type
from argwright.argument import Argument
from argwright.enums import (
    ArgumentKind,
    CancelMode,
    ErrorCategory,
    ErrorMode,
    ParseStatus,
    PrefixTerminationMode,
    ValidationMode,
)
from argwright.exceptions import CommandLineArgumentError, DescriptorError, create_error
from argwright.result import Err, Ok, Outcome, ParseResult
from argwright.utils import UNSET

if TYPE_CHECKING:
    from argwright.options import ParseOptions
    from argwright.parser import CommandLineParser
    from argwright.strings import StringProvider


@define
class SingleValue:
    value: Any = None


@define
class MultiValue:
    values: list[Any] = field(factory=list)


@define
class DictionaryValue:
    mapping: dict[Any, Any] = field(factory=dict)


@define
class MethodValue:
    value: Any = None


Accumulator = SingleValue | MultiValue | DictionaryValue | MethodValue

_VALIDATOR_EXCEPTIONS = (AssertionError, ValueError, TypeError)
_UNKNOWN_CATEGORIES = (ErrorCategory.UNKNOWN_ARGUMENT, ErrorCategory.TOO_MANY_ARGUMENTS)


def new_accumulator(kind: ArgumentKind) -> Accumulator:
    match kind:
        case ArgumentKind.SINGLE:
            return SingleValue()
        case ArgumentKind.MULTI_VALUE:
            return MultiValue()
        case ArgumentKind.DICTIONARY:
            return DictionaryValue()
        case ArgumentKind.METHOD:
            return MethodValue()


def _as_collection(argument: Argument, values: Sequence[Any]):
    return collection_type(argument.hint)(values)


def _callback_cancel_mode(result: Any) -> CancelMode:
    if isinstance(result, CancelMode):
        return result
    if result is False:
        return CancelMode.ABORT
    return CancelMode.NONE


@define
class ArgumentState:
    """Transient state of one argument during one parse."""

    argument: Argument
    session: "ParseSession" = field(repr=False)
    has_value: bool = False
    used_name: str | None = None
    """Name or alias the user typed; the argument name for positional values."""

    accumulator: Accumulator | None = None

    @property
    def value(self) -> Any:
        """Current value; the default value while :attr:`has_value` is :obj:`False`."""
        match self.accumulator:
            case None:
                return None if self.argument.default_value is UNSET else self.argument.default_value
            case SingleValue(value=value) | MethodValue(value=value):
                return value
            case MultiValue(values=values):
                return _as_collection(self.argument, values)
            case DictionaryValue(mapping=mapping):
                return dict(mapping)

    def reset(self) -> None:
        self.has_value = False
        self.used_name = None
        if self.argument.kind is ArgumentKind.SINGLE and self.argument.default_value is not UNSET:
            self.accumulator = SingleValue(self.argument.default_value)
        else:
            self.accumulator = None

    def _error(self, category: ErrorCategory, value: Any = None, cause: BaseException | None = None) -> Err:
        argument = self.argument
        return Err(
            create_error(
                self.session.strings,
                category,
                argument.name,
                display_name=argument.display_name,
                value=value,
                value_description=argument.value_description,
                cause=cause,
            )
        )

    def set_value(self, raw: str | None, used_name: str | None = None) -> Outcome:
        """Process one occurrence of the argument.

        Parameters
        ----------
        raw: str | None
            Value token, or :obj:`None` if the argument name appeared without a value.
        used_name: str | None
            Name or alias the user typed.

        Returns
        -------
        Ok[CancelMode] | Err
        """
        argument = self.argument
        if self.has_value and not argument.is_multi_value:
            match self.session.options.duplicate_arguments:
                case ErrorMode.ERROR:
                    return self._error(ErrorCategory.DUPLICATE_ARGUMENT)
                case ErrorMode.WARNING:
                    self.session.warn(self.session.strings.duplicate_argument_warning(argument.display_name))

        if raw is None:
            if not argument.is_switch:
                return self._error(ErrorCategory.MISSING_NAMED_ARGUMENT_VALUE)
            parts: list[str | None] = [None]
        elif argument.multi_value_separator and argument.is_multi_value:
            parts = list(raw.split(argument.multi_value_separator))
        else:
            parts = [raw]

        cancel = CancelMode.NONE
        for part in parts:
            outcome = self._set_part(part)
            if isinstance(outcome, Err):
                return outcome
            cancel = outcome.value
            if cancel is not CancelMode.NONE:
                break

        self.has_value = True
        self.used_name = used_name or argument.name
        if cancel is CancelMode.NONE:
            cancel = argument.cancel_parsing
        hook = self.session.parser.on_argument_parsed
        if hook is not None:
            override = hook(self)
            if override is not None:
                cancel = override
        return Ok(cancel)

    def _set_part(self, part: str | None) -> Outcome:
        argument = self.argument
        if part is None:
            value = True
        else:
            outcome = self.validate(ValidationMode.BEFORE_CONVERSION, part, part)
            if isinstance(outcome, Err):
                return outcome
            try:
                value = argument.converter.convert(part, self.session.options.culture, argument)
            except Exception as e:
                return self._error(ErrorCategory.ARGUMENT_VALUE_CONVERSION, part, e)

        if value is None and (argument.kind is ArgumentKind.DICTIONARY or not argument.allow_null):
            return self._error(ErrorCategory.NULL_ARGUMENT_VALUE)

        outcome = self._store(value, part)
        if isinstance(outcome, Err):
            return outcome
        cancel = outcome.value
        if cancel in (CancelMode.ABORT, CancelMode.ABORT_WITH_HELP):
            return outcome

        after = self.validate(ValidationMode.AFTER_CONVERSION, value, value if part is None else part)
        return after if isinstance(after, Err) else outcome

    def _store(self, value: Any, raw: str | None) -> Outcome:
        argument = self.argument
        if self.accumulator is None:
            self.accumulator = new_accumulator(argument.kind)

        match self.accumulator:
            case SingleValue() as accumulator:
                accumulator.value = value
            case MultiValue(values=values):
                values.append(value)
            case DictionaryValue(mapping=mapping):
                key, item = value
                if key is None or (item is None and not argument.allow_null):
                    return self._error(ErrorCategory.NULL_ARGUMENT_VALUE)
                if key in mapping and not argument.allow_duplicate_dictionary_keys:
                    cause = ValueError(self.session.strings.duplicate_dictionary_key(key))
                    return self._error(ErrorCategory.INVALID_DICTIONARY_VALUE, raw, cause)
                mapping[key] = item
            case MethodValue() as accumulator:
                accumulator.value = value
                assert argument.callback is not None
                try:
                    result = argument.callback(value, self.session.parser)
                except Exception as e:
                    return self._error(ErrorCategory.APPLY_VALUE_ERROR, raw, e)
                return Ok(_callback_cancel_mode(result))
        return Ok(CancelMode.NONE)

    def validate(self, mode: ValidationMode, value: Any, display_value: Any = UNSET) -> Outcome:
        """Run the validators of checkpoint ``mode``; the first failure is returned."""
        argument = self.argument
        for validator in argument.validators_for(mode):
            try:
                validator(argument, value, self.session)
            except _VALIDATOR_EXCEPTIONS as e:
                msg = self.session.strings.validation_failed(argument.display_name, display_value, str(e))
                category = getattr(validator, "error_category", ErrorCategory.VALIDATION_FAILED)
                return Err(
                    CommandLineArgumentError(msg=msg, category=category, argument_name=argument.name, cause=e)
                )
        return Ok()

    def validate_after_parsing(self) -> Outcome:
        if not self.has_value and self.argument.required:
            return self._error(ErrorCategory.MISSING_REQUIRED_ARGUMENT)
        return self.validate(ValidationMode.AFTER_PARSING, self.value)

    def apply_value(self, target: Any) -> Outcome:
        """Copy the final value onto ``target``."""
        argument = self.argument
        if argument.kind is ArgumentKind.METHOD or argument.init:
            return Ok()
        member = argument.member_name
        if not self.has_value and argument.default_value is UNSET and hasattr(target, member):
            # Keep the target's own default.
            return Ok()

        value = self.value
        try:
            existing = getattr(target, member, None)
            match argument.kind:
                case _ if existing is value:
                    pass
                case ArgumentKind.MULTI_VALUE if isinstance(existing, MutableSequence):
                    existing.clear()
                    existing.extend(value)
                case ArgumentKind.MULTI_VALUE if isinstance(existing, MutableSet):
                    existing.clear()
                    existing.update(value)
                case ArgumentKind.DICTIONARY if isinstance(existing, MutableMapping):
                    existing.clear()
                    existing.update(value)
                case _:
                    setattr(target, member, value)
        except Exception as e:
            return self._error(ErrorCategory.APPLY_VALUE_ERROR, cause=e)
        return Ok()


@define
class ParseSession:
    """State of a single parse of a :class:`CommandLineParser`."""

    parser: "CommandLineParser"
    states: dict[str, ArgumentState] = field(init=False, repr=False)
    warnings: list[str] = field(factory=list, init=False)

    _args: list[str] = field(factory=list, init=False, repr=False)
    _cursor: int = field(default=0, init=False, repr=False)
    _positional_index: int = field(default=0, init=False, repr=False)
    _positional_only: bool = field(default=False, init=False, repr=False)

    def __attrs_post_init__(self):
        self.states = {argument.name: ArgumentState(argument, self) for argument in self.parser.arguments}

    @property
    def options(self) -> "ParseOptions":
        return self.parser.options

    @property
    def strings(self) -> "StringProvider":
        return self.parser.options.strings

    def state(self, argument: Argument | str) -> ArgumentState:
        name = argument.name if isinstance(argument, Argument) else argument
        try:
            return self.states[name]
        except KeyError:
            raise DescriptorError(f'Unknown argument "{name}".') from None

    def has_value(self, name: str) -> bool:
        return self.state(name).has_value

    def value(self, name: str) -> Any:
        return self.state(name).value

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def reset(self) -> None:
        for state in self.states.values():
            state.reset()
        self.warnings.clear()
        self._args = []
        self._cursor = 0
        self._positional_index = 0
        self._positional_only = False

    def run(self, args: Sequence[str]) -> ParseResult:
        """Parse ``args``; the session is reset first."""
        self.reset()
        self._args = list(args)
        termination = self.options.prefix_termination

        while self._cursor < len(self._args):
            token = self._args[self._cursor]
            if token == "--" and termination is not PrefixTerminationMode.NONE and not self._positional_only:
                if termination is PrefixTerminationMode.CANCEL_WITH_SUCCESS:
                    return self._finish(self._args[self._cursor + 1 :])
                self._positional_only = True
                self._cursor += 1
                continue

            prefix = None if self._positional_only else self.parser.name_prefix(token)
            if prefix is None:
                outcome = self._parse_positional(token)
            else:
                outcome = self._parse_named(token, prefix)

            match outcome:
                case Err(error=error) if error.category in _UNKNOWN_CATEGORIES and self.parser.on_unknown_argument:
                    cancel = self.parser.on_unknown_argument(token)
                    if cancel is None:
                        return self._error_result(error)
                    if cancel is not CancelMode.NONE:
                        return self._cancel(cancel, None, self._args[self._cursor + 1 :])
                case Err(error=error):
                    return self._error_result(error)
                case Ok(value=(cancel, argument_name)) if cancel is not CancelMode.NONE:
                    return self._cancel(cancel, argument_name, self._args[self._cursor + 1 :])
            self._cursor += 1

        return self._finish()

    def _is_value_token(self, index: int) -> bool:
        if index >= len(self._args):
            return False
        token = self._args[index]
        if token == "--" and self.options.prefix_termination is not PrefixTerminationMode.NONE:
            return False
        return self.parser.name_prefix(token) is None

    def _parse_positional(self, token: str) -> Outcome:
        positionals = self.parser.positional_arguments
        skip_set = self.options.positional_duplicates == "skip"
        while self._positional_index < len(positionals):
            argument = positionals[self._positional_index]
            if argument.is_multi_value or not (skip_set and self.states[argument.name].has_value):
                break
            self._positional_index += 1
        else:
            return Err(create_error(self.strings, ErrorCategory.TOO_MANY_ARGUMENTS))

        state = self.states[argument.name]
        outcome = state.set_value(token, argument.name)
        if isinstance(outcome, Err):
            return outcome
        if not argument.is_multi_value:
            self._positional_index += 1
        return Ok((outcome.value, argument.name))

    def _split_name_value(self, body: str) -> tuple[str, str | None]:
        found = [(body.find(sep), sep) for sep in self.options.name_value_separators if sep and sep in body]
        if not found:
            return body, None
        index, sep = min(found)
        return body[:index], body[index + len(sep) :]

    def _parse_named(self, token: str, prefix: str) -> Outcome:
        name, value = self._split_name_value(token[len(prefix) :])
        options = self.options
        if options.long_short and prefix != options.long_argument_name_prefix and len(name) > 1:
            return self._parse_combined(name, value, prefix)

        short = options.long_short and prefix != options.long_argument_name_prefix
        match self.parser.find_argument(name, short=short, prefix=prefix):
            case Err() as err:
                return err
            case Ok(value=argument):
                pass

        if value is None and not argument.is_switch and options.allow_whitespace_value_separator:
            if self._is_value_token(self._cursor + 1):
                self._cursor += 1
                value = self._args[self._cursor]

        state = self.states[argument.name]
        outcome = state.set_value(value, name)
        if isinstance(outcome, Err):
            return outcome
        cancel = outcome.value

        if argument.is_multi_value and argument.allow_multi_value_whitespace_separator and value is not None:
            while cancel is CancelMode.NONE and self._is_value_token(self._cursor + 1):
                self._cursor += 1
                outcome = state.set_value(self._args[self._cursor], name)
                if isinstance(outcome, Err):
                    return outcome
                cancel = outcome.value
        return Ok((cancel, argument.name))

    def _parse_combined(self, names: str, value: str | None, prefix: str) -> Outcome:
        """Several short switches in one token, e.g. ``-abc``."""
        for name in names:
            match self.parser.find_argument(name, short=True, prefix=prefix):
                case Err() as err:
                    return err
                case Ok(value=argument):
                    pass
            if not argument.is_switch:
                return Err(
                    create_error(
                        self.strings,
                        ErrorCategory.COMBINED_SHORT_NAME_NON_SWITCH,
                        names,
                        display_name=prefix + names,
                    )
                )
            outcome = self.states[argument.name].set_value(value, name)
            if isinstance(outcome, Err):
                return outcome
            if outcome.value is not CancelMode.NONE:
                return Ok((outcome.value, argument.name))
        return Ok((CancelMode.NONE, None))

    def _result(self, status: ParseStatus, **kwargs) -> ParseResult:
        return ParseResult(status=status, warnings=tuple(self.warnings), session=self, **kwargs)

    def _error_result(self, error: CommandLineArgumentError) -> ParseResult:
        return self._result(ParseStatus.ERROR, error=error, argument_name=error.argument_name)

    def _cancel(self, cancel: CancelMode, argument_name: str | None, remaining: Sequence[str]) -> ParseResult:
        if cancel is CancelMode.SUCCESS:
            return self._finish(remaining, argument_name)
        return self._result(
            ParseStatus.CANCELED,
            argument_name=argument_name,
            help_requested=cancel is CancelMode.ABORT_WITH_HELP,
            remaining_arguments=tuple(remaining),
        )

    def _finish(self, remaining: Sequence[str] = (), argument_name: str | None = None) -> ParseResult:
        for state in self.states.values():
            outcome = state.validate_after_parsing()
            if isinstance(outcome, Err):
                return self._error_result(outcome.error)

        for validator in self.parser.class_validators:
            try:
                validator(self)
            except _VALIDATOR_EXCEPTIONS as e:
                error = CommandLineArgumentError(
                    msg=self.strings.class_validation_failed(str(e)),
                    category=getattr(validator, "error_category", ErrorCategory.VALIDATION_FAILED),
                    cause=e,
                )
                return self._error_result(error)

        match self._create_target():
            case Err(error=error):
                return self._error_result(error)
            case Ok(value=target):
                return self._result(
                    ParseStatus.SUCCESS,
                    value=target,
                    argument_name=argument_name,
                    remaining_arguments=tuple(remaining),
                )

    def _create_target(self) -> Outcome:
        kwargs = {
            state.argument.member_name: state.value
            for state in self.states.values()
            if state.argument.init and (state.has_value or state.argument.default_value is not UNSET)
        }
        try:
            target = self.parser.target(**kwargs)
        except Exception as e:
            return Err(create_error(self.strings, ErrorCategory.CREATE_ARGUMENTS_TYPE_ERROR, cause=e))

        for state in self.states.values():
            outcome = state.apply_value(target)
            if isinstance(outcome, Err):
                return outcome
        return Ok(target)
