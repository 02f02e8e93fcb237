import shlex
import sys
import warnings
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from types import SimpleNamespace
from typing import TYPE_CHECKING, Any, Optional

from attrs import define, evolve, field

from argwright._convert import is_negative_number
from argwright.argument import Argument, ArgumentInfo
from argwright.enums import ArgumentKind, CancelMode, ErrorCategory, ParseStatus
from argwright.exceptions import AmbiguousPrefixAliasError, DescriptorError, DuplicateArgumentWarning, create_error
from argwright.options import ParseOptions
from argwright.panel import ArgwrightPanel, create_error_console_from_console
from argwright.result import Err, Ok, Outcome, ParseResult
from argwright.session import ArgumentState, ParseSession
from argwright.usage import format_usage
from argwright.utils import to_tuple_converter

if TYPE_CHECKING:
    from rich.console import Console


def _show_help(value: Any, parser: "CommandLineParser") -> CancelMode:
    return CancelMode.ABORT_WITH_HELP


def _show_version(value: Any, parser: "CommandLineParser") -> CancelMode:
    strings = parser.options.strings
    parser.get_console().print(strings.application_version(parser.name, parser.version or ""), markup=False)
    return CancelMode.ABORT


def _default_name() -> str:
    return Path(sys.argv[0]).name


def _resolve_positions(arguments: list[Argument]) -> list[Argument]:
    """Renumber positional arguments from zero, ordered by their position hint."""
    order = sorted((a.position, i) for i, a in enumerate(arguments) if a.position is not None)
    resolved = list(arguments)
    positional: list[Argument] = []
    for new_position, (_, index) in enumerate(order):
        resolved[index] = evolve(arguments[index], position=new_position)
        positional.append(resolved[index])

    for argument, following in zip(positional, positional[1:], strict=False):
        if argument.is_multi_value:
            raise DescriptorError(f'Multi-value positional argument "{argument.name}" must be the last one.')
        if following.required and not argument.required:
            raise DescriptorError(
                f'Required positional argument "{following.name}" cannot follow optional "{argument.name}".'
            )
    return resolved


@define
class CommandLineParser:
    """Parses command line arguments into a target object.

    Parameters
    ----------
    infos: Iterable[ArgumentInfo]
        Description of every argument, in definition order.
    options: ParseOptions
        Parser-wide configuration.
    target: Callable[..., Any]
        Factory of the result object. Called with the values of ``init`` arguments as
        keyword arguments; every other value is assigned as an attribute afterwards.
        Defaults to :class:`types.SimpleNamespace`.
    class_validators: Iterable[Callable]
        Called with the :class:`ParseSession` after every argument has been validated.
    name: str
        Application name shown in the usage help. Defaults to the script name.
    description: str
        Shown in the usage help.
    version: str | None
        Enables the automatic version argument.
    on_argument_parsed: Callable[[ArgumentState], CancelMode | None] | None
        Called with the :class:`ArgumentState` after every occurrence of an argument.
        A :class:`CancelMode` replaces the argument's own cancel mode; :obj:`None` keeps it.
    on_unknown_argument: Callable[[str], CancelMode | None] | None
        Called with a token that matches no argument, or an extra positional value.
        :obj:`None` reports the error, ``CancelMode.NONE`` skips the token, and any
        other mode cancels parsing.
    """

    infos: tuple[ArgumentInfo, ...] = field(default=(), converter=to_tuple_converter)
    options: ParseOptions = field(factory=ParseOptions, kw_only=True)
    target: Callable[..., Any] = field(default=SimpleNamespace, kw_only=True)
    class_validators: tuple[Callable, ...] = field(default=(), converter=to_tuple_converter, kw_only=True)
    name: str = field(factory=_default_name, kw_only=True)
    description: str = field(default="", kw_only=True)
    version: str | None = field(default=None, kw_only=True)
    on_argument_parsed: Callable[[ArgumentState], CancelMode | None] | None = field(default=None, kw_only=True)
    on_unknown_argument: Callable[[str], CancelMode | None] | None = field(default=None, kw_only=True)

    console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` for usage help and version output."""

    error_console: Optional["Console"] = field(default=None, kw_only=True)
    """:class:`~rich.console.Console` for errors and warnings. Derived from :attr:`console` if not set."""

    arguments: tuple[Argument, ...] = field(init=False)
    positional_arguments: tuple[Argument, ...] = field(init=False)
    _long_names: dict[str, Argument] = field(init=False, factory=dict, repr=False)
    _short_names: dict[str, Argument] = field(init=False, factory=dict, repr=False)

    def __attrs_post_init__(self):
        arguments = _resolve_positions([Argument.from_info(info, self.options) for info in self.infos])
        for argument in arguments:
            self._register(argument)
        arguments.extend(self._automatic_arguments())
        if len({a.name for a in arguments}) != len(arguments):
            raise DescriptorError("Argument names must be unique.")

        self.arguments = tuple(arguments)
        self.positional_arguments = tuple(
            sorted((a for a in arguments if a.position is not None), key=lambda a: a.position)
        )

    def _key(self, name: str) -> str:
        return name if self.options.case_sensitive else name.casefold()

    def _is_taken(self, name: str, short: bool = False) -> bool:
        if short:
            return name in self._short_names
        return self._key(name) in self._long_names

    def _register(self, argument: Argument) -> None:
        for name in argument.long_names:
            if self._is_taken(name):
                raise DescriptorError(f'Duplicate argument name "{name}".')
            self._long_names[self._key(name)] = argument
        for name in argument.short_names:
            if self._is_taken(name, short=True):
                raise DescriptorError(f'Duplicate short argument name "{name}".')
            self._short_names[name] = argument

    def _automatic_arguments(self) -> list[Argument]:
        options = self.options
        strings = options.strings
        automatic = []

        help_name = strings.automatic_help_name()
        if options.auto_help_argument and not self._is_taken(help_name):
            short_names = [strings.automatic_help_short_name(), help_name[0]]
            if options.long_short:
                short_names = [x for x in short_names if not self._is_taken(x, short=True)]
                names = {"short_name": short_names[0] if short_names else None, "short_aliases": short_names[1:]}
            else:
                names = {"aliases": [x for x in short_names if not self._is_taken(x)]}
            info = ArgumentInfo(
                name=help_name,
                hint=bool,
                kind=ArgumentKind.METHOD,
                callback=_show_help,
                description=strings.automatic_help_description(),
                **names,
            )
            automatic.append(Argument.from_info(info, options))

        version_name = strings.automatic_version_name()
        if options.auto_version_argument and self.version is not None and not self._is_taken(version_name):
            info = ArgumentInfo(
                name=version_name,
                hint=bool,
                kind=ArgumentKind.METHOD,
                callback=_show_version,
                description=strings.automatic_version_description(),
            )
            automatic.append(Argument.from_info(info, options))

        for argument in automatic:
            self._register(argument)
        return automatic

    def get_argument(self, name: str) -> Argument | None:
        """Look up an argument by its name or an alias, without prefix."""
        return self._long_names.get(self._key(name)) or self._short_names.get(name)

    def get_console(self) -> "Console":
        if self.console is None:
            from rich.console import Console

            self.console = Console()
        return self.console

    def get_error_console(self) -> "Console":
        if self.error_console is None:
            self.error_console = create_error_console_from_console(self.get_console())
        return self.error_console

    def name_prefix(self, token: str) -> str | None:
        """Prefix that makes ``token`` an argument name, or :obj:`None` if it is a value."""
        if is_negative_number(token):
            return None
        options = self.options
        long = options.long_argument_name_prefix
        if options.long_short and token.startswith(long) and len(token) > len(long):
            return long
        for prefix in sorted(options.argument_name_prefixes, key=len, reverse=True):
            if token.startswith(prefix) and len(token) > len(prefix):
                return prefix
        return None

    def find_argument(self, name: str, *, short: bool = False, prefix: str = "") -> Outcome:
        """Resolve a name typed by the user.

        Returns
        -------
        Ok[Argument] | Err
            :class:`AmbiguousPrefixAliasError` if ``name`` is a prefix of several arguments,
            an unknown argument error if it matches nothing.
        """
        if short:
            argument = self._short_names.get(name)
        else:
            argument = self._long_names.get(self._key(name))
        if argument is not None:
            return Ok(argument)

        if not short and self.options.auto_prefix_aliases and name:
            key = self._key(name)
            candidates = {a.name: a for k, a in self._long_names.items() if k.startswith(key)}
            if len(candidates) == 1:
                return Ok(next(iter(candidates.values())))
            if len(candidates) > 1:
                names = tuple(a.display_name for a in candidates.values())
                return Err(
                    AmbiguousPrefixAliasError(
                        msg=self.options.strings.ambiguous_prefix_alias(prefix + name, names),
                        argument_name=name,
                        candidates=names,
                    )
                )

        return Err(
            create_error(self.options.strings, ErrorCategory.UNKNOWN_ARGUMENT, name, display_name=prefix + name)
        )

    def _parse(self, args: None | str | Iterable[str]) -> ParseResult:
        if args is None:
            args = sys.argv[1:]
        elif isinstance(args, str):
            args = shlex.split(args)
        return ParseSession(self).run(list(args))

    def parse(self, args: None | str | Iterable[str] = None) -> ParseResult:
        """Parse ``args`` without printing anything.

        User errors are reported through the returned :class:`ParseResult`, never raised.
        Duplicate argument warnings are issued with :func:`warnings.warn`.

        Parameters
        ----------
        args: None | str | Iterable[str]
            Tokens to parse. A string is split with :func:`shlex.split`.
            Defaults to ``sys.argv[1:]``.
        """
        result = self._parse(args)
        for message in result.warnings:
            warnings.warn(message, DuplicateArgumentWarning, stacklevel=2)
        return result

    def parse_args(
        self,
        args: None | str | Iterable[str] = None,
        *,
        console: Optional["Console"] = None,
        error_console: Optional["Console"] = None,
        print_error: bool = True,
        exit_on_error: bool = True,
        help_on_error: bool = False,
    ) -> Any:
        """Parse ``args`` and handle errors and cancellation for a command line application.

        Parameters
        ----------
        args: None | str | Iterable[str]
            Tokens to parse. Defaults to ``sys.argv[1:]``.
        console: ~rich.console.Console
            Console for the usage help.
        error_console: ~rich.console.Console
            Console for errors and warnings.
        print_error: bool
            Print a rich panel describing the error.
        exit_on_error: bool
            If there is an error, call ``sys.exit(1)``; otherwise the error is re-raised.
        help_on_error: bool
            Print the usage help before the error.

        Returns
        -------
        Any
            The populated target, or :obj:`None` if parsing was canceled.

        Raises
        ------
        CommandLineArgumentError
            Only if ``exit_on_error`` is :obj:`False`.
        """
        console = console or self.get_console()
        if error_console is None:
            error_console = self.error_console or create_error_console_from_console(console)
        strings = self.options.strings

        result = self._parse(args)
        for message in result.warnings:
            error_console.print(ArgwrightPanel(message, title=strings.warning_title(), style="yellow"))

        match result.status:
            case ParseStatus.SUCCESS:
                return result.value
            case ParseStatus.CANCELED:
                if result.help_requested:
                    console.print(format_usage(self))
                return None

        error = result.error
        assert error is not None
        error.console = error_console
        if help_on_error:
            console.print(format_usage(self))
        if print_error:
            error_console.print(ArgwrightPanel(error, title=strings.error_title()))
        if exit_on_error:
            sys.exit(1)
        raise error

    def help_print(self, console: Optional["Console"] = None, *, syntax_only: bool = False) -> None:
        """Print the usage help."""
        (console or self.get_console()).print(format_usage(self, syntax_only=syntax_only))


def parse(
    infos: Iterable[ArgumentInfo],
    args: None | str | Sequence[str] = None,
    *,
    options: ParseOptions | None = None,
    **kwargs,
) -> ParseResult:
    """Build a :class:`CommandLineParser` and parse ``args`` with it."""
    parser = CommandLineParser(infos, options=options or ParseOptions(), **kwargs)
    return parser.parse(args)
