import pytest
from rich.console import Console

from argwright import CommandLineParser, ParseOptions, ParsingMode


@pytest.fixture
def console():
    return Console(width=70, force_terminal=True, highlight=False, color_system=None, legacy_windows=False)


@pytest.fixture
def options():
    # Pin the prefixes; "/" is only added by default on Windows.
    return ParseOptions(argument_name_prefixes=("-",))


@pytest.fixture
def long_short_options():
    return ParseOptions(mode=ParsingMode.LONG_SHORT, argument_name_prefixes=("-",))


@pytest.fixture
def make_parser(options, console):
    """Build a :class:`CommandLineParser` named "test" that prints to the test console."""

    def inner(*infos, **kwargs):
        kwargs.setdefault("options", options)
        kwargs.setdefault("name", "test")
        kwargs.setdefault("console", console)
        kwargs.setdefault("error_console", console)
        return CommandLineParser(infos, **kwargs)

    return inner
