"""Usage help rendering."""

from typing import TYPE_CHECKING

from argwright.argument import Argument
from argwright.strings import StringProvider
from argwright.utils import UNSET

if TYPE_CHECKING:
    from rich.console import Group

    from argwright.parser import CommandLineParser


def _visible(parser: "CommandLineParser") -> list[Argument]:
    positional = sorted((a for a in parser.arguments if a.is_positional), key=lambda a: a.position)
    named = [a for a in parser.arguments if not a.is_positional and not a.hidden]
    return positional + named


def format_syntax(argument: Argument, strings: StringProvider) -> str:
    value = f"<{argument.value_description}>"
    if argument.is_positional:
        text = f"[{argument.display_name}] {value}"
    elif argument.is_switch:
        text = argument.display_name
    else:
        text = f"{argument.display_name} {value}"
    if argument.is_multi_value:
        text += strings.usage_multi_value_suffix()
    return text if argument.required else f"[{text}]"


def format_names(argument: Argument, strings: StringProvider) -> str:
    names = [argument.short_prefix + short for short in argument.short_names]
    names += [argument.prefix + name for name in argument.long_names]
    return strings.usage_aliases(names)


def format_description(argument: Argument, strings: StringProvider) -> str:
    parts = [argument.description] if argument.description else []
    for validator in argument.validators:
        usage_help = getattr(validator, "usage_help", None)
        if usage_help is not None and (text := usage_help(argument, strings)):
            parts.append(text)
    if argument.required:
        parts.append(strings.usage_required())
    elif argument.default_value is not UNSET and argument.default_value is not None:
        parts.append(strings.usage_default_value(argument.default_value))
    return " ".join(parts)


def format_usage(parser: "CommandLineParser", *, syntax_only: bool = False) -> "Group":
    """Build the usage help of ``parser`` as a rich renderable.

    Parameters
    ----------
    parser: CommandLineParser
        Parser to describe.
    syntax_only: bool
        Only render the usage line, omitting the argument descriptions.
    """
    from rich import box
    from rich.console import Group
    from rich.panel import Panel
    from rich.table import Table
    from rich.text import Text

    strings = parser.options.strings
    arguments = _visible(parser)

    usage = [f"{strings.usage_title()}:"]
    if parser.name:
        usage.append(parser.name)
    usage.extend(format_syntax(argument, strings) for argument in arguments)
    renderables = [Text(" ".join(usage) + "\n", style="bold")]

    if syntax_only:
        return Group(*renderables)

    if parser.description:
        renderables.append(Text(parser.description + "\n"))

    table = Table(box=None, show_header=False, pad_edge=False, padding=(0, 2, 0, 0))
    table.add_column(style="cyan", no_wrap=True)
    table.add_column()
    for argument in arguments:
        table.add_row(Text(format_names(argument, strings)), Text(format_description(argument, strings)))
    renderables.append(
        Panel(table, title=strings.usage_arguments_title(), title_align="left", box=box.ROUNDED, expand=True)
    )
    return Group(*renderables)
