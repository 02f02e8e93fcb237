from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from attrs import field

from argwright.enums import ParseStatus
from argwright.exceptions import CommandLineArgumentError
from argwright.utils import frozen

if TYPE_CHECKING:
    from argwright.session import ParseSession

T = TypeVar("T")


@frozen
class Ok(Generic[T]):
    """Successful outcome of a session operation."""

    value: T = None  # pyright: ignore[reportAssignmentType]


@frozen
class Err:
    """Failed outcome of a session operation."""

    error: CommandLineArgumentError = field(hash=False)


Outcome = Ok | Err


@frozen(kw_only=True)
class ParseResult:
    """Outcome of :meth:`CommandLineParser.parse`."""

    status: ParseStatus = ParseStatus.NONE

    value: Any = field(default=None, hash=False)
    """
    Populated target object.
    :obj:`None` unless :attr:`status` is :attr:`ParseStatus.SUCCESS`.
    """

    error: CommandLineArgumentError | None = field(default=None, hash=False)
    """The error that stopped parsing, if :attr:`status` is :attr:`ParseStatus.ERROR`."""

    argument_name: str | None = None
    """Argument that caused the error or the cancellation."""

    help_requested: bool = False
    """Whether the caller should display usage help."""

    remaining_arguments: tuple[str, ...] = ()
    """Tokens left unparsed after a :attr:`CancelMode.SUCCESS` cancellation."""

    warnings: tuple[str, ...] = ()
    """Non-fatal diagnostics, such as duplicate arguments under :attr:`ErrorMode.WARNING`."""

    session: Optional["ParseSession"] = field(default=None, eq=False, hash=False, repr=False)
    """Per-argument state of the parse that produced this result."""

    @property
    def success(self) -> bool:
        return self.status is ParseStatus.SUCCESS
