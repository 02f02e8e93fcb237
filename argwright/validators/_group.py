from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argwright.session import ParseSession


class LimitedChoice:
    def __init__(
        self,
        *arguments: str,
        min: int = 0,
        max: int | None = None,
        allow_none: bool = False,
    ):
        """Class validator that limits how many of ``arguments`` may be supplied.

        Commonly used for enforcing mutually-exclusive arguments (default behavior).

        Parameters
        ----------
        *arguments: str
            Names of the arguments in the group.
        min: int
            The minimum (inclusive) number of arguments that must be supplied.
            If negative, then **all** arguments in the group must be supplied.
        max: int | None
            The maximum (inclusive) number of arguments allowed.
            Defaults to ``1`` if ``min==0``, ``min`` otherwise.
        allow_none: bool
            If :obj:`True`, also allow 0 supplied arguments (even if ``min`` is greater than 0).
            Defaults to :obj:`False`.
        """
        self.arguments = arguments
        self.min = min
        self.max = (self.min or 1) if max is None else max
        if self.max < self.min:
            raise ValueError("max must be >=min.")
        self.allow_none = allow_none

    def __call__(self, session: "ParseSession"):
        states = [session.state(name) for name in self.arguments]
        supplied = [state.argument.display_name for state in states if state.has_value]
        n_arguments = len(supplied)

        if self.allow_none and n_arguments == 0:
            return
        elif self.min < 0:
            # Require all arguments in the group to be supplied.
            if n_arguments == len(states):
                return
            missing = [state.argument.display_name for state in states if not state.has_value]
            raise ValueError(session.strings.validate_all_required_failed(missing))
        elif self.min <= n_arguments <= self.max:
            return
        else:
            raise ValueError(session.strings.validate_limited_choice_failed(supplied, self.min, self.max))


class MutuallyExclusive(LimitedChoice):
    def __init__(self, *arguments: str):
        """Alias for :class:`LimitedChoice` to make intentions more obvious.

        Only 1 argument in the group can be supplied a value.
        """
        super().__init__(*arguments)
