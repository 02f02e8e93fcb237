from collections.abc import Sequence
from typing import Any

from argwright.utils import frozen
from argwright.validators._base import ArgumentValidator, get_strings


@frozen(kw_only=True)
class Number(ArgumentValidator):
    """Limit input number to a value range.

    Example Usage:

    .. code-block:: python

        from argwright import ArgumentInfo, CommandLineParser, validators

        parser = CommandLineParser(
            [ArgumentInfo(member_name="age", hint=int, validators=validators.Number(gte=0, lte=150))]
        )

    .. code-block:: console

        $ my-script -age -1
        ╭─ Error ───────────────────────────────────────────────────────╮
        │ Invalid value "-1" for argument "-age". Must be >= 0.         │
        ╰───────────────────────────────────────────────────────────────╯
    """

    lt: int | float | None = None
    """Input value must be **less than** this value."""

    lte: int | float | None = None
    """Input value must be **less than or equal** this value."""

    gt: int | float | None = None
    """Input value must be **greater than** this value."""

    gte: int | float | None = None
    """Input value must be **greater than or equal** this value."""

    modulo: int | float | None = None
    """Input value must be a multiple of this value."""

    def __call__(self, argument, value: Any, session=None):
        if isinstance(value, Sequence):
            if isinstance(value, str):
                raise TypeError
            for v in value:
                self(argument, v, session)
            return

        if not isinstance(value, int | float):
            return

        strings = get_strings(session)
        if self.lt is not None and value >= self.lt:
            raise ValueError(strings.validate_number_failed("<", self.lt))

        if self.lte is not None and value > self.lte:
            raise ValueError(strings.validate_number_failed("<=", self.lte))

        if self.gt is not None and value <= self.gt:
            raise ValueError(strings.validate_number_failed(">", self.gt))

        if self.gte is not None and value < self.gte:
            raise ValueError(strings.validate_number_failed(">=", self.gte))

        if self.modulo is not None and value % self.modulo:
            raise ValueError(strings.validate_modulo_failed(self.modulo))

    def usage_help(self, argument, strings):
        bounds = [
            f"{operator} {bound}"
            for operator, bound in ((">", self.gt), (">=", self.gte), ("<", self.lt), ("<=", self.lte))
            if bound is not None
        ]
        return strings.validate_number_usage_help(bounds) if bounds else None
