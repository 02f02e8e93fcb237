__all__ = [
    "ArgumentValidator",
    "Count",
    "LimitedChoice",
    "MutuallyExclusive",
    "NotEmpty",
    "NotWhiteSpace",
    "Number",
    "Pattern",
    "Prohibits",
    "Requires",
    "RequiresAny",
    "StringLength",
]

from argwright.validators._base import ArgumentValidator
from argwright.validators._count import Count
from argwright.validators._dependency import Prohibits, Requires, RequiresAny
from argwright.validators._group import LimitedChoice, MutuallyExclusive
from argwright.validators._number import Number
from argwright.validators._string import NotEmpty, NotWhiteSpace, Pattern, StringLength
