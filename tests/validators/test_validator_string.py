import pytest

from argwright import Argument, ArgumentInfo, ErrorCategory, ParseStatus
from argwright.validators import NotEmpty, NotWhiteSpace, Pattern, StringLength


@pytest.fixture
def argument(options):
    return Argument.from_info(ArgumentInfo(member_name="name"), options)


def test_validator_string_length(argument):
    validator = StringLength(minimum=2, maximum=4)
    validator(argument, "ab")
    validator(argument, "abcd")

    with pytest.raises(ValueError, match="between 2 and 4"):
        validator(argument, "a")

    with pytest.raises(ValueError):
        validator(argument, "abcde")


def test_validator_string_length_unbounded(argument):
    validator = StringLength(minimum=1)
    validator(argument, "a" * 1000)
    with pytest.raises(ValueError, match="at least 1"):
        validator(argument, "")


def test_validator_pattern(argument):
    validator = Pattern(r"^\d+$")
    validator(argument, "123")
    with pytest.raises(ValueError, match="Must match the pattern"):
        validator(argument, "12a")


def test_validator_pattern_message(argument):
    validator = Pattern(r"^[a-z]+$", message="Lowercase letters only.")
    with pytest.raises(ValueError, match="Lowercase letters only."):
        validator(argument, "ABC")


def test_validator_not_empty(argument):
    NotEmpty()(argument, " ")
    with pytest.raises(ValueError):
        NotEmpty()(argument, "")


def test_validator_not_white_space(argument):
    NotWhiteSpace()(argument, "x")
    with pytest.raises(ValueError):
        NotWhiteSpace()(argument, " \t")


def test_validator_pattern_runs_before_conversion(make_parser):
    parser = make_parser(ArgumentInfo(member_name="count", hint=int, validators=Pattern(r"^\d+$")))
    assert parser.parse(["-count", "16"]).value.count == 16

    # "0x10" would convert fine, but the raw text is rejected first.
    result = parser.parse(["-count", "0x10"])
    assert result.status is ParseStatus.ERROR
    assert result.error.category is ErrorCategory.VALIDATION_FAILED
    assert str(result.error) == 'Invalid value "0x10" for argument "-count". Must match the pattern "^\\d+$".'


def test_validator_not_empty_parse(make_parser):
    parser = make_parser(ArgumentInfo(member_name="name", validators=NotEmpty()))
    result = parser.parse(["-name:"])
    assert result.error.category is ErrorCategory.VALIDATION_FAILED
    assert str(result.error) == 'Invalid value "" for argument "-name". Must not be empty.'
