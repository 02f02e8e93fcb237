import pytest

from argwright import ArgumentInfo, ErrorCategory, ParseStatus
from argwright.validators import LimitedChoice, MutuallyExclusive


@pytest.fixture
def make_group_parser(make_parser):
    def inner(validator):
        return make_parser(
            ArgumentInfo(member_name="foo", hint=bool),
            ArgumentInfo(member_name="bar", hint=bool),
            ArgumentInfo(member_name="baz", hint=bool),
            class_validators=validator,
        )

    return inner


def test_limited_choice_default_success(make_group_parser):
    parser = make_group_parser(LimitedChoice("foo", "bar", "baz"))
    assert parser.parse([]).status is ParseStatus.SUCCESS
    assert parser.parse(["-foo"]).status is ParseStatus.SUCCESS


def test_limited_choice_default_failure(make_group_parser):
    parser = make_group_parser(LimitedChoice("foo", "bar", "baz"))
    result = parser.parse(["-foo", "-bar"])
    assert result.status is ParseStatus.ERROR
    assert result.error.category is ErrorCategory.VALIDATION_FAILED
    assert str(result.error) == "Mutually exclusive arguments: {-foo, -bar}."


def test_limited_choice_min_max(make_group_parser):
    parser = make_group_parser(LimitedChoice("foo", "bar", "baz", min=2, max=3))
    assert parser.parse(["-foo", "-bar"]).status is ParseStatus.SUCCESS
    assert parser.parse(["-foo", "-bar", "-baz"]).status is ParseStatus.SUCCESS

    result = parser.parse(["-foo"])
    assert str(result.error) == "Received {-foo}. Only [2, 3] of these may be specified."


def test_limited_choice_allow_none(make_group_parser):
    parser = make_group_parser(LimitedChoice("foo", "bar", "baz", min=2, allow_none=True))
    assert parser.parse([]).status is ParseStatus.SUCCESS
    assert parser.parse(["-foo"]).status is ParseStatus.ERROR


def test_limited_choice_all(make_group_parser):
    parser = make_group_parser(LimitedChoice("foo", "bar", "baz", min=-1))
    assert parser.parse(["-foo", "-bar", "-baz"]).status is ParseStatus.SUCCESS

    result = parser.parse(["-foo"])
    assert str(result.error) == "Missing arguments: -bar, -baz."


def test_limited_choice_invalid_bounds():
    with pytest.raises(ValueError):
        LimitedChoice("foo", "bar", min=3, max=2)


def test_mutually_exclusive(make_group_parser):
    parser = make_group_parser(MutuallyExclusive("foo", "bar"))
    assert parser.parse(["-foo", "-baz"]).status is ParseStatus.SUCCESS
    assert parser.parse(["-foo", "-bar"]).status is ParseStatus.ERROR


def test_class_validators_run_after_argument_validation(make_parser):
    def never(session):
        raise AssertionError("should not run")

    parser = make_parser(
        ArgumentInfo(member_name="name", required=True),
        class_validators=never,
    )
    result = parser.parse([])
    assert result.error.category is ErrorCategory.MISSING_REQUIRED_ARGUMENT


def test_class_validator_plain_function(make_parser):
    def even(session):
        if session.value("count") % 2:
            raise ValueError("Count must be even.")

    parser = make_parser(ArgumentInfo(member_name="count", hint=int, default=0), class_validators=[even])
    assert parser.parse(["-count", "2"]).status is ParseStatus.SUCCESS
    result = parser.parse(["-count", "3"])
    assert result.error.category is ErrorCategory.VALIDATION_FAILED
    assert str(result.error) == "Count must be even."
