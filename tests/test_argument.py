from typing import Optional

import pytest

from argwright import (
    UNSET,
    Argument,
    ArgumentInfo,
    ArgumentKind,
    Culture,
    DescriptorError,
    NullableConverter,
    ParseOptions,
    ValidationMode,
    identity_name_transform,
    validators,
)


def test_argument_name_from_member(options):
    argument = Argument.from_info(ArgumentInfo(member_name="max_count", hint=int), options)
    assert argument.name == "max-count"
    assert argument.member_name == "max_count"
    assert argument.display_name == "-max-count"
    assert argument.kind is ArgumentKind.SINGLE
    assert argument.value_description == "int"
    assert argument.default_value is UNSET
    assert not argument.is_positional
    assert not argument.is_switch


def test_argument_explicit_name(options):
    argument = Argument.from_info(ArgumentInfo(member_name="max_count", name="Max"), options)
    assert argument.name == "Max"
    assert argument.member_name == "max_count"


def test_argument_member_from_name(options):
    argument = Argument.from_info(ArgumentInfo(name="dry-run", hint=bool), options)
    assert argument.member_name == "dry_run"
    assert argument.is_switch


def test_argument_no_name(options):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(hint=int), options)


def test_argument_empty_alias(options):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="count", aliases=["c", ""]), options)


def test_argument_multi_value(options):
    argument = Argument.from_info(ArgumentInfo(member_name="files", hint=list[int]), options)
    assert argument.kind is ArgumentKind.MULTI_VALUE
    assert argument.element_type is int
    assert argument.is_multi_value
    assert argument.value_description == "int"


def test_argument_dictionary(options):
    argument = Argument.from_info(ArgumentInfo(member_name="define", hint=dict[str, int]), options)
    assert argument.kind is ArgumentKind.DICTIONARY
    assert argument.key_type is str
    assert argument.value_type is int
    assert argument.element_type == tuple[str, int]
    assert argument.key_value_separator == "="
    assert argument.value_description == "str=int"
    assert argument.is_multi_value


def test_argument_dictionary_custom_separator(options):
    info = ArgumentInfo(member_name="define", hint=dict[str, int], key_value_separator=":")
    argument = Argument.from_info(info, options)
    assert argument.value_description == "str:int"
    assert argument.converter.convert("a:1") == ("a", 1)


def test_argument_dictionary_optional_key(options):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="define", hint=dict[Optional[str], int]), options)


def test_argument_method_requires_callback(options):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="run", kind=ArgumentKind.METHOD), options)


def test_argument_method_inferred_from_callback(options):
    argument = Argument.from_info(ArgumentInfo(member_name="run", callback=lambda value, parser: None), options)
    assert argument.kind is ArgumentKind.METHOD


@pytest.mark.parametrize(
    "kind, hint",
    [
        (ArgumentKind.DICTIONARY, int),
        (ArgumentKind.MULTI_VALUE, int),
        (ArgumentKind.MULTI_VALUE, dict[str, str]),
    ],
)
def test_argument_kind_mismatch(options, kind, hint):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="x", hint=hint, kind=kind), options)


def test_argument_allow_null_inferred(options):
    assert Argument.from_info(ArgumentInfo(member_name="a", hint=Optional[int]), options).allow_null
    assert not Argument.from_info(ArgumentInfo(member_name="a", hint=int), options).allow_null
    assert Argument.from_info(ArgumentInfo(member_name="a", hint=dict[str, int | None]), options).allow_null
    assert not Argument.from_info(ArgumentInfo(member_name="a", hint=dict[str, int]), options).allow_null
    assert Argument.from_info(ArgumentInfo(member_name="a", hint=int, allow_null=True), options).allow_null


def test_argument_optional_uses_nullable_converter(options):
    argument = Argument.from_info(ArgumentInfo(member_name="a", hint=Optional[int]), options)
    assert isinstance(argument.converter, NullableConverter)
    assert argument.converter.convert("") is None
    assert argument.value_description == "int"


def test_argument_default_converted(options):
    argument = Argument.from_info(ArgumentInfo(member_name="count", hint=int, default="5"), options)
    assert argument.default_value == 5


def test_argument_default_uses_invariant_culture():
    culture = Culture(decimal_separator=",", group_separator=".")
    options = ParseOptions(argument_name_prefixes=("-",), culture=culture)
    argument = Argument.from_info(ArgumentInfo(member_name="ratio", hint=float, default="1.5"), options)
    assert argument.default_value == 1.5


def test_argument_default_multi_value(options):
    info = ArgumentInfo(member_name="sizes", hint=tuple[int, ...], default=["1", 2])
    argument = Argument.from_info(info, options)
    assert argument.default_value == (1, 2)


def test_argument_default_dictionary(options):
    info = ArgumentInfo(member_name="define", hint=dict[str, int], default={"a": "1", "b": 2})
    argument = Argument.from_info(info, options)
    assert argument.default_value == {"a": 1, "b": 2}


def test_argument_default_dictionary_keys_converted(options):
    info = ArgumentInfo(member_name="weights", hint=dict[int, float], default={"1": "0.5"})
    argument = Argument.from_info(info, options)
    assert argument.default_value == {1: 0.5}


def test_argument_default_dictionary_not_convertible(options):
    info = ArgumentInfo(member_name="define", hint=dict[str, int], default={"a": "bogus"})
    with pytest.raises(DescriptorError) as e:
        Argument.from_info(info, options)
    assert isinstance(e.value.__cause__, ValueError)


def test_argument_default_not_convertible(options):
    with pytest.raises(DescriptorError) as e:
        Argument.from_info(ArgumentInfo(member_name="count", hint=int, default="bogus"), options)
    assert isinstance(e.value.__cause__, ValueError)


def test_argument_required_drops_default(options):
    argument = Argument.from_info(ArgumentInfo(member_name="count", hint=int, default="5", required=True), options)
    assert argument.default_value is UNSET


def test_argument_hidden(options):
    assert Argument.from_info(ArgumentInfo(member_name="a", hidden=True), options).hidden
    assert not Argument.from_info(ArgumentInfo(member_name="a", hidden=True, required=True), options).hidden
    assert not Argument.from_info(ArgumentInfo(member_name="a", hidden=True, position=0), options).hidden


def test_argument_positional_bool_is_not_switch(options):
    argument = Argument.from_info(ArgumentInfo(member_name="flag", hint=bool, position=0), options)
    assert argument.is_positional
    assert not argument.is_switch


def test_argument_short_name_ignored_in_default_mode(options):
    argument = Argument.from_info(ArgumentInfo(member_name="verbose", short_name=True), options)
    assert argument.short_name is None
    assert argument.short_names == ()


def test_argument_long_short(long_short_options):
    argument = Argument.from_info(ArgumentInfo(member_name="verbose", hint=bool, short_name=True), long_short_options)
    assert argument.short_name == "v"
    assert argument.display_name == "--verbose"
    assert argument.long_names == ("verbose",)
    assert argument.short_names == ("v",)


def test_argument_short_only(long_short_options):
    info = ArgumentInfo(member_name="verbose", hint=bool, short_name="V", is_long=False)
    argument = Argument.from_info(info, long_short_options)
    assert argument.name == "V"
    assert argument.member_name == "verbose"
    assert argument.display_name == "-V"
    assert argument.long_names == ()


def test_argument_short_only_without_short_name(long_short_options):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="verbose", is_long=False), long_short_options)


def test_argument_short_name_too_long(long_short_options):
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="verbose", short_name="vv"), long_short_options)
    with pytest.raises(DescriptorError):
        Argument.from_info(ArgumentInfo(member_name="verbose", short_name="v", short_aliases="xy"), long_short_options)


def test_argument_validators_for(options):
    number = validators.Number(gte=0)
    pattern = validators.Pattern(r"\d")
    count = validators.Count(maximum=2)

    def plain(argument, value, session):
        pass

    info = ArgumentInfo(member_name="sizes", hint=list[int], validators=[number, pattern, count, plain])
    argument = Argument.from_info(info, options)
    assert argument.validators_for(ValidationMode.BEFORE_CONVERSION) == [pattern]
    assert argument.validators_for(ValidationMode.AFTER_CONVERSION) == [number, plain]
    assert argument.validators_for(ValidationMode.AFTER_PARSING) == [count]


def test_argument_info_single_validator(options):
    number = validators.Number(gte=0)
    argument = Argument.from_info(ArgumentInfo(member_name="count", hint=int, validators=number), options)
    assert argument.validators == (number,)


def test_argument_identity_name_transform():
    options = ParseOptions(argument_name_prefixes=("-",), name_transform=identity_name_transform)
    argument = Argument.from_info(ArgumentInfo(member_name="max_count", hint=int), options)
    assert argument.name == "max_count"
    assert argument.display_name == "-max_count"
