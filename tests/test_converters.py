import pytest

from argwright import (
    INVARIANT,
    Culture,
    FunctionConverter,
    KeyValuePairConverter,
    NullableConverter,
    PrimitiveConverter,
)
from argwright.converters import as_converter


def test_primitive_converter():
    assert PrimitiveConverter(int).convert("12") == 12
    assert PrimitiveConverter().convert("12") == "12"
    assert PrimitiveConverter(float).convert("1,25", Culture(decimal_separator=",")) == 1.25


def test_nullable_converter():
    converter = NullableConverter(PrimitiveConverter(int))
    assert converter.convert("") is None
    assert converter.convert("3") == 3


def test_function_converter():
    converter = FunctionConverter(str.upper)
    assert converter.convert("abc") == "ABC"


def test_function_converter_culture():
    def parse(token, culture):
        return culture.decimal_separator + token

    converter = FunctionConverter(parse)
    assert converter.convert("x", Culture(decimal_separator=",")) == ",x"
    assert converter.convert("x") == ".x"


def test_function_converter_builtin():
    # Builtins without an inspectable signature are called with the token only.
    assert FunctionConverter(int).convert("7", INVARIANT) == 7


def test_key_value_pair_converter():
    converter = KeyValuePairConverter(PrimitiveConverter(str), PrimitiveConverter(int))
    assert converter.convert("answer=42") == ("answer", 42)


def test_key_value_pair_converter_first_separator():
    converter = KeyValuePairConverter()
    assert converter.convert("key=a=b") == ("key", "a=b")


def test_key_value_pair_converter_custom_separator():
    converter = KeyValuePairConverter(separator=":")
    assert converter.convert("a:b=c") == ("a", "b=c")


def test_key_value_pair_converter_missing_separator():
    converter = KeyValuePairConverter()
    with pytest.raises(ValueError, match='separator "="'):
        converter.convert("novalue")


def test_key_value_pair_converter_bad_value():
    converter = KeyValuePairConverter(PrimitiveConverter(str), PrimitiveConverter(int))
    with pytest.raises(ValueError):
        converter.convert("answer=many")


def test_as_converter():
    assert as_converter(None, int) == PrimitiveConverter(int)

    existing = NullableConverter(PrimitiveConverter(int))
    assert as_converter(existing, int) is existing

    wrapped = as_converter(str.lower, int)
    assert isinstance(wrapped, FunctionConverter)
    assert wrapped.convert("ABC") == "abc"
