import math
import sys
from typing import Any

import pytest

from nanoserde import (
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    BadDataError,
    Char,
    DeJsonError,
    DeRonError,
    USize,
    deserialize_bin,
    deserialize_json,
    deserialize_ron,
    make_serde_type,
    serialize_bin,
    serialize_json,
    serialize_ron,
)
from nanoserde.text.errors import OutOfRange, WrongType

INT_BOUNDS = [
    (I8, 1, -2**7, 2**7 - 1),
    (I16, 2, -2**15, 2**15 - 1),
    (I32, 4, -2**31, 2**31 - 1),
    (I64, 8, -2**63, 2**63 - 1),
    (I128, 16, -2**127, 2**127 - 1),
    (U8, 1, 0, 2**8 - 1),
    (U16, 2, 0, 2**16 - 1),
    (U32, 4, 0, 2**32 - 1),
    (U64, 8, 0, 2**64 - 1),
    (U128, 16, 0, 2**128 - 1),
    (USize, 8, 0, 2**64 - 1),
]


def _all_formats(type_: Any, value: Any) -> None:
    assert deserialize_bin(type_, serialize_bin(value, type_)) == value
    assert deserialize_json(type_, serialize_json(value, type_)) == value
    assert deserialize_ron(type_, serialize_ron(value, type_)) == value


@pytest.mark.parametrize('type_,size,low,high', INT_BOUNDS)
def test_int_bounds(type_: Any, size: int, low: int, high: int) -> None:
    for value in [low, high, 0, 1]:
        _all_formats(type_, value)
    assert len(serialize_bin(high, type_)) == size
    assert serialize_json(high, type_) == str(high)


@pytest.mark.parametrize('type_,size,low,high', INT_BOUNDS)
def test_int_out_of_range(type_: Any, size: int, low: int, high: int) -> None:
    for value in [low - 1, high + 1]:
        with pytest.raises(ValueError):
            serialize_bin(value, type_)
    with pytest.raises(DeJsonError) as exc_info:
        deserialize_json(type_, str(high + 1))
    assert exc_info.value.reason == OutOfRange(f'{high + 1}>{high}')
    with pytest.raises(DeRonError):
        deserialize_ron(type_, str(low - 1))


def test_int_little_endian() -> None:
    assert serialize_bin(0x0102, U16).hex() == '0201'
    assert serialize_bin(-2, I32).hex() == 'feffffff'
    assert deserialize_bin(I16, bytes.fromhex('00ff')) == -256


def test_int_type_checks() -> None:
    for value in [True, 1.0, '1']:
        with pytest.raises(TypeError):
            serialize_bin(value, I32)


def test_default_int_is_i64() -> None:
    assert type(make_serde_type(int)) is type(make_serde_type(I64))
    assert len(serialize_bin(1)) == 8


@pytest.mark.parametrize('value', [
    0.0,
    -1.5,
    sys.float_info.max,
    -sys.float_info.max,
    sys.float_info.min,
    5e-324,
    1e-7,
    123456789.125,
])
def test_f64_edges(value: float) -> None:
    _all_formats(F64, value)
    _all_formats(float, value)


@pytest.mark.parametrize('value', [
    0.0,
    -1.5,
    3.4028234663852886e38,
    -3.4028234663852886e38,
    1.1754943508222875e-38,
    1.401298464324817e-45,
    0.10000000149011612,
])
def test_f32_edges(value: float) -> None:
    _all_formats(F32, value)


def test_f32_shortest_text() -> None:
    assert serialize_json(0.1, F32) == '0.1'
    assert serialize_ron(3.4028234663852886e38, F32) == '3.4028235e+38'
    assert serialize_json(1.401298464324817e-45, F32) == '1e-45'
    assert serialize_json(100.0, F32) == '100.0'


def test_f32_rounding() -> None:
    assert deserialize_bin(F32, serialize_bin(0.1, F32)) == 0.10000000149011612
    assert deserialize_json(F32, '0.1') == 0.10000000149011612
    assert serialize_bin(0.1, F32).hex() == 'cdcccc3d'


def test_f32_out_of_range() -> None:
    with pytest.raises(ValueError):
        serialize_bin(1e39, F32)
    with pytest.raises(DeJsonError) as exc_info:
        deserialize_json(F32, '1e39')
    assert isinstance(exc_info.value.reason, OutOfRange)


def test_non_finite_floats() -> None:
    for value in [math.inf, -math.inf]:
        assert deserialize_bin(F64, serialize_bin(value, F64)) == value
        with pytest.raises(ValueError):
            serialize_json(value, F64)
    assert math.isnan(deserialize_bin(F32, serialize_bin(math.nan, F32)))
    with pytest.raises(ValueError):
        serialize_ron(math.nan, F64)


def test_ints_are_accepted_as_floats() -> None:
    assert deserialize_bin(F64, serialize_bin(3, F64)) == 3.0
    assert deserialize_json(F64, '-3') == -3.0
    with pytest.raises(TypeError):
        serialize_bin(True, F64)


@pytest.mark.parametrize('value', ['a', '\0', 'é', '￿', '😋', '\U0010ffff'])
def test_chars(value: str) -> None:
    _all_formats(Char, value)
    assert serialize_bin(value, Char) == ord(value).to_bytes(4, 'little')


def test_bad_chars() -> None:
    for value in ['', 'ab', '\ud800']:
        with pytest.raises(ValueError):
            serialize_bin(value, Char)
    with pytest.raises(BadDataError):
        deserialize_bin(Char, (0x110000).to_bytes(4, 'little'))
    with pytest.raises(DeJsonError) as exc_info:
        deserialize_json(Char, '"ab"')
    assert isinstance(exc_info.value.reason, WrongType)
    with pytest.raises(DeRonError):
        deserialize_ron(Char, '"a"')


def test_bools() -> None:
    _all_formats(bool, True)
    _all_formats(bool, False)
    assert serialize_bin(True) == b'\x01'
    assert serialize_json(False) == 'false'
    assert serialize_ron(True) == 'true'
    assert deserialize_bin(bool, b'\x02') is True
