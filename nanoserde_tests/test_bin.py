import gc
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional

from nanoserde import (
    F32,
    I8,
    I16,
    I128,
    U8,
    U16,
    U32,
    U128,
    UNIX_EPOCH,
    Array,
    Box,
    Char,
    Duration,
    SystemTime,
    USize,
    deserialize_bin,
    serialize_bin,
)
from nanoserde.serde_types import make_serde_type
from nanoserde.serialization.exceptions import (
    BadDataError,
    OutOfDataError,
    SerializationError,
    TooLongError,
    UnknownVariantError,
)
from nanoserde_tests import unittest


@dataclass
class Point:
    x: I16
    y: I16


class Pair(NamedTuple):
    a: U8
    b: str


@dataclass
class Stop:
    pass


@dataclass
class Go:
    speed: U32


@dataclass
class Move:
    next: Optional[Stop | Go] = None


class Suit(Enum):
    HEARTS = 1
    SPADES = 2


class BinTestCase(unittest.TestCase):
    def test_scalars(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(bool, True), b'\x01')
        self.assertEqual(self.assertBinRoundTrip(U8, 255), b'\xff')
        self.assertEqual(self.assertBinRoundTrip(I8, -1), b'\xff')
        self.assertEqual(self.assertBinRoundTrip(U16, 0x0102), b'\x02\x01')
        self.assertEqual(self.assertBinRoundTrip(int, -2), b'\xfe' + b'\xff' * 7)
        self.assertEqual(self.assertBinRoundTrip(USize, 1), b'\x01' + b'\x00' * 7)
        self.assertEqual(len(self.assertBinRoundTrip(I128, -(2**127))), 16)
        self.assertEqual(len(self.assertBinRoundTrip(U128, 2**128 - 1)), 16)
        self.assertEqual(self.assertBinRoundTrip(None, None), b'')

    def test_floats(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(float, 1.5), bytes.fromhex('000000000000f83f'))
        self.assertEqual(self.assertBinRoundTrip(F32, 1.5), bytes.fromhex('0000c03f'))
        self.assertBinRoundTrip(float, float('inf'))
        self.assertBinRoundTrip(float, float('nan'))

    def test_text(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(str, 'ab'), bytes.fromhex('02000000000000006162'))
        self.assertEqual(self.assertBinRoundTrip(str, ''), b'\x00' * 8)
        self.assertEqual(self.assertBinRoundTrip(Char, '😋'), (0x1F60B).to_bytes(4, 'little'))
        self.assertEqual(self.assertBinRoundTrip(bytes, b'\x01\x02'), bytes.fromhex('02000000000000000102'))

    def test_containers(self) -> None:
        self.assertEqual(
            self.assertBinRoundTrip(list[U16], [1, 2]),
            bytes.fromhex('020000000000000001000200'),
        )
        self.assertBinRoundTrip(list[str], [])
        self.assertBinRoundTrip(deque[U8], deque([1, 2, 3]))
        self.assertBinRoundTrip(set[str], {'a', 'b'})
        self.assertBinRoundTrip(frozenset[U8], frozenset({1}))
        self.assertBinRoundTrip(dict[str, list[U8]], {'a': [1], 'b': []})
        self.assertBinRoundTrip(tuple[U8, str], (1, 'x'))
        self.assertBinRoundTrip(tuple[U8, str, bool, F32], (1, 'x', False, 0.5))
        self.assertBinRoundTrip(tuple[U8, ...], (1, 2, 3))
        self.assertBinRoundTrip(Box[list[U8]], [4])

    def test_optional(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(Optional[U8], None), b'\x00')
        self.assertEqual(self.assertBinRoundTrip(U8 | None, 7), b'\x01\x07')

    def test_optional_variant(self) -> None:
        type_ = Optional[Stop | Go]
        self.assertEqual(self.assertBinRoundTrip(type_, None), b'\x00')
        self.assertEqual(self.assertBinRoundTrip(type_, Stop()), b'\x01\x00\x00')
        self.assertEqual(self.assertBinRoundTrip(type_, Go(3)), bytes.fromhex('01010003000000'))
        for value in [None, Stop(), Go(3)]:
            self.assertRoundTrip(type_, value)
            self.assertRoundTrip(Move, Move(value))

    def test_var_tuple(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(tuple[U8, ...], ()), b'\x00' * 8)
        self.assertRoundTrip(tuple[U8, ...], (1, 2, 3))
        self.assertRoundTrip(tuple[str, ...], ('a',))

    def test_optional_bad_marker(self) -> None:
        with self.assertRaises(BadDataError):
            deserialize_bin(Optional[U8], b'\x02\x07')

    def test_fixed_array(self) -> None:
        data = self.assertBinRoundTrip(Array[U16, 3], [1, 2, 3])
        self.assertEqual(data, bytes.fromhex('010002000300'))
        with self.assertRaises(ValueError):
            serialize_bin([1, 2], Array[U16, 3])

    def test_duration(self) -> None:
        data = self.assertBinRoundTrip(Duration, Duration(1000, 999_999_999))
        self.assertEqual(data, bytes.fromhex('e803000000000000ffc99a3b'))
        with self.assertRaises(BadDataError):
            deserialize_bin(Duration, bytes.fromhex('e80300000000000000ca9a3b'))

    def test_system_time(self) -> None:
        self.assertBinRoundTrip(SystemTime, SystemTime(Duration(5, 6)))
        self.assertEqual(serialize_bin(UNIX_EPOCH)[0], 1)
        self.assertEqual(deserialize_bin(SystemTime, b'\x00'), UNIX_EPOCH)

    def test_record(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(Point, Point(1, -1)), bytes.fromhex('0100ffff'))

    def test_namedtuple(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(Pair, Pair(1, 'a')), bytes.fromhex('01010000000000000061'))

    def test_variants(self) -> None:
        type_ = Stop | Go
        self.assertEqual(self.assertBinRoundTrip(type_, Stop()), b'\x00\x00')
        self.assertEqual(self.assertBinRoundTrip(type_, Go(3)), bytes.fromhex('010003000000'))
        with self.assertRaises(UnknownVariantError):
            deserialize_bin(type_, b'\x02\x00')

    def test_enum(self) -> None:
        self.assertEqual(self.assertBinRoundTrip(Suit, Suit.SPADES), b'\x01\x00')
        with self.assertRaises(UnknownVariantError):
            deserialize_bin(Suit, b'\x05\x00')

    def test_underrun(self) -> None:
        data = serialize_bin(Point(1, 2))
        with self.assertRaises(OutOfDataError) as cm:
            deserialize_bin(Point, data[:-1])
        self.assertEqual(cm.exception.offset, 2)
        self.assertEqual(cm.exception.wanted, 2)

    def test_trailing_bytes(self) -> None:
        with self.assertRaises(BadDataError):
            deserialize_bin(U8, b'\x01\x02')

    def test_invalid_utf8(self) -> None:
        with self.assertRaises(BadDataError):
            deserialize_bin(str, bytes.fromhex('0100000000000000ff'))

    def test_invalid_char(self) -> None:
        with self.assertRaises(BadDataError):
            deserialize_bin(Char, (0xD800).to_bytes(4, 'little'))

    def test_length_prefix_limit(self) -> None:
        # the unittests settings only accept length prefixes up to 1 MiB
        data = (2**21).to_bytes(8, 'little')
        with self.assertRaises(TooLongError):
            deserialize_bin(list[U8], data)

    def test_errors_share_base_class(self) -> None:
        for error in (BadDataError, OutOfDataError, TooLongError, UnknownVariantError):
            self.assertTrue(issubclass(error, SerializationError))

    def test_encode_checks_types(self) -> None:
        with self.assertRaises(TypeError):
            serialize_bin('1', U8)
        with self.assertRaises(ValueError):
            serialize_bin(256, U8)
        with self.assertRaises(TypeError):
            serialize_bin(True, U8)
        with self.assertRaises(TypeError):
            serialize_bin([1, 'a'], list[U8])

    def test_serialize_uses_value_class(self) -> None:
        self.assertEqual(serialize_bin(Point(0, 1)), bytes.fromhex('00000100'))
        self.assertEqual(serialize_bin(7), (7).to_bytes(8, 'little'))

    def test_cursor_level_decoding(self) -> None:
        from nanoserde.serialization import Deserializer

        serde_type = make_serde_type(U16)
        deserializer = Deserializer.build_bytes_deserializer(bytes.fromhex('01000200'))
        self.assertEqual(serde_type.deserialize(deserializer), 1)
        self.assertEqual(deserializer.cur_pos(), 2)
        self.assertEqual(serde_type.deserialize(deserializer), 2)
        deserializer.finalize()


class DropCounter:
    dropped = 0

    def __init__(self, value: int) -> None:
        self.value = value

    def __del__(self) -> None:
        DropCounter.dropped += 1

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DropCounter) and other.value == self.value


@dataclass
class U128Holder:
    value: U128

    @classmethod
    def from_source(cls, value: 'Tracked') -> 'U128Holder':
        return cls(value.value)

    def into_source(self) -> 'Tracked':
        return Tracked(self.value)


class Tracked(DropCounter):
    pass


def _tracked_array_type() -> object:
    from typing import Annotated

    from nanoserde import nserde
    return Array[Annotated[Tracked, nserde(proxy=U128Holder)], 2]


class FixedArrayReleaseTestCase(unittest.TestCase):
    def test_truncated_array_releases_built_items(self) -> None:
        serde_type = make_serde_type(_tracked_array_type())
        data = serde_type.to_bytes([Tracked(1), Tracked(2)])
        self.assertEqual(len(data), 32)
        gc.collect()
        DropCounter.dropped = 0
        with self.assertRaises(OutOfDataError):
            serde_type.from_bytes(data[:-1])
        gc.collect()
        self.assertGreaterEqual(DropCounter.dropped, 1)

    def test_complete_array_keeps_items(self) -> None:
        serde_type = make_serde_type(_tracked_array_type())
        data = serde_type.to_bytes([Tracked(1), Tracked(2)])
        items = serde_type.from_bytes(data)
        self.assertEqual([item.value for item in items], [1, 2])
