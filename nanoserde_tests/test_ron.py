from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, NamedTuple, Optional

from nanoserde import (
    I32,
    U8,
    Array,
    Char,
    DeRonError,
    Duration,
    SystemTime,
    deserialize_ron,
    nserde,
    serialize_ron,
)
from nanoserde.conf.settings import CodecSettings
from nanoserde.text.errors import MissingKey, NoSuchEnum, OutOfRange, UnexpectedKey, UnexpectedToken
from nanoserde_tests import unittest


@dataclass
class Value:
    value: I32


@dataclass
class Inner:
    name: str
    tags: list[str] = field(default_factory=list)


@dataclass
class Outer:
    inner: Inner
    scores: dict[str, U8]
    grid: Array[U8, 2]
    note: Optional[str] = None


@dataclass
class Quit:
    pass


class Move(NamedTuple):
    x: I32
    y: I32


@dataclass
class Write:
    text: str


Message = Quit | Move | Write


class Color(Enum):
    RED = 'r'
    BLUE = 'b'


class RonTestCase(unittest.TestCase):
    def test_out_of_range(self) -> None:
        with self.assertRaises(DeRonError) as cm:
            deserialize_ron(Value, '(value:2147483648)')
        self.assertEqual(cm.exception.reason, OutOfRange('2147483648>2147483647'))
        self.assertIn('2147483648>2147483647', str(cm.exception))
        self.assertTrue(str(cm.exception).startswith('Ron Deserialize error: '))

    def test_record_layout(self) -> None:
        value = Outer(Inner('n', ['a', 'b']), {'x': 1}, [3, 4])
        text = self.assertRonRoundTrip(Outer, value)
        self.assertEqual(text, '\n'.join([
            '(',
            '    inner:(',
            '        name:"n",',
            '        tags:[',
            '            "a",',
            '            "b",',
            '        ],',
            '    ),',
            '    scores:{',
            '        "x":1,',
            '    },',
            '    grid:(3, 4),',
            ')',
        ]))

    def test_optional_fields(self) -> None:
        value = Outer(Inner('n'), {}, [0, 0], note='hi')
        text = self.assertRonRoundTrip(Outer, value)
        self.assertIn('    note:"hi",\n', text)
        self.assertEqual(self.assertRonRoundTrip(Optional[U8], None), 'None')
        self.assertEqual(self.assertRonRoundTrip(Optional[U8], 5), '5')

    def test_indent_width_setting(self) -> None:
        settings = CodecSettings(RON_INDENT_WIDTH=2)
        self.assertEqual(serialize_ron(Value(1), settings=settings), '(\n  value:1,\n)')

    def test_variants(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(Message, Quit()), 'Quit')
        self.assertEqual(self.assertRonRoundTrip(Message, Move(1, -2)), 'Move(1, -2)')
        self.assertEqual(self.assertRonRoundTrip(Message, Write('hi')), 'Write(\n    text:"hi",\n)')

    def test_optional_variants(self) -> None:
        type_ = Optional[Message]
        self.assertEqual(self.assertRonRoundTrip(type_, None), 'None')
        self.assertEqual(self.assertRonRoundTrip(type_, Quit()), 'Quit')
        self.assertEqual(self.assertRonRoundTrip(type_, Move(1, -2)), 'Move(1, -2)')
        self.assertEqual(self.assertRonRoundTrip(type_, Write('hi')), 'Write(\n    text:"hi",\n)')

    def test_variable_length_tuple(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(tuple[U8, ...], ()), '[\n]')
        self.assertEqual(deserialize_ron(tuple[U8, ...], '[1, 2,]'), (1, 2))

    def test_unknown_variant(self) -> None:
        with self.assertRaises(DeRonError) as cm:
            deserialize_ron(Message, 'Jump')
        self.assertEqual(cm.exception.reason, NoSuchEnum('Jump'))
        with self.assertRaises(DeRonError) as cm:
            deserialize_ron(Message, '"Quit"')
        self.assertIsInstance(cm.exception.reason, UnexpectedToken)

    def test_enum(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(Color, Color.BLUE), 'BLUE')
        with self.assertRaises(DeRonError):
            deserialize_ron(Color, 'GREEN')

    def test_tuples(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(tuple[U8, str], (1, 'a')), '(1, "a")')
        self.assertEqual(deserialize_ron(tuple[U8, str], '(1, "a",)'), (1, 'a'))

    def test_chars_and_strings(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(Char, 'x'), "'x'")
        self.assertEqual(self.assertRonRoundTrip(Char, "'"), "'\\''")
        self.assertEqual(self.assertRonRoundTrip(str, 'a\n\t"\0\\'), '"a\\n\\t\\"\\0\\\\"')
        self.assertEqual(deserialize_ron(str, '"\\uD83D\\uDE0B"'), '😋')

    def test_numeric_bools(self) -> None:
        self.assertTrue(deserialize_ron(bool, '1'))
        self.assertFalse(deserialize_ron(bool, '0'))
        self.assertTrue(deserialize_ron(bool, 'true'))
        with self.assertRaises(DeRonError):
            deserialize_ron(bool, '1', settings=CodecSettings(RON_ALLOW_NUMERIC_BOOL=False))

    def test_unknown_key(self) -> None:
        with self.assertRaises(DeRonError) as cm:
            deserialize_ron(Value, '(value:1, other:2)')
        self.assertEqual(cm.exception.reason, UnexpectedKey('other'))

    def test_missing_key(self) -> None:
        with self.assertRaises(DeRonError) as cm:
            deserialize_ron(Value, '()')
        self.assertEqual(cm.exception.reason, MissingKey('value'))

    def test_skipped_key_is_accepted(self) -> None:
        @dataclass
        class Cached:
            value: U8
            cache: Annotated[list[U8], nserde(skip=True)] = field(default_factory=list)

        self.assertEqual(serialize_ron(Cached(1, [2])), '(\n    value:1,\n)')
        self.assertEqual(deserialize_ron(Cached, '(value:1, cache:[2, 3])'), Cached(1, []))

    def test_comments(self) -> None:
        text = '// the value\n(\n    value: /* inline */ 4, // trailing\n)'
        self.assertEqual(deserialize_ron(Value, text), Value(4))

    def test_time(self) -> None:
        text = self.assertRonRoundTrip(Duration, Duration(3, 5))
        self.assertEqual(text, '(\n    secs:3,\n    nanos:5,\n)')
        self.assertRonRoundTrip(SystemTime, SystemTime(Duration(1, 2)))
        self.assertEqual(deserialize_ron(SystemTime, 'None'), SystemTime(Duration(0, 0)))

    def test_unit(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(None, None), '()')

    def test_floats(self) -> None:
        self.assertEqual(self.assertRonRoundTrip(float, 0.1), '0.1')
        self.assertEqual(deserialize_ron(float, '.5'), 0.5)
        self.assertEqual(deserialize_ron(float, '3'), 3.0)
