from dataclasses import dataclass, field
from typing import Annotated, NamedTuple, Optional

import pytest

from nanoserde import (
    F32,
    I32,
    U8,
    Array,
    Char,
    DeJsonError,
    Duration,
    deserialize_json,
    nserde,
    serialize_json,
)
from nanoserde.conf.settings import CodecSettings
from nanoserde.text.errors import CannotParse, MissingKey, OutOfRange, UnexpectedKey, UnexpectedToken, WrongType
from nanoserde_tests import unittest


@dataclass
class Scenario:
    a: I32
    b: F32
    c: Optional[str]
    d: Optional[str]


@dataclass
class B:
    x: I32


class C(NamedTuple):
    n: I32
    text: str


@dataclass
class A:
    pass


@dataclass
class Holder:
    foo1: A | B | C
    foo2: A | B | C
    foo3: A | B | C


class Empty(NamedTuple):
    pass


class Triple(NamedTuple):
    a: U8
    b: U8
    c: U8


@dataclass
class Inner:
    name: str
    tags: list[str] = field(default_factory=list)


@dataclass
class Outer:
    inner: Inner
    scores: dict[str, U8]
    grid: Array[U8, 2]


class JsonTestCase(unittest.TestCase):
    def test_record_with_optionals(self) -> None:
        value = deserialize_json(Scenario, '{"a":1,"b":2.0,"d":"hello"}')
        self.assertEqual(value, Scenario(a=1, b=2.0, c=None, d='hello'))

    def test_variants(self) -> None:
        text = '{"foo1":"A","foo2":{"B":{"x":5}},"foo3":{"C":[6,"HELLO"]}}'
        value = deserialize_json(Holder, text)
        self.assertEqual(value, Holder(A(), B(5), C(6, 'HELLO')))
        self.assertEqual(
            serialize_json(value),
            '{"foo1":"A","foo2":{"B":{"x":5}},"foo3":{"C":[6, "HELLO"]}}',
        )

    def test_optional_variants(self) -> None:
        type_ = Optional[A | B | C]
        self.assertEqual(self.assertJsonRoundTrip(type_, None), 'null')
        self.assertEqual(self.assertJsonRoundTrip(type_, A()), '"A"')
        self.assertEqual(self.assertJsonRoundTrip(type_, B(5)), '{"B":{"x":5}}')
        self.assertEqual(self.assertJsonRoundTrip(type_, C(6, 'x')), '{"C":[6, "x"]}')

    def test_variable_length_tuple(self) -> None:
        self.assertEqual(self.assertJsonRoundTrip(tuple[U8, ...], (1, 2)), '[1,2]')
        self.assertEqual(self.assertJsonRoundTrip(tuple[str, ...], ()), '[]')

    def test_control_characters_are_escaped(self) -> None:
        text = ''.join(chr(c) for c in range(0x21))
        expected = (
            '"\\u0000\\u0001\\u0002\\u0003\\u0004\\u0005\\u0006\\u0007\\b\\t\\n\\u000b\\f\\r\\u000e\\u000f'
            '\\u0010\\u0011\\u0012\\u0013\\u0014\\u0015\\u0016\\u0017\\u0018\\u0019\\u001a\\u001b\\u001c\\u001d'
            '\\u001e\\u001f "'
        )
        self.assertEqual(serialize_json(text), expected)
        self.assertEqual(deserialize_json(str, expected), text)

    def test_surrogate_pair(self) -> None:
        self.assertEqual(deserialize_json(str, '"\\uD83D\\uDE0B"'), '😋')
        self.assertEqual(deserialize_json(Char, '"\\uD83D\\uDE0B"'), '😋')

    def test_unpaired_surrogates(self) -> None:
        for text in ('"\\uD83D"', '"\\uDE0B"', '"\\uD83Dx"', '"\\uD83D\\u0041"'):
            with self.assertRaises(DeJsonError) as cm:
                deserialize_json(str, text)
            self.assertEqual(cm.exception.reason, CannotParse('string'))

    def test_escapes(self) -> None:
        self.assertEqual(deserialize_json(str, r'"a\"b\\c\/dé"'), 'a"b\\c/dé')
        self.assertEqual(serialize_json('quote " and \\ backslash'), '"quote \\" and \\\\ backslash"')

    def test_nested_round_trip(self) -> None:
        value = Outer(Inner('n', ['a', 'b']), {'x': 1}, [3, 4])
        text = self.assertJsonRoundTrip(Outer, value)
        self.assertEqual(text, '{"inner":{"name":"n","tags":["a","b"]},"scores":{"x":1},"grid":[3,4]}')

    def test_tuples(self) -> None:
        self.assertEqual(self.assertJsonRoundTrip(tuple[U8, str], (1, 'a')), '[1,"a"]')
        self.assertEqual(self.assertJsonRoundTrip(Triple, Triple(1, 2, 3)), '[1, 2, 3]')
        self.assertEqual(self.assertJsonRoundTrip(Empty, Empty()), '{}')

    def test_maps_with_number_keys(self) -> None:
        self.assertEqual(self.assertJsonRoundTrip(dict[U8, str], {1: 'a', 2: 'b'}), '{1:"a",2:"b"}')

    def test_map_duplicate_keys_keep_last(self) -> None:
        self.assertEqual(deserialize_json(dict[str, U8], '{"a":1,"a":2}'), {'a': 2})

    def test_optional_values(self) -> None:
        self.assertEqual(self.assertJsonRoundTrip(Optional[U8], None), 'null')
        self.assertEqual(self.assertJsonRoundTrip(Optional[U8], 3), '3')
        self.assertEqual(self.assertJsonRoundTrip(None, None), 'null')

    def test_duration(self) -> None:
        self.assertEqual(self.assertJsonRoundTrip(Duration, Duration(3, 5)), '{"secs":3,"nanos":5}')
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(Duration, '{"secs":1,"nanos":1000000000}')
        self.assertIsInstance(cm.exception.reason, OutOfRange)

    def test_unknown_keys_are_skipped(self) -> None:
        text = '{"x":1,"junk":{"deep":[1,{"a":[]}],"more":null},"other":[[],[{}]]}'
        self.assertEqual(deserialize_json(B, text), B(1))

    def test_unknown_keys_can_be_rejected(self) -> None:
        settings = CodecSettings(JSON_SKIP_UNKNOWN_KEYS=False)
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(B, '{"x":1,"y":2}', settings=settings)
        self.assertEqual(cm.exception.reason, UnexpectedKey('y'))

    def test_missing_key(self) -> None:
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(B, '{}')
        self.assertEqual(cm.exception.reason, MissingKey('x'))
        self.assertTrue(str(cm.exception).startswith('Json Deserialize error: Key not found x, line:1 col:'))

    def test_out_of_range(self) -> None:
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(B, '{"x":2147483648}')
        self.assertEqual(cm.exception.reason, OutOfRange('2147483648>2147483647'))
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(U8, '-1')
        self.assertIsInstance(cm.exception.reason, UnexpectedToken)

    def test_wrong_char(self) -> None:
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(Char, '"ab"')
        self.assertIsInstance(cm.exception.reason, WrongType)

    def test_comments(self) -> None:
        text = '// leading\n{/* a */"x" /* b */: // c\n 7 /**/}'
        self.assertEqual(deserialize_json(B, text), B(7))

    def test_comments_can_be_rejected(self) -> None:
        with self.assertRaises(DeJsonError):
            deserialize_json(B, '{"x":7 /* no */}', settings=self.strict_settings)

    def test_unterminated_comment(self) -> None:
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(B, '{"x":7 /* never closed')
        self.assertEqual(cm.exception.reason.expected, 'MultiLineCommentClose')

    def test_trailing_commas(self) -> None:
        self.assertEqual(deserialize_json(list[U8], '[1,2,]'), [1, 2])
        self.assertEqual(deserialize_json(B, '{"x":1,}'), B(1))
        with self.assertRaises(DeJsonError):
            deserialize_json(list[U8], '[1,2,]', settings=self.strict_settings)
        with self.assertRaises(DeJsonError):
            deserialize_json(B, '{"x":1,}', settings=self.strict_settings)

    def test_plus_sign(self) -> None:
        self.assertEqual(deserialize_json(I32, '+5'), 5)
        with self.assertRaises(DeJsonError):
            deserialize_json(I32, '+5', settings=self.strict_settings)

    def test_bare_words(self) -> None:
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(bool, 'True')
        self.assertEqual(cm.exception.reason.expected, 'Got ##True## needed true, false, null')

    def test_error_position(self) -> None:
        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(list[U8], '[\n  1,\n  "a"]')
        self.assertEqual(cm.exception.line, 2)

    def test_non_finite_floats_cannot_be_written(self) -> None:
        with self.assertRaises(ValueError):
            serialize_json(float('nan'))

    def test_renamed_and_skipped_fields(self) -> None:
        @dataclass
        class Renamed:
            value: Annotated[U8, nserde(rename='Value')]
            cache: Annotated[list[U8], nserde(skip=True)] = field(default_factory=list)

        self.assertEqual(serialize_json(Renamed(1, [9])), '{"Value":1}')
        self.assertEqual(deserialize_json(Renamed, '{"Value":1,"cache":[1]}'), Renamed(1, []))
        with self.assertRaises(DeJsonError):
            deserialize_json(Renamed, '{"value":1}')


@pytest.mark.parametrize('text', ['[1 2]', '{"x" 1}', '[', '{"x":1', '"abc', '@', '/x'])
def test_malformed_documents(text: str) -> None:
    type_ = B if text.startswith('{') else list[U8]
    with pytest.raises(DeJsonError):
        deserialize_json(type_, text)
