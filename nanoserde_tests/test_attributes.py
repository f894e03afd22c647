from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, NamedTuple, Optional

from nanoserde import (
    DEFAULT,
    I32,
    U8,
    U16,
    DeJsonError,
    deserialize_bin,
    deserialize_json,
    deserialize_ron,
    make_serde_type,
    nserde,
    serialize_bin,
    serialize_json,
    serialize_ron,
)
from nanoserde.serde_types.attrs import get_container_attrs, get_field_attrs
from nanoserde.text.errors import MissingKey
from nanoserde_tests import unittest


@dataclass
class Hex:
    digits: str

    @classmethod
    def from_source(cls, value: int) -> 'Hex':
        return cls(format(value, 'x'))

    def into_source(self) -> int:
        return int(self.digits, 16)


class Celsius:
    """Not a dataclass, serialized through `CelsiusProxy`."""

    def __init__(self, degrees: float) -> None:
        self.degrees = degrees

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Celsius) and other.degrees == self.degrees


class CelsiusProxy(NamedTuple):
    tenths: I32

    @classmethod
    def from_source(cls, value: Celsius) -> 'CelsiusProxy':
        return cls(round(value.degrees * 10))

    def into_source(self) -> Celsius:
        return Celsius(self.tenths / 10)


nserde(proxy=CelsiusProxy)(Celsius)


class RenameTestCase(unittest.TestCase):
    def test_field_rename(self) -> None:
        @dataclass
        class User:
            user_id: Annotated[U16, nserde(rename='userId')]
            name: str

        self.assertEqual(serialize_json(User(1, 'a')), '{"userId":1,"name":"a"}')
        self.assertEqual(serialize_ron(User(1, 'a')), '(\n    userId:1,\n    name:"a",\n)')
        self.assertEqual(deserialize_json(User, '{"name":"b","userId":2}'), User(2, 'b'))
        self.assertEqual(deserialize_ron(User, '(userId:3, name:"c")'), User(3, 'c'))

    def test_enum_rename(self) -> None:
        @nserde(rename={'LIGHT_RED': 'lightRed'})
        class Shade(Enum):
            LIGHT_RED = 1
            DARK = 2

        self.assertEqual(serialize_json(Shade.LIGHT_RED), '"lightRed"')
        self.assertEqual(serialize_ron(Shade.DARK), 'DARK')
        self.assertEqual(deserialize_ron(Shade, 'lightRed'), Shade.LIGHT_RED)

    def test_variant_rename(self) -> None:
        @nserde(rename='leave')
        @dataclass
        class Quit:
            pass

        @dataclass
        class Say:
            text: str

        self.assertEqual(serialize_json(Quit(), Quit | Say), '"leave"')
        self.assertEqual(deserialize_json(Quit | Say, '"leave"'), Quit())
        with self.assertRaises(DeJsonError):
            deserialize_json(Quit | Say, '"Quit"')

    def test_bad_renames(self) -> None:
        @dataclass
        class Clash:
            a: Annotated[U8, nserde(rename='b')]
            b: U8

        @dataclass
        class Mapped:
            a: Annotated[U8, nserde(rename={'a': 'b'})]

        @nserde(rename='Shade')
        class Shade(Enum):
            DARK = 1

        @nserde(rename={'MISSING': 'x'})
        class Other(Enum):
            DARK = 1

        for type_ in [Clash, Mapped, Shade, Other]:
            with self.subTest(type_=type_):
                with self.assertRaises(TypeError):
                    make_serde_type(type_)


class DefaultsTestCase(unittest.TestCase):
    def test_field_literal_default(self) -> None:
        @dataclass
        class Config:
            tags: Annotated[list[str], nserde(default=['a'])]
            port: U16

        first = deserialize_json(Config, '{"port":1}')
        second = deserialize_json(Config, '{"port":2}')
        self.assertEqual(first, Config(['a'], 1))
        # every document gets its own copy
        first.tags.append('b')
        self.assertEqual(second.tags, ['a'])

    def test_field_type_default(self) -> None:
        @dataclass
        class Config:
            port: Annotated[U16, nserde(default=DEFAULT)]
            name: Annotated[str, nserde(default=DEFAULT)]
            sizes: Annotated[dict[str, U8], nserde(default=DEFAULT)]

        self.assertEqual(deserialize_json(Config, '{}'), Config(0, '', {}))
        self.assertEqual(deserialize_ron(Config, '(name:"x")'), Config(0, 'x', {}))

    def test_field_default_with(self) -> None:
        calls = []

        def make_port() -> int:
            calls.append(1)
            return 8080

        @dataclass
        class Config:
            port: Annotated[U16, nserde(default_with=make_port)]

        self.assertEqual(deserialize_json(Config, '{}'), Config(8080))
        self.assertEqual(deserialize_json(Config, '{"port":1}'), Config(1))
        self.assertEqual(len(calls), 1)

    def test_precedence(self) -> None:
        @dataclass
        class Config:
            a: Annotated[U8, nserde(default=5)] = 7
            b: U8 = 9
            c: Optional[U8] = 3
            d: Optional[U8] = None

        self.assertEqual(deserialize_json(Config, '{}'), Config(5, 9, 3, None))
        self.assertEqual(deserialize_ron(Config, '()'), Config(5, 9, 3, None))

    def test_missing_without_default(self) -> None:
        @dataclass
        class Config:
            port: U16

        with self.assertRaises(DeJsonError) as cm:
            deserialize_json(Config, '{}')
        self.assertEqual(cm.exception.reason, MissingKey('port'))

    def test_container_type_default(self) -> None:
        @nserde(default=DEFAULT)
        @dataclass
        class Config:
            port: U16
            host: str
            verbose: bool = True

        self.assertEqual(deserialize_json(Config, '{"host":"h"}'), Config(0, 'h', True))
        self.assertEqual(deserialize_ron(Config, '()'), Config(0, '', True))

    def test_container_literal_default(self) -> None:
        @dataclass
        class Config:
            port: U16
            hosts: list[str]

        nserde(default=Config(80, ['localhost']))(Config)
        parsed = deserialize_json(Config, '{"port":1}')
        self.assertEqual(parsed, Config(1, ['localhost']))
        parsed.hosts.append('x')
        self.assertEqual(deserialize_json(Config, '{}'), Config(80, ['localhost']))

    def test_container_default_with(self) -> None:
        calls = []

        @dataclass
        class Config:
            port: U16
            host: str

        def make_config() -> Config:
            calls.append(1)
            return Config(443, 'example.org')

        nserde(default_with=make_config)(Config)
        self.assertEqual(deserialize_json(Config, '{}'), Config(443, 'example.org'))
        self.assertEqual(len(calls), 1)
        self.assertEqual(deserialize_json(Config, '{"host":"h"}'), Config(443, 'h'))
        self.assertEqual(deserialize_json(Config, '{"host":"h","port":1}'), Config(1, 'h'))
        self.assertEqual(len(calls), 2)

    def test_bad_container_default(self) -> None:
        @dataclass
        class Config:
            port: U16

        nserde(default=3)(Config)
        with self.assertRaises(TypeError):
            make_serde_type(Config)


class SkipTestCase(unittest.TestCase):
    def test_skip_uses_type_default(self) -> None:
        @dataclass
        class Session:
            user: str
            token: Annotated[str, nserde(skip=True)]

        value = Session('ana', 'secret')
        self.assertEqual(serialize_json(value), '{"user":"ana"}')
        self.assertEqual(deserialize_json(Session, '{"user":"ana","token":"x"}'), Session('ana', ''))
        self.assertEqual(deserialize_bin(Session, serialize_bin(value)), Session('ana', ''))
        self.assertEqual(serialize_bin(value), serialize_bin('ana'))

    def test_skip_with_default(self) -> None:
        @dataclass
        class Session:
            user: str
            retries: Annotated[U8, nserde(skip=True, default=3)]
            seen: Annotated[list[str], nserde(skip=True)] = field(default_factory=list)

        self.assertEqual(deserialize_ron(Session, '(user:"a", retries:9)'), Session('a', 3, []))
        self.assertEqual(deserialize_bin(Session, serialize_bin(Session('a', 1, ['x']))), Session('a', 3, []))

    def test_init_false_fields_are_ignored(self) -> None:
        @dataclass
        class Area:
            width: U8
            height: U8
            size: int = field(init=False)

            def __post_init__(self) -> None:
                self.size = self.width * self.height

        self.assertEqual(serialize_json(Area(2, 3)), '{"width":2,"height":3}')
        self.assertEqual(deserialize_json(Area, '{"width":2,"height":4}').size, 8)


class ProxyTestCase(unittest.TestCase):
    def test_field_proxy(self) -> None:
        @dataclass
        class Color:
            rgb: Annotated[int, nserde(proxy=Hex)]

        self.assertEqual(serialize_json(Color(255)), '{"rgb":{"digits":"ff"}}')
        self.assertEqual(serialize_ron(Color(255)), '(\n    rgb:(\n        digits:"ff",\n    ),\n)')
        self.assertRoundTrip(Color, Color(0x10203))

    def test_optional_field_proxy(self) -> None:
        @dataclass
        class Color:
            rgb: Annotated[Optional[int], nserde(proxy=Hex)] = None

        self.assertEqual(serialize_json(Color()), '{}')
        self.assertEqual(serialize_json(Color(1)), '{"rgb":{"digits":"1"}}')
        self.assertRoundTrip(Color, Color())
        self.assertRoundTrip(Color, Color(17))

    def test_container_proxy(self) -> None:
        self.assertEqual(serialize_json(Celsius(21.5)), '[215]')
        self.assertEqual(serialize_bin(Celsius(-1)), serialize_bin(-10, I32))
        self.assertEqual(deserialize_ron(Celsius, '(7)'), Celsius(0.7))
        self.assertRoundTrip(list[Celsius], [Celsius(1.5), Celsius(-2.0)])

    def test_proxy_checks_source_type(self) -> None:
        @dataclass
        class Color:
            rgb: Annotated[int, nserde(proxy=Hex)]

        with self.assertRaises(TypeError):
            serialize_json(Color('ff'))  # type: ignore[arg-type]

    def test_bad_proxies(self) -> None:
        class NotAProxy:
            pass

        @dataclass
        class Color:
            rgb: Annotated[int, nserde(proxy=NotAProxy)]

        with self.assertRaises(TypeError):
            make_serde_type(Color)

        @nserde(proxy=Hex)
        @dataclass
        class Quit:
            pass

        @dataclass
        class Stay:
            pass

        with self.assertRaises(TypeError):
            make_serde_type(Quit | Stay)


class TransparentTestCase(unittest.TestCase):
    def test_transparent_tuple_type(self) -> None:
        @nserde(transparent=True)
        class Meters(NamedTuple):
            value: float

        self.assertEqual(serialize_json(Meters(1.5)), '1.5')
        self.assertEqual(serialize_ron(Meters(1.5)), '1.5')
        self.assertEqual(serialize_bin(Meters(1.5)), serialize_bin(1.5))
        self.assertEqual(deserialize_json(dict[str, Meters], '{"a":2}'), {'a': Meters(2.0)})
        self.assertRoundTrip(Meters, Meters(-0.25))

    def test_transparent_needs_one_field(self) -> None:
        @nserde(transparent=True)
        class Pair(NamedTuple):
            a: U8
            b: U8

        @nserde(transparent=True)
        @dataclass
        class Wrapper:
            value: U8

        for type_ in [Pair, Wrapper]:
            with self.subTest(type_=type_):
                with self.assertRaises(TypeError):
                    make_serde_type(type_)


class NoneAsNullTestCase(unittest.TestCase):
    def test_field_attribute(self) -> None:
        @dataclass
        class Patch:
            name: Annotated[Optional[str], nserde(serialize_none_as_null=True)] = None
            age: Optional[U8] = None

        self.assertEqual(serialize_json(Patch()), '{"name":null}')
        self.assertEqual(deserialize_json(Patch, '{"name":null,"age":null}'), Patch())
        # RON leaves None out in every case
        self.assertEqual(serialize_ron(Patch()), '(\n)')

    def test_container_attribute(self) -> None:
        @nserde(serialize_none_as_null=True)
        @dataclass
        class Patch:
            name: Optional[str] = None
            age: Optional[U8] = None

        self.assertEqual(serialize_json(Patch(age=3)), '{"name":null,"age":3}')


class AttributeErrorsTestCase(unittest.TestCase):
    def test_unknown_attribute(self) -> None:
        with self.assertRaises(TypeError):
            nserde(flatten=True)

    def test_default_with_must_be_callable(self) -> None:
        with self.assertRaises(TypeError):
            nserde(default_with=3)

    def test_one_nserde_per_field(self) -> None:
        with self.assertRaises(TypeError):
            get_field_attrs((nserde(skip=True), nserde(rename='x')))

    def test_tuple_type_field_attributes(self) -> None:
        class Point(NamedTuple):
            x: Annotated[U8, nserde(rename='X')]
            y: U8

        @nserde(default=DEFAULT)
        class Other(NamedTuple):
            x: U8

        for type_ in [Point, Other]:
            with self.subTest(type_=type_):
                with self.assertRaises(TypeError):
                    make_serde_type(type_)

    def test_container_attrs_are_not_inherited(self) -> None:
        @nserde(default=DEFAULT)
        @dataclass
        class Base:
            a: U8

        @dataclass
        class Child(Base):
            b: U8

        self.assertTrue(get_container_attrs(Base).has_default)
        self.assertFalse(get_container_attrs(Child).has_default)
