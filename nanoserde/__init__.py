# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Serialization of Python values in a compact binary format, JSON and RON, driven by type annotations.

>>> from dataclasses import dataclass
>>> @dataclass
... class Point:
...     x: I32
...     y: I32
>>> serialize_json(Point(1, -2))
'{"x":1,"y":-2}'
>>> deserialize_ron(Point, '(x: 3, y: 4)')
Point(x=3, y=4)
>>> serialize_bin(Point(1, -2)).hex()
'01000000feffffff'
"""

from typing import TYPE_CHECKING, Any, Optional, TypeVar

from nanoserde.exception import NanoserdeError
from nanoserde.serde_types import SerdeType, make_serde_type
from nanoserde.serde_types.attrs import DEFAULT, SerdeAttrs, SerdeProxy, nserde
from nanoserde.serde_types.markers import (
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
    UNIX_EPOCH,
    Array,
    Box,
    Char,
    Duration,
    SystemTime,
    USize,
)
from nanoserde.serialization.exceptions import (
    BadDataError,
    OutOfDataError,
    OutOfRangeError,
    SerializationError,
    TooLongError,
    UnknownVariantError,
)
from nanoserde.text.errors import DeJsonError, DeRonError, DeTextError
from nanoserde.toml import TomlArray, TomlBool, TomlDate, TomlError, TomlNum, TomlSimpleArray, TomlStr, TomlValue
from nanoserde.toml import parse_toml as deserialize_toml
from nanoserde.version import __version__

if TYPE_CHECKING:
    from nanoserde.conf.settings import CodecSettings

__all__ = [
    '__version__',
    'DEFAULT',
    'F32',
    'F64',
    'I8',
    'I16',
    'I32',
    'I64',
    'I128',
    'U8',
    'U16',
    'U32',
    'U64',
    'U128',
    'UNIX_EPOCH',
    'Array',
    'BadDataError',
    'Box',
    'Char',
    'DeJsonError',
    'DeRonError',
    'DeTextError',
    'Duration',
    'NanoserdeError',
    'OutOfDataError',
    'OutOfRangeError',
    'SerdeAttrs',
    'SerdeProxy',
    'SerdeType',
    'SerializationError',
    'SystemTime',
    'TomlArray',
    'TomlBool',
    'TomlDate',
    'TomlError',
    'TomlNum',
    'TomlSimpleArray',
    'TomlStr',
    'TomlValue',
    'TooLongError',
    'USize',
    'UnknownVariantError',
    'deserialize_bin',
    'deserialize_json',
    'deserialize_ron',
    'deserialize_toml',
    'make_serde_type',
    'nserde',
    'serialize_bin',
    'serialize_json',
    'serialize_ron',
]

T = TypeVar('T')


def _serde_type_of(value: Any, type_: Any) -> SerdeType:
    return make_serde_type(type(value) if type_ is None else type_)


def serialize_bin(value: Any, type_: Any = None) -> bytes:
    """Encode a value in the binary format, `type_` defaults to the class of the value."""
    return _serde_type_of(value, type_).to_bytes(value)


def deserialize_bin(type_: type[T], data: bytes, *, settings: Optional['CodecSettings'] = None) -> T:
    return make_serde_type(type_).from_bytes(data, settings=settings)


def serialize_json(value: Any, type_: Any = None) -> str:
    return _serde_type_of(value, type_).to_json(value)


def deserialize_json(type_: type[T], text: str, *, settings: Optional['CodecSettings'] = None) -> T:
    return make_serde_type(type_).from_json(text, settings=settings)


def serialize_ron(value: Any, type_: Any = None, *, settings: Optional['CodecSettings'] = None) -> str:
    return _serde_type_of(value, type_).to_ron(value, settings=settings)


def deserialize_ron(type_: type[T], text: str, *, settings: Optional['CodecSettings'] = None) -> T:
    return make_serde_type(type_).from_ron(text, settings=settings)
