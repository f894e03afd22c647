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

from __future__ import annotations

from typing import Any

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState, escape_ron_char
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.encoding.char import decode_char, encode_char, is_scalar_value


class CharSerdeType(SerdeType[str]):
    """ A single unicode scalar value, kept in a one character `str`.

    Binary: the code point as u32, JSON: a one character string, RON: a `'c'` literal.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str instance')
        if len(value) != 1:
            raise ValueError(f'expected a single character, got {len(value)}')
        if not is_scalar_value(ord(value)):
            raise ValueError(f'{ord(value):#x} is not a unicode scalar value')

    @override
    def default(self) -> str:
        return '\0'

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_char(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return decode_char(deserializer)

    @override
    def _ser_json(self, state: SerJsonState, value: str, /) -> None:
        state.string(value)

    @override
    def _de_json(self, state: DeJsonState, /) -> str:
        value = state.as_char()
        state.next_tok()
        return value

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: str, /) -> None:
        state.push(escape_ron_char(value))

    @override
    def _de_ron(self, state: DeRonState, /) -> str:
        value = state.as_char()
        state.next_tok()
        return value
