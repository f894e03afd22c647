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
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.encoding.utf8 import decode_utf8, encode_utf8
from nanoserde.utils.typing import is_subclass


class StrSerdeType(SerdeType[str]):
    """ Represents builtin `str` values.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_subclass(type_, str):
            raise TypeError('expected str type')
        return cls()

    @override
    def _check_value(self, value: str, /, *, deep: bool) -> None:
        if not isinstance(value, str):
            raise TypeError('expected str instance')

    @override
    def default(self) -> str:
        return ''

    @override
    def _serialize(self, serializer: Serializer, value: str, /) -> None:
        encode_utf8(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> str:
        return decode_utf8(deserializer, max_length=deserializer.max_length)

    @override
    def _ser_json(self, state: SerJsonState, value: str, /) -> None:
        state.string(value)

    @override
    def _de_json(self, state: DeJsonState, /) -> str:
        value = state.as_string()
        state.next_tok()
        return value

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: str, /) -> None:
        state.string(value)

    @override
    def _de_ron(self, state: DeRonState, /) -> str:
        value = state.as_string()
        state.next_tok()
        return value
