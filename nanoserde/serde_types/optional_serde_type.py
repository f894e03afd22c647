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

from types import NoneType, UnionType
from typing import Any, Optional, TypeVar, Union

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.optional import decode_optional, encode_optional
from nanoserde.text.tokens import TokenKind
from nanoserde.utils.typing import get_args, get_origin

V = TypeVar('V')


def is_optional_type(type_: Any) -> bool:
    """ Whether the type is `T | None` (or `Optional[T]`).

    >>> is_optional_type(int | None)
    True
    >>> is_optional_type(int)
    False
    """
    return get_origin(type_) is UnionType and NoneType in get_args(type_)


class OptionalSerdeType(SerdeType[Optional[V]]):
    """ Represents a serde_type that is either `V` or `None`.

    JSON writes `null` for None, RON writes the bare `None` identifier, a present value is written as is in both.
    """

    __slots__ = ('_value',)

    _value: SerdeType[V]

    def __init__(self, serde_type: SerdeType[V]) -> None:
        self._value = serde_type

    @property
    def value_serde_type(self) -> SerdeType[V]:
        return self._value

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_optional_type(type_):
            raise TypeError('expected type union with None')
        args = get_args(type_)
        not_none_args = tuple(arg for arg in args if arg is not NoneType)
        if not not_none_args:
            raise TypeError('type must be either `None | T` or `T | None`')
        # `Optional[A | B]` is flattened into `A | B | None`, the remaining members form a variant type
        not_none_type = not_none_args[0] if len(not_none_args) == 1 else Union[not_none_args]
        return cls(SerdeType.from_type(not_none_type, type_map=type_map))

    @override
    def _check_value(self, value: Optional[V], /, *, deep: bool) -> None:
        if value is None:
            return
        if deep:
            self._value._check_value(value, deep=True)

    @override
    def default(self) -> Optional[V]:
        return None

    @override
    def _serialize(self, serializer: Serializer, value: Optional[V], /) -> None:
        encode_optional(serializer, value, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Optional[V]:
        return decode_optional(deserializer, self._value.deserialize)

    @override
    def _ser_json(self, state: SerJsonState, value: Optional[V], /) -> None:
        if value is None:
            state.push('null')
        else:
            self._value.ser_json(state, value)

    @override
    def _de_json(self, state: DeJsonState, /) -> Optional[V]:
        if state.tok.kind is TokenKind.NULL:
            state.next_tok()
            return None
        return self._value.de_json(state)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Optional[V], /) -> None:
        if value is None:
            state.push('None')
        else:
            self._value.ser_ron(state, depth, value)

    @override
    def _de_ron(self, state: DeRonState, /) -> Optional[V]:
        if state.tok.kind is TokenKind.IDENT and state.identbuf == 'None':
            state.next_tok()
            return None
        return self._value.de_ron(state)
