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

from typing import Any, TypeVar

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.markers import ArrayLength
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import strip_marker
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.array import build_array, decode_array, encode_array
from nanoserde.utils.typing import get_args, get_origin

T = TypeVar('T')


class ArraySerdeType(SerdeType[list[T]]):
    """ Represents `Array[T, N]`, a list that always has N items.

    JSON writes `[a,b]` and RON writes `(a, b)`. Decoding builds the items one by one with `build_array`, so a failure
    on any item drops the ones already built.
    """

    __slots__ = ('_item', '_length')

    _item: SerdeType[T]
    _length: int

    def __init__(self, item: SerdeType[T], length: int) -> None:
        self._item = item
        self._length = length

    @property
    def length(self) -> int:
        return self._length

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        marker, list_type = strip_marker(type_, ArrayLength)
        if get_origin(list_type) is not list or len(get_args(list_type)) != 1:
            raise TypeError('ArrayLength can only annotate list[<type>]')
        item_type, = get_args(list_type)
        return cls(SerdeType.from_type(item_type, type_map=type_map), marker.length)

    @override
    def _check_value(self, value: list[T], /, *, deep: bool) -> None:
        if not isinstance(value, (list, tuple)):
            raise TypeError(f'expected list, got {type(value).__name__}')
        if len(value) != self._length:
            raise ValueError(f'expected {self._length} items, got {len(value)}')
        if deep:
            for item in value:
                self._item._check_value(item, deep=True)

    @override
    def default(self) -> list[T]:
        return build_array(self._item.default, self._length)

    @override
    def _serialize(self, serializer: Serializer, value: list[T], /) -> None:
        encode_array(serializer, value, self._item.serialize, length=self._length)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> list[T]:
        return decode_array(deserializer, self._item.deserialize, length=self._length)

    @override
    def _ser_json(self, state: SerJsonState, value: list[T], /) -> None:
        state.push('[')
        for index, item in enumerate(value):
            if index:
                state.push(',')
            self._item.ser_json(state, item)
        state.push(']')

    @override
    def _de_json(self, state: DeJsonState, /) -> list[T]:
        def produce() -> T:
            item = self._item.de_json(state)
            state.eat_comma_block()
            return item

        state.block_open()
        items = build_array(produce, self._length)
        state.block_close()
        return items

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: list[T], /) -> None:
        state.push('(')
        for index, item in enumerate(value):
            if index:
                state.push(', ')
            self._item.ser_ron(state, depth, item)
        state.push(')')

    @override
    def _de_ron(self, state: DeRonState, /) -> list[T]:
        def produce() -> T:
            item = self._item.de_ron(state)
            state.eat_comma_paren()
            return item

        state.paren_open()
        items = build_array(produce, self._length)
        state.paren_close()
        return items
