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
from nanoserde.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from nanoserde.utils.typing import get_args

_MIN_ARITY = 2
_MAX_ARITY = 4


def ser_ron_tuple(state: SerRonState, depth: int, values: tuple[Any, ...], serde_types: tuple[SerdeType, ...]) -> None:
    """Write `(a, b, ...)`, the items stay on the line of the opening paren."""
    state.push('(')
    for index, (serde_type, value) in enumerate(zip(serde_types, values)):
        if index:
            state.push(', ')
        serde_type.ser_ron(state, depth, value)
    state.push(')')


def de_ron_tuple(state: DeRonState, serde_types: tuple[SerdeType, ...]) -> tuple[Any, ...]:
    state.paren_open()
    values = []
    for serde_type in serde_types:
        values.append(serde_type.de_ron(state))
        state.eat_comma_paren()
    state.paren_close()
    return tuple(values)


def ser_json_tuple(
    state: SerJsonState,
    values: tuple[Any, ...],
    serde_types: tuple[SerdeType, ...],
    *,
    separator: str = ',',
) -> None:
    """Write `[a,b,...]`, tuple types put a space after each comma."""
    state.push('[')
    for index, (serde_type, value) in enumerate(zip(serde_types, values)):
        if index:
            state.push(separator)
        serde_type.ser_json(state, value)
    state.push(']')


def de_json_tuple(state: DeJsonState, serde_types: tuple[SerdeType, ...]) -> tuple[Any, ...]:
    state.block_open()
    values = []
    for serde_type in serde_types:
        values.append(serde_type.de_json(state))
        state.eat_comma_block()
    state.block_close()
    return tuple(values)


def check_tuple_items(value: tuple[Any, ...], serde_types: tuple[SerdeType, ...], *, deep: bool) -> None:
    if len(value) != len(serde_types):
        raise TypeError(f'expected a tuple of {len(serde_types)} items, got {len(value)}')
    if deep:
        for serde_type, item in zip(serde_types, value):
            serde_type._check_value(item, deep=True)


class TupleSerdeType(SerdeType[tuple[Any, ...]]):
    """ Represents fixed size heterogeneous tuples, like `tuple[int, str]`.

    Only arities from 2 to 4 are accepted, `tuple[T, ...]` is handled by `VarTupleSerdeType`.
    """

    __slots__ = ('_items',)

    _items: tuple[SerdeType, ...]

    def __init__(self, items: tuple[SerdeType, ...]) -> None:
        self._items = items

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        args = get_args(type_)
        if len(args) == 2 and args[1] is Ellipsis:
            from nanoserde.serde_types.collection_serde_type import VarTupleSerdeType
            return VarTupleSerdeType._from_type(type_, type_map=type_map)  # type: ignore[return-value]
        if not _MIN_ARITY <= len(args) <= _MAX_ARITY:
            raise TypeError(f'tuples must have from {_MIN_ARITY} to {_MAX_ARITY} items, got {len(args)}')
        return cls(tuple(SerdeType.from_type(arg, type_map=type_map) for arg in args))

    @override
    def _check_value(self, value: tuple[Any, ...], /, *, deep: bool) -> None:
        if not isinstance(value, tuple):
            raise TypeError(f'expected tuple, got {type(value).__name__}')
        check_tuple_items(value, self._items, deep=deep)

    @override
    def default(self) -> tuple[Any, ...]:
        return tuple(item.default() for item in self._items)

    @override
    def _serialize(self, serializer: Serializer, value: tuple[Any, ...], /) -> None:
        encode_tuple(serializer, value, tuple(item.serialize for item in self._items))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> tuple[Any, ...]:
        return decode_tuple(deserializer, tuple(item.deserialize for item in self._items))

    @override
    def _ser_json(self, state: SerJsonState, value: tuple[Any, ...], /) -> None:
        ser_json_tuple(state, value, self._items)

    @override
    def _de_json(self, state: DeJsonState, /) -> tuple[Any, ...]:
        return de_json_tuple(state, self._items)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: tuple[Any, ...], /) -> None:
        ser_ron_tuple(state, depth, value, self._items)

    @override
    def _de_ron(self, state: DeRonState, /) -> tuple[Any, ...]:
        return de_ron_tuple(state, self._items)
