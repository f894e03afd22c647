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

from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Collection, Hashable, Iterable, Set
from typing import Any, Callable, TypeVar

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import is_origin_hashable, pretty_type
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.collection import decode_collection, encode_collection
from nanoserde.serialization.encoding.bytes import decode_bytes, encode_bytes
from nanoserde.text.de_state import DeTextState
from nanoserde.text.tokens import TokenKind
from nanoserde.utils.typing import get_args, get_origin, is_subclass

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


def ser_json_items(state: SerJsonState, items: Iterable[T], encoder: Callable[[SerJsonState, T], None]) -> None:
    """Write `[a,b,...]`."""
    state.push('[')
    for index, item in enumerate(items):
        if index:
            state.push(',')
        encoder(state, item)
    state.push(']')


def ser_ron_items(
    state: SerRonState,
    depth: int,
    items: Iterable[T],
    encoder: Callable[[SerRonState, int, T], None],
) -> None:
    """Write `[` then each item on its own line followed by a comma, then `]`."""
    state.push('[\n')
    for item in items:
        state.indent(depth + 1)
        encoder(state, depth + 1, item)
        state.conl()
    state.indent(depth)
    state.push(']')


def de_block_items(state: DeTextState, decoder: Callable[[], T]) -> list[T]:
    """Read `[a, b, ...]` in either text format, a comma before `]` is accepted."""
    items: list[T] = []
    state.block_open()
    while state.tok.kind is not TokenKind.BLOCK_CLOSE:
        items.append(decoder())
        state.eat_comma_block()
    state.block_close()
    return items


class _CollectionSerdeType(SerdeType[Collection[T]], ABC):
    """ Used as base for SerdeType classes that represent collections.
    """
    __slots__ = ('_item',)

    _item: SerdeType[T]

    def __init__(self, item_serde_type: SerdeType[T], /) -> None:
        self._item = item_serde_type

    @abstractmethod
    def _build(self, items: Iterable[T]) -> Collection[T]:
        """ How to build the concrete collection from an iterable of items.
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        member_type = cls._get_member_type(type_)
        member_serde_type = SerdeType.from_type(member_type, type_map=type_map)
        return cls(member_serde_type)

    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        origin_type = get_origin(type_) or type_
        if not is_subclass(origin_type, Collection):
            raise TypeError('expected Collection type')
        args = get_args(type_)
        if not args or len(args) != 1:
            raise TypeError(f'expected {pretty_type(origin_type)}[<type>]')
        return args[0]

    def _check_item(self, item: T) -> None:
        self._item._check_value(item, deep=True)

    @override
    def _check_value(self, value: Collection[T], /, *, deep: bool) -> None:
        if not isinstance(value, Collection) or isinstance(value, (str, bytes)):
            raise TypeError(f'expected collection, got {type(value).__name__}')
        if deep:
            for i in value:
                self._check_item(i)

    @override
    def default(self) -> Collection[T]:
        return self._build(())

    @override
    def _serialize(self, serializer: Serializer, value: Collection[T], /) -> None:
        encode_collection(serializer, value, self._item.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Collection[T]:
        return decode_collection(
            deserializer,
            self._item.deserialize,
            self._build,
            max_length=deserializer.max_length,
        )

    @override
    def _ser_json(self, state: SerJsonState, value: Collection[T], /) -> None:
        ser_json_items(state, value, self._item.ser_json)

    @override
    def _de_json(self, state: DeJsonState, /) -> Collection[T]:
        return self._build(de_block_items(state, lambda: self._item.de_json(state)))

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Collection[T], /) -> None:
        ser_ron_items(state, depth, value, self._item.ser_ron)

    @override
    def _de_ron(self, state: DeRonState, /) -> Collection[T]:
        return self._build(de_block_items(state, lambda: self._item.de_ron(state)))


class ListSerdeType(_CollectionSerdeType[T]):
    """ Represents builtin `list` values.
    """

    @override
    def _build(self, items: Iterable[T]) -> list[T]:
        return list(items)


class VarTupleSerdeType(_CollectionSerdeType[T]):
    """ Represents `tuple[T, ...]` values, they are written like a list.
    """

    @override
    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        args = get_args(type_)
        if len(args) != 2 or args[1] is not Ellipsis:
            raise TypeError('expected tuple[<type>, ...]')
        return args[0]

    @override
    def _build(self, items: Iterable[T]) -> tuple[T, ...]:
        return tuple(items)


class DequeSerdeType(_CollectionSerdeType[T]):
    """ Represents builtin `collections.deque` values, the linked list of the wire format.
    """

    @override
    def _build(self, items: Iterable[T]) -> deque[T]:
        return deque(items)


class SetSerdeType(_CollectionSerdeType[H]):
    """ Represents builtin `set` values.
    """

    @override
    def _build(self, items: Iterable[H]) -> Set[H]:
        return set(items)

    @override
    @classmethod
    def _get_member_type(cls, type_: Any) -> Any:
        origin_type = get_origin(type_) or type_
        if not is_subclass(origin_type, Set):
            raise TypeError('expected Set type')
        member_type = super()._get_member_type(type_)
        if not is_origin_hashable(member_type):
            raise TypeError(f'{pretty_type(member_type)} is not hashable')
        return member_type

    @override
    def _check_item(self, item: H) -> None:
        if not isinstance(item, Hashable):
            raise TypeError('expected Hashable type')
        super()._check_item(item)


class FrozenSetSerdeType(SetSerdeType[H]):
    """ Represents builtin `frozenset` values.
    """

    @override
    def _build(self, items: Iterable[H]) -> frozenset[H]:
        return frozenset(items)


class BytesSerdeType(_CollectionSerdeType[int]):
    """ Represents builtin `bytes` values, a sequence of u8.

    In binary this is the same as a `list[U8]`, in text formats it's a list of numbers.
    """

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if not (is_subclass(type_, bytes) or is_subclass(type_, bytearray)):
            raise TypeError('expected bytes type')
        from nanoserde.serde_types.markers import U8
        return cls(SerdeType.from_type(U8, type_map=type_map))

    @override
    def _check_value(self, value: Collection[int], /, *, deep: bool) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError(f'expected bytes, got {type(value).__name__}')

    @override
    def _build(self, items: Iterable[int]) -> bytes:
        return bytes(items)

    @override
    def _serialize(self, serializer: Serializer, value: Collection[int], /) -> None:
        encode_bytes(serializer, bytes(value))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> bytes:
        return decode_bytes(deserializer, max_length=deserializer.max_length)
