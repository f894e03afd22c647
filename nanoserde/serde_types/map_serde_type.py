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
from collections.abc import Hashable, Mapping
from typing import Any, Iterable, TypeVar

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import is_origin_hashable, pretty_type
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.mapping import decode_mapping, encode_mapping
from nanoserde.text.tokens import TokenKind
from nanoserde.utils.typing import get_args, get_origin, is_subclass

T = TypeVar('T')
H = TypeVar('H', bound=Hashable)


class _MapSerdeType(SerdeType[Mapping[H, T]], ABC):
    """ Base class to help implement SerdeType for mappings.

    Keys are written in their own format, so in JSON a map with `str` keys is an object and a map with `int` keys is
    an object with number keys. Decoding a key that appears twice keeps the last value.
    """

    __slots__ = ('_key', '_value')

    _key: SerdeType[H]
    _value: SerdeType[T]

    def __init__(self, key: SerdeType[H], value: SerdeType[T]) -> None:
        self._key = key
        self._value = value

    @abstractmethod
    def _build(self, items: Iterable[tuple[H, T]]) -> Mapping[H, T]:
        """ How to build the concrete map from an iterable of (key, value).
        """
        raise NotImplementedError

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        origin_type = get_origin(type_) or type_
        if not is_subclass(origin_type, Mapping):
            raise TypeError('expected Mapping type')
        args = get_args(type_)
        if not args or len(args) != 2:
            raise TypeError(f'expected {pretty_type(origin_type)}[<key type>, <value type>]')
        key_type, value_type = args
        if not is_origin_hashable(key_type):
            raise TypeError(f'{pretty_type(key_type)} is not hashable')
        key_serde_type = SerdeType.from_type(key_type, type_map=type_map)
        return cls(key_serde_type, SerdeType.from_type(value_type, type_map=type_map))

    @override
    def _check_value(self, value: Mapping[H, T], /, *, deep: bool) -> None:
        if not isinstance(value, Mapping):
            raise TypeError(f'expected Mapping, got {type(value).__name__}')
        if deep:
            for k, v in value.items():
                self._key._check_value(k, deep=True)
                self._value._check_value(v, deep=True)

    @override
    def default(self) -> Mapping[H, T]:
        return self._build(())

    @override
    def _serialize(self, serializer: Serializer, value: Mapping[H, T], /) -> None:
        encode_mapping(serializer, value, self._key.serialize, self._value.serialize)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Mapping[H, T]:
        return decode_mapping(
            deserializer,
            self._key.deserialize,
            self._value.deserialize,
            self._build,
            max_length=deserializer.max_length,
        )

    @override
    def _ser_json(self, state: SerJsonState, value: Mapping[H, T], /) -> None:
        state.push('{')
        for index, (k, v) in enumerate(value.items()):
            if index:
                state.push(',')
            self._key.ser_json(state, k)
            state.push(':')
            self._value.ser_json(state, v)
        state.push('}')

    @override
    def _de_json(self, state: DeJsonState, /) -> Mapping[H, T]:
        items: list[tuple[H, T]] = []
        state.curly_open()
        while state.tok.kind is not TokenKind.CURLY_CLOSE:
            k = self._key.de_json(state)
            state.colon()
            v = self._value.de_json(state)
            state.eat_comma_curly()
            items.append((k, v))
        state.curly_close()
        return self._build(items)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Mapping[H, T], /) -> None:
        state.push('{\n')
        for k, v in value.items():
            state.indent(depth + 1)
            self._key.ser_ron(state, depth + 1, k)
            state.push(':')
            self._value.ser_ron(state, depth + 1, v)
            state.conl()
        state.indent(depth)
        state.push('}')

    @override
    def _de_ron(self, state: DeRonState, /) -> Mapping[H, T]:
        items: list[tuple[H, T]] = []
        state.curly_open()
        while state.tok.kind is not TokenKind.CURLY_CLOSE:
            k = self._key.de_ron(state)
            state.colon()
            v = self._value.de_ron(state)
            state.eat_comma_curly()
            items.append((k, v))
        state.curly_close()
        return self._build(items)


class DictSerdeType(_MapSerdeType[H, T]):
    """ Represents builtin `dict` values.
    """

    @override
    def _build(self, items: Iterable[tuple[H, T]]) -> dict[H, T]:
        return dict(items)
