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

from typing import Any, NamedTuple

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.attrs import get_container_attrs, get_field_attrs, set_attributes
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.tuple_serde_type import (
    check_tuple_items,
    de_json_tuple,
    de_ron_tuple,
    ser_json_tuple,
    ser_ron_tuple,
)
from nanoserde.serde_types.utils import get_class_hints, is_namedtuple_class, pretty_type
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.compound_encoding.tuple import decode_tuple, encode_tuple
from nanoserde.text.tokens import TokenKind
from nanoserde.utils.typing import split_annotated

_CONTAINER_ATTRIBUTES = frozenset({'transparent', 'proxy'})
_FIELD_ATTRIBUTES = frozenset({'proxy'})


class NamedTupleSerdeType(SerdeType[NamedTuple]):
    """ Represents tuple types, classes that inherit from `typing.NamedTuple`.

    Fields are positional: binary writes them in order, JSON writes `[a, b]` and RON writes `(a, b)`. A tuple type
    without fields is `{}` in JSON and `()` in RON. With `@nserde(transparent=True)` a tuple type with a single field
    is written exactly like its field in the text formats.
    """

    __slots__ = ('_class', '_items', '_transparent')

    _class: type[NamedTuple]
    _items: tuple[SerdeType, ...]
    _transparent: bool

    def __init__(self, class_: type[NamedTuple], items: tuple[SerdeType, ...], *, transparent: bool = False) -> None:
        if transparent and len(items) != 1:
            raise TypeError('transparent is only supported on tuple types with a single field')
        self._class = class_
        self._items = items
        self._transparent = transparent

    @property
    def is_unit(self) -> bool:
        return not self._items

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if not is_namedtuple_class(type_):
            raise TypeError(f'{pretty_type(type_)} is not a NamedTuple')
        container = get_container_attrs(type_)
        if set_attributes(container) - _CONTAINER_ATTRIBUTES:
            raise TypeError(f'{type_.__name__}: tuple types only support the transparent and proxy attributes')
        hints = get_class_hints(type_)
        items = []
        for name in type_._fields:
            field_type = hints[name]
            _, metadata = split_annotated(field_type)
            if set_attributes(get_field_attrs(metadata)) - _FIELD_ATTRIBUTES:
                raise TypeError(f'{type_.__name__}.{name}: fields of tuple types only support the proxy attribute')
            items.append(SerdeType.from_type(field_type, type_map=type_map))
        return cls(type_, tuple(items), transparent=container.transparent)

    def _make(self, values: tuple[Any, ...]) -> NamedTuple:
        return self._class._make(values)

    @override
    def _check_value(self, value: NamedTuple, /, *, deep: bool) -> None:
        if not isinstance(value, self._class):
            raise TypeError(f'expected {self._class.__name__}, got {type(value).__name__}')
        check_tuple_items(value, self._items, deep=deep)

    @override
    def default(self) -> NamedTuple:
        return self._make(tuple(item.default() for item in self._items))

    @override
    def _serialize(self, serializer: Serializer, value: NamedTuple, /) -> None:
        encode_tuple(serializer, value, tuple(item.serialize for item in self._items))

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> NamedTuple:
        return self._make(decode_tuple(deserializer, tuple(item.deserialize for item in self._items)))

    # the item methods are also used for tuple-like variants, those ignore `transparent`

    def ser_json_items(self, state: SerJsonState, value: NamedTuple) -> None:
        ser_json_tuple(state, value, self._items, separator=', ')

    def de_json_items(self, state: DeJsonState) -> NamedTuple:
        return self._make(de_json_tuple(state, self._items))

    def ser_ron_items(self, state: SerRonState, depth: int, value: NamedTuple) -> None:
        ser_ron_tuple(state, depth, value, self._items)

    def de_ron_items(self, state: DeRonState) -> NamedTuple:
        return self._make(de_ron_tuple(state, self._items))

    @override
    def _ser_json(self, state: SerJsonState, value: NamedTuple, /) -> None:
        if self._transparent:
            self._items[0].ser_json(state, value[0])
        elif self.is_unit:
            state.push('{}')
        else:
            self.ser_json_items(state, value)

    @override
    def _de_json(self, state: DeJsonState, /) -> NamedTuple:
        if self._transparent:
            return self._make((self._items[0].de_json(state),))
        if self.is_unit and state.tok.kind is TokenKind.CURLY_OPEN:
            state.curly_open()
            state.curly_close()
            return self._make(())
        return self.de_json_items(state)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: NamedTuple, /) -> None:
        if self._transparent:
            self._items[0].ser_ron(state, depth, value[0])
        else:
            self.ser_ron_items(state, depth, value)

    @override
    def _de_ron(self, state: DeRonState, /) -> NamedTuple:
        if self._transparent:
            return self._make((self._items[0].de_ron(state),))
        return self.de_ron_items(state)
