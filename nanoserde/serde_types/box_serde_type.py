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
from nanoserde.serde_types.markers import Boxed
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serde_types.utils import strip_marker
from nanoserde.serialization import Deserializer, Serializer

T = TypeVar('T')


class BoxSerdeType(SerdeType[T]):
    """`Box[T]` has no framing in any format, everything is delegated to the inner type."""

    __slots__ = ('_inner',)

    _inner: SerdeType[T]

    def __init__(self, inner: SerdeType[T]) -> None:
        self._inner = inner

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        _, inner_type = strip_marker(type_, Boxed)
        return cls(SerdeType.from_type(inner_type, type_map=type_map))

    @override
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        self._inner._check_value(value, deep=deep)

    @override
    def default(self) -> T:
        return self._inner.default()

    @override
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        self._inner._serialize(serializer, value)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        return self._inner.deserialize(deserializer)

    @override
    def _ser_json(self, state: SerJsonState, value: T, /) -> None:
        self._inner._ser_json(state, value)

    @override
    def _de_json(self, state: DeJsonState, /) -> T:
        return self._inner.de_json(state)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: T, /) -> None:
        self._inner._ser_ron(state, depth, value)

    @override
    def _de_ron(self, state: DeRonState, /) -> T:
        return self._inner.de_ron(state)
