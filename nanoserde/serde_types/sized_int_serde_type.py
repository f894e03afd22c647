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

from typing import Any, ClassVar

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.encoding.int import decode_int, encode_int, int_bounds, int_type_name
from nanoserde.text.de_state import DeTextState


class _SizedIntSerdeType(SerdeType[int]):
    """ Base class for classes that represent builtin `int` values with a fixed size and signedness.
    """

    __slots__ = ()

    # XXX: subclass must define these values:
    _signed: ClassVar[bool]
    _byte_size: ClassVar[int]

    @classmethod
    def _lower_bound_value(cls) -> int:
        return int_bounds(length=cls._byte_size, signed=cls._signed)[0]

    @classmethod
    def _upper_bound_value(cls) -> int:
        return int_bounds(length=cls._byte_size, signed=cls._signed)[1]

    @classmethod
    def type_name(cls) -> str:
        return int_type_name(length=cls._byte_size, signed=cls._signed)

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        return cls()

    @override
    def _check_value(self, value: int, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'expected integer, got {type(value).__name__}')
        if value > self._upper_bound_value():
            raise ValueError(f'{value} is above the upper bound of {self.type_name()}')
        if value < self._lower_bound_value():
            raise ValueError(f'{value} is below the lower bound of {self.type_name()}')

    @override
    def default(self) -> int:
        return 0

    @override
    def _serialize(self, serializer: Serializer, value: int, /) -> None:
        encode_int(serializer, value, length=self._byte_size, signed=self._signed)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> int:
        return decode_int(deserializer, length=self._byte_size, signed=self._signed)

    def _de_text(self, state: DeTextState) -> int:
        if self._signed:
            value = state.as_int(self._lower_bound_value(), self._upper_bound_value())
        else:
            value = state.as_uint(self._upper_bound_value())
        state.next_tok()
        return value

    @override
    def _ser_json(self, state: SerJsonState, value: int, /) -> None:
        state.push(str(value))

    @override
    def _de_json(self, state: DeJsonState, /) -> int:
        return self._de_text(state)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: int, /) -> None:
        state.push(str(value))

    @override
    def _de_ron(self, state: DeRonState, /) -> int:
        return self._de_text(state)


class Int8SerdeType(_SizedIntSerdeType):
    _signed = True
    _byte_size = 1


class Int16SerdeType(_SizedIntSerdeType):
    _signed = True
    _byte_size = 2


class Int32SerdeType(_SizedIntSerdeType):
    _signed = True
    _byte_size = 4  # 4-bytes -> 32-bits


class Int64SerdeType(_SizedIntSerdeType):
    _signed = True
    _byte_size = 8


class Int128SerdeType(_SizedIntSerdeType):
    _signed = True
    _byte_size = 16


class Uint8SerdeType(_SizedIntSerdeType):
    _signed = False
    _byte_size = 1


class Uint16SerdeType(_SizedIntSerdeType):
    _signed = False
    _byte_size = 2


class Uint32SerdeType(_SizedIntSerdeType):
    _signed = False
    _byte_size = 4


class Uint64SerdeType(_SizedIntSerdeType):
    _signed = False
    _byte_size = 8


class Uint128SerdeType(_SizedIntSerdeType):
    _signed = False
    _byte_size = 16


class USizeSerdeType(Uint64SerdeType):
    """The platform sized integer, it is always written as a u64."""

    @override
    @classmethod
    def type_name(cls) -> str:
        return 'usize'
