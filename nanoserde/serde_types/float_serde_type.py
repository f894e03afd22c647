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
from nanoserde.serialization.encoding.float import decode_float, encode_float, to_f32
from nanoserde.text.de_state import DeTextState
from nanoserde.text.numbers import format_float


class _FloatSerdeType(SerdeType[float]):
    """ Base class of IEEE-754 floats, `int` values are accepted when encoding and decode as `float`.
    """

    __slots__ = ()

    # XXX: subclass must define this value
    _byte_size: ClassVar[int]

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        return cls()

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f'expected float, got {type(value).__name__}')

    @override
    def default(self) -> float:
        return 0.0

    @override
    def _serialize(self, serializer: Serializer, value: float, /) -> None:
        encode_float(serializer, value, length=self._byte_size)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> float:
        return decode_float(deserializer, length=self._byte_size)

    def _narrow(self, state: DeTextState, value: float) -> float:
        return value

    def _de_text(self, state: DeTextState) -> float:
        value = self._narrow(state, state.as_float())
        state.next_tok()
        return value

    def _format(self, value: float) -> str:
        return format_float(float(value))

    @override
    def _ser_json(self, state: SerJsonState, value: float, /) -> None:
        state.push(self._format(value))

    @override
    def _de_json(self, state: DeJsonState, /) -> float:
        return self._de_text(state)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: float, /) -> None:
        state.push(self._format(value))

    @override
    def _de_ron(self, state: DeRonState, /) -> float:
        return self._de_text(state)


class Float32SerdeType(_FloatSerdeType):
    """Single precision, values are rounded to the nearest f32 when encoded and decoded."""

    _byte_size = 4

    @override
    def _check_value(self, value: float, /, *, deep: bool) -> None:
        super()._check_value(value, deep=deep)
        to_f32(float(value))

    @override
    def _narrow(self, state: DeTextState, value: float) -> float:
        try:
            return to_f32(value)
        except ValueError:
            raise state.err_range(f'{value}')

    @override
    def _format(self, value: float) -> str:
        return format_float(to_f32(float(value)), single=True)


class Float64SerdeType(_FloatSerdeType):
    _byte_size = 8
