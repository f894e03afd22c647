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

from types import NoneType
from typing import Any

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serialization import Deserializer, Serializer


class NullSerdeType(SerdeType[None]):
    """ The unit value `None`, it takes no bytes, it's `null` in JSON and `()` in RON.
    """

    __slots__ = ()

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if type_ not in (None, NoneType):
            raise TypeError('expected None type')
        return cls()

    @override
    def _check_value(self, value: None, /, *, deep: bool) -> None:
        if value is not None:
            raise TypeError('expected None')

    @override
    def default(self) -> None:
        return None

    @override
    def _serialize(self, serializer: Serializer, value: None, /) -> None:
        pass

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> None:
        return None

    @override
    def _ser_json(self, state: SerJsonState, value: None, /) -> None:
        state.push('null')

    @override
    def _de_json(self, state: DeJsonState, /) -> None:
        state.as_unit()

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: None, /) -> None:
        state.push('()')

    @override
    def _de_ron(self, state: DeRonState, /) -> None:
        state.as_unit()
