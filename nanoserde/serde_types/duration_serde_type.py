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

from typing import Any, Optional

from typing_extensions import Self, override

from nanoserde.json import DeJsonState, SerJsonState
from nanoserde.ron import DeRonState, SerRonState
from nanoserde.serde_types.dataclass_serde_type import RecordSerdeType
from nanoserde.serde_types.markers import UNIX_EPOCH, Duration, SystemTime
from nanoserde.serde_types.optional_serde_type import OptionalSerdeType
from nanoserde.serde_types.serde_type import SerdeType
from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.encoding.duration import decode_duration, encode_duration
from nanoserde.text.de_state import DeTextState


class DurationSerdeType(SerdeType[Duration]):
    """ Represents `Duration` values.

    Binary writes u64 seconds and u32 nanoseconds. The text formats write it as a record with `secs` and `nanos`, a
    decoded `nanos` of one second or more is a range error.

    >>> from nanoserde.serde_types import make_serde_type
    >>> serde_type = make_serde_type(Duration)
    >>> serde_type.to_json(Duration(3, 5))
    '{"secs":3,"nanos":5}'
    >>> serde_type.from_json('{"secs":1,"nanos":1000000000}')
    Traceback (most recent call last):
    ...
    nanoserde.text.errors.DeJsonError: Json Deserialize error: Value out of range nanos must be in [0, 1000000000) ...
    """

    __slots__ = ('_record',)

    _record: RecordSerdeType

    def __init__(self, record: RecordSerdeType) -> None:
        self._record = record

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if type_ is not Duration:
            raise TypeError('expected Duration')
        return cls(RecordSerdeType._from_type(Duration, type_map=type_map))

    def _from_text(self, state: DeTextState, decode: Any) -> Duration:
        try:
            return decode(state)
        except ValueError as e:
            raise state.err_range(str(e)) from e

    @override
    def _check_value(self, value: Duration, /, *, deep: bool) -> None:
        if not isinstance(value, Duration):
            raise TypeError(f'expected Duration, got {type(value).__name__}')

    @override
    def default(self) -> Duration:
        return Duration(0, 0)

    @override
    def _serialize(self, serializer: Serializer, value: Duration, /) -> None:
        encode_duration(serializer, value.secs, value.nanos)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> Duration:
        secs, nanos = decode_duration(deserializer)
        return Duration(secs, nanos)

    @override
    def _ser_json(self, state: SerJsonState, value: Duration, /) -> None:
        self._record.ser_json(state, value)

    @override
    def _de_json(self, state: DeJsonState, /) -> Duration:
        return self._from_text(state, self._record.de_json)

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: Duration, /) -> None:
        self._record.ser_ron(state, depth, value)

    @override
    def _de_ron(self, state: DeRonState, /) -> Duration:
        return self._from_text(state, self._record.de_ron)


class SystemTimeSerdeType(SerdeType[SystemTime]):
    """ Represents `SystemTime` values as an optional duration since the unix epoch.

    A present duration is always written, an absent one decodes to `UNIX_EPOCH`.
    """

    __slots__ = ('_since_epoch',)

    _since_epoch: OptionalSerdeType[Duration]

    def __init__(self, duration: DurationSerdeType) -> None:
        self._since_epoch = OptionalSerdeType(duration)

    @override
    @classmethod
    def _from_type(cls, type_: Any, /, *, type_map: SerdeType.TypeMap) -> Self:
        if type_ is not SystemTime:
            raise TypeError('expected SystemTime')
        return cls(DurationSerdeType._from_type(Duration, type_map=type_map))

    @staticmethod
    def _build(since_epoch: Optional[Duration]) -> SystemTime:
        return UNIX_EPOCH if since_epoch is None else SystemTime(since_epoch)

    @override
    def _check_value(self, value: SystemTime, /, *, deep: bool) -> None:
        if not isinstance(value, SystemTime):
            raise TypeError(f'expected SystemTime, got {type(value).__name__}')
        if deep:
            self._since_epoch._check_value(value.since_epoch, deep=True)

    @override
    def default(self) -> SystemTime:
        return UNIX_EPOCH

    @override
    def _serialize(self, serializer: Serializer, value: SystemTime, /) -> None:
        self._since_epoch.serialize(serializer, value.since_epoch)

    @override
    def _deserialize(self, deserializer: Deserializer, /) -> SystemTime:
        return self._build(self._since_epoch.deserialize(deserializer))

    @override
    def _ser_json(self, state: SerJsonState, value: SystemTime, /) -> None:
        self._since_epoch.ser_json(state, value.since_epoch)

    @override
    def _de_json(self, state: DeJsonState, /) -> SystemTime:
        return self._build(self._since_epoch.de_json(state))

    @override
    def _ser_ron(self, state: SerRonState, depth: int, value: SystemTime, /) -> None:
        self._since_epoch.ser_ron(state, depth, value.since_epoch)

    @override
    def _de_ron(self, state: DeRonState, /) -> SystemTime:
        return self._build(self._since_epoch.de_ron(state))
