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

"""
Annotations understood by `make_serde_type` that have no builtin Python counterpart.

Integers and floats of a given width are `NewType`s, values are plain `int` and `float`:

>>> U8(255)
255

Fixed arrays and boxes expand to `Annotated` types:

>>> Array[int, 3]
typing.Annotated[list[int], ArrayLength(length=3)]
>>> Box[str]
typing.Annotated[str, Boxed()]
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, NewType

from typing_extensions import Self

from nanoserde.serialization.encoding.duration import NANOS_PER_SEC

I8 = NewType('I8', int)
I16 = NewType('I16', int)
I32 = NewType('I32', int)
I64 = NewType('I64', int)
I128 = NewType('I128', int)
U8 = NewType('U8', int)
U16 = NewType('U16', int)
U32 = NewType('U32', int)
U64 = NewType('U64', int)
U128 = NewType('U128', int)
# platform sized integer, always written as a u64
USize = NewType('USize', int)

F32 = NewType('F32', float)
F64 = NewType('F64', float)

# a single unicode scalar value
Char = NewType('Char', str)


@dataclass(frozen=True, slots=True)
class ArrayLength:
    length: int

    def __post_init__(self) -> None:
        if not isinstance(self.length, int) or self.length < 0:
            raise TypeError('array length must be a non-negative int')


@dataclass(frozen=True, slots=True)
class Boxed:
    pass


class Array:
    """ `Array[T, N]` is a list of exactly N items of type T, written without a length prefix.
    """

    def __class_getitem__(cls, params: Any) -> Any:
        if not isinstance(params, tuple) or len(params) != 2:
            raise TypeError('expected Array[<type>, <length>]')
        item_type, length = params
        return Annotated[list[item_type], ArrayLength(length)]  # type: ignore[valid-type]


class Box:
    """`Box[T]` is the same as T, it only exists so that annotations can mirror boxed values."""

    def __class_getitem__(cls, item_type: Any) -> Any:
        return Annotated[item_type, Boxed()]


_U64_MAX = (1 << 64) - 1


@dataclass(frozen=True, slots=True, order=True)
class Duration:
    """ A span of time as whole seconds plus nanoseconds.

    >>> Duration.from_timedelta(timedelta(seconds=1, microseconds=5))
    Duration(secs=1, nanos=5000)
    >>> Duration(1, 1_000_000_000)
    Traceback (most recent call last):
    ...
    ValueError: nanos must be in [0, 1000000000)
    """

    secs: U64
    nanos: U32 = U32(0)

    def __post_init__(self) -> None:
        if not 0 <= self.secs <= _U64_MAX:
            raise ValueError('secs must fit in a u64')
        if not 0 <= self.nanos < NANOS_PER_SEC:
            raise ValueError(f'nanos must be in [0, {NANOS_PER_SEC})')

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> Self:
        if delta < timedelta(0):
            raise ValueError('negative durations are not supported')
        return cls(delta.days * 86400 + delta.seconds, delta.microseconds * 1000)

    @classmethod
    def from_nanos(cls, nanos: int) -> Self:
        secs, nanos = divmod(nanos, NANOS_PER_SEC)
        return cls(secs, nanos)

    def to_timedelta(self) -> timedelta:
        """Convert to a `timedelta`, sub-microsecond precision is truncated."""
        return timedelta(seconds=self.secs, microseconds=self.nanos // 1000)

    def total_nanos(self) -> int:
        return self.secs * NANOS_PER_SEC + self.nanos


_EPOCH_DATETIME = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True, order=True)
class SystemTime:
    """ A point in time after the unix epoch.

    >>> SystemTime.from_datetime(datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc))
    SystemTime(since_epoch=Duration(secs=60, nanos=0))
    """

    since_epoch: Duration

    @classmethod
    def from_datetime(cls, moment: datetime) -> Self:
        if moment.tzinfo is None:
            raise ValueError('naive datetimes are not supported')
        delta = moment - _EPOCH_DATETIME
        if delta < timedelta(0):
            raise ValueError('times before the unix epoch are not supported')
        return cls(Duration.from_timedelta(delta))

    @classmethod
    def now(cls) -> Self:
        return cls(Duration.from_nanos(time.time_ns()))

    def to_datetime(self) -> datetime:
        return _EPOCH_DATETIME + self.since_epoch.to_timedelta()


UNIX_EPOCH = SystemTime(Duration(0, 0))
