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
A duration is a pair of whole seconds (u64) and nanoseconds (u32), the nanoseconds must be below one second.

>>> se = Serializer.build_bytes_serializer()
>>> encode_duration(se, 1000, 999_999_999)
>>> bytes(se.finalize()).hex()
'e803000000000000ffc99a3b'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('e803000000000000ffc99a3b'))
>>> decode_duration(de)
(1000, 999999999)

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('e80300000000000000ca9a3b'))
>>> decode_duration(de)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.BadDataError: duration nanos 1000000000 out of range (at offset 8)
"""

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.exceptions import BadDataError

from .int import decode_int, encode_int

NANOS_PER_SEC = 1_000_000_000


def encode_duration(serializer: Serializer, secs: int, nanos: int) -> None:
    if not 0 <= nanos < NANOS_PER_SEC:
        raise ValueError(f'duration nanos {nanos} out of range')
    encode_int(serializer, secs, length=8, signed=False)
    encode_int(serializer, nanos, length=4, signed=False)


def decode_duration(deserializer: Deserializer) -> tuple[int, int]:
    secs = decode_int(deserializer, length=8, signed=False)
    offset = deserializer.cur_pos()
    nanos = decode_int(deserializer, length=4, signed=False)
    if nanos >= NANOS_PER_SEC:
        raise BadDataError(f'duration nanos {nanos} out of range', offset=offset)
    return secs, nanos
