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
Length prefixes and platform-width integers (`usize`) share the same encoding: an unsigned 64-bit little-endian
integer.

>>> se = Serializer.build_bytes_serializer()
>>> encode_length(se, 3)
>>> bytes(se.finalize()).hex()
'0300000000000000'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300000000000000'))
>>> decode_length(de)
3

A length above `max_length` is refused before anything else is read:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffffffffffff'))
>>> decode_length(de, max_length=1024)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.TooLongError: length 18446744073709551615 exceeds maximum of 1024 (at offset 0)

Without a maximum, a length is still refused when it cannot index a Python sequence:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('ffffffffffffffff'))
>>> decode_length(de, max_length=None)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.OutOfRangeError: length 18446744073709551615 is too large (at offset 0)
"""

import sys

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.consts import DEFAULT_BYTES_MAX_LENGTH, LENGTH_PREFIX_BYTES
from nanoserde.serialization.exceptions import OutOfRangeError, TooLongError

from .int import decode_int, encode_int


def encode_length(serializer: Serializer, length: int) -> None:
    encode_int(serializer, length, length=LENGTH_PREFIX_BYTES, signed=False)


def decode_length(deserializer: Deserializer, *, max_length: int | None = DEFAULT_BYTES_MAX_LENGTH) -> int:
    offset = deserializer.cur_pos()
    length = decode_int(deserializer, length=LENGTH_PREFIX_BYTES, signed=False)
    if max_length is not None and length > max_length:
        raise TooLongError(f'length {length} exceeds maximum of {max_length}', offset=offset)
    if length > sys.maxsize:
        raise OutOfRangeError(f'length {length} is too large', offset=offset)
    return length
