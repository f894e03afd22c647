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
A character is a single unicode scalar value, encoded as its code point in an unsigned 32-bit little-endian integer.

>>> se = Serializer.build_bytes_serializer()
>>> encode_char(se, 'a')
>>> encode_char(se, '😋')
>>> bytes(se.finalize()).hex()
'610000000bf60100'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('610000000bf60100'))
>>> decode_char(de)
'a'
>>> decode_char(de)
'😋'

Surrogates are not scalar values:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00d80000'))
>>> decode_char(de)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.BadDataError: 0xd800 is not a unicode scalar value (at offset 0)
"""

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.exceptions import BadDataError

from .int import decode_int, encode_int

MAX_CODE_POINT = 0x10FFFF


def is_scalar_value(code_point: int) -> bool:
    return 0 <= code_point <= MAX_CODE_POINT and not (0xD800 <= code_point < 0xE000)


def encode_char(serializer: Serializer, value: str) -> None:
    if len(value) != 1 or not is_scalar_value(ord(value)):
        raise ValueError(f'{value!r} is not a single unicode scalar')
    encode_int(serializer, ord(value), length=4, signed=False)


def decode_char(deserializer: Deserializer) -> str:
    offset = deserializer.cur_pos()
    code_point = decode_int(deserializer, length=4, signed=False)
    if not is_scalar_value(code_point):
        raise BadDataError(f'{code_point:#x} is not a unicode scalar value', offset=offset)
    return chr(code_point)
