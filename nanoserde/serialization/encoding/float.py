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
This module implements encoding of IEEE-754 floats, 4 bytes (f32) or 8 bytes (f64), little-endian.

>>> se = Serializer.build_bytes_serializer()
>>> encode_float(se, 1.5, length=4)
>>> encode_float(se, -2.0, length=8)
>>> bytes(se.finalize()).hex()
'0000c03f00000000000000c0'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0000c03f00000000000000c0'))
>>> decode_float(de, length=4)
1.5
>>> decode_float(de, length=8)
-2.0

Values are rounded to single precision when encoded as f32, `to_f32` does the same rounding:

>>> to_f32(0.1)
0.10000000149011612
"""

import struct

from nanoserde.serialization import Deserializer, Serializer

_FORMATS = {
    4: '<f',
    8: '<d',
}


def _get_format(length: int) -> str:
    try:
        return _FORMATS[length]
    except KeyError:
        raise ValueError(f'floats must be 4 or 8 bytes, not {length}')


def to_f32(value: float) -> float:
    """ Round a float to the nearest single precision value, raises ValueError if it does not fit."""
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        raise ValueError(f'{value} does not fit in f32')


def encode_float(serializer: Serializer, value: float, *, length: int) -> None:
    try:
        data = struct.pack(_get_format(length), value)
    except OverflowError:
        raise ValueError(f'{value} does not fit in f{length * 8}')
    serializer.write_bytes(data)


def decode_float(deserializer: Deserializer, *, length: int) -> float:
    value, = deserializer.read_struct(_get_format(length))
    return value
