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

r"""
This modules implements encoding of byte sequence by prefixing it with the length of the sequence encoded as an
unsigned 64-bit little-endian integer.

>>> se = Serializer.build_bytes_serializer()
>>> encode_bytes(se, b'test')  # will prepend 0400000000000000 before writing b'test'
>>> bytes(se.finalize()).hex()
'040000000000000074657374'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('040000000000000074657374'))
>>> decode_bytes(de)
b'test'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0500000000000000746573'))
>>> decode_bytes(de)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.OutOfDataError: not enough data, wanted 5 bytes but size is 11 (at offset 8)
"""

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.consts import DEFAULT_BYTES_MAX_LENGTH

from .length import decode_length, encode_length


def encode_bytes(serializer: Serializer, data: bytes) -> None:
    encode_length(serializer, len(data))
    serializer.write_bytes(data, max_bytes=None)


def decode_bytes(deserializer: Deserializer, *, max_length: int | None = DEFAULT_BYTES_MAX_LENGTH) -> bytes:
    length = decode_length(deserializer, max_length=max_length)
    return bytes(deserializer.read_bytes(length, max_bytes=None))
