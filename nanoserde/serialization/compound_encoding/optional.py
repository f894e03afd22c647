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
An optional type is encoded the same way as a collection with max length of 1, but with a single byte prefix.

Layout:

    [0x00] when None
    [0x01][value] when not None

>>> from nanoserde.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, 'foo', encode_utf8)
>>> bytes(se.finalize()).hex()
'010300000000000000666f6f'

>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, None, encode_utf8)
>>> bytes(se.finalize()).hex()
'00'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010300000000000000666f6f'))
>>> decode_optional(de, decode_utf8)
'foo'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('00'))
>>> str(decode_optional(de, decode_utf8))
'None'
>>> de.finalize()

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('02'))
>>> decode_optional(de, decode_utf8)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.BadDataError: invalid optional marker 0x02 (at offset 0)
"""

from typing import Optional, TypeVar

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.exceptions import BadDataError

from . import Decoder, Encoder

T = TypeVar('T')


def encode_optional(serializer: Serializer, value: Optional[T], encoder: Encoder[T]) -> None:
    if value is None:
        serializer.write_byte(0x00)
    else:
        serializer.write_byte(0x01)
        encoder(serializer, value)


def decode_optional(deserializer: Deserializer, decoder: Decoder[T]) -> Optional[T]:
    offset = deserializer.cur_pos()
    marker = deserializer.read_byte()
    if marker == 0x00:
        return None
    elif marker == 0x01:
        return decoder(deserializer)
    else:
        raise BadDataError(f'invalid optional marker {marker:#04x}', offset=offset)
