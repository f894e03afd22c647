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
A collection is basically any value that has a known size and is iterable. Sequences, sets and linked lists all use
this layout.

Layout: [N: u64 little-endian][value_0]...[value_N]

>>> from nanoserde.serialization.encoding.int import decode_int, encode_int
>>> se = Serializer.build_bytes_serializer()
>>> encode_collection(se, [1, 2, 3], lambda se, v: encode_int(se, v, length=2, signed=False))
>>> bytes(se.finalize()).hex()
'0300000000000000010002000300'

Breakdown of the result:

    0300000000000000: 3 as u64, the total length
    0100: 1 as u16
    0200: 2 as u16
    0300: 3 as u16

When decoding, the builder can be any compatible collection, in the previous example a `list` was encoded, but when
decoding a `tuple` could be used, it only matters that the collection can be initialized with an `Iterable[T]`.

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300000000000000010002000300'))
>>> decode_collection(de, lambda de: decode_int(de, length=2, signed=False), tuple)
(1, 2, 3)
>>> de.finalize()
"""

from collections.abc import Collection
from typing import TypeVar

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.consts import DEFAULT_BYTES_MAX_LENGTH
from nanoserde.serialization.encoding.length import decode_length, encode_length

from . import Builder, Decoder, Encoder

T = TypeVar('T')
R = TypeVar('R', bound=Collection)


def encode_collection(serializer: Serializer, values: Collection[T], encoder: Encoder[T]) -> None:
    encode_length(serializer, len(values))
    for value in values:
        encoder(serializer, value)


def decode_collection(
    deserializer: Deserializer,
    decoder: Decoder[T],
    builder: Builder[T, R],
    *,
    max_length: int | None = DEFAULT_BYTES_MAX_LENGTH,
) -> R:
    length = decode_length(deserializer, max_length=max_length)
    return builder(decoder(deserializer) for _ in range(length))
