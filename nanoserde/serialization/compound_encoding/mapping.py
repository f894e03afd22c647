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
Encoding a mapping is equivalent to encoding a collection of 2-tuples.

Layout: [N: u64 little-endian][key_0][value_0]...[key_N][value_N]

>>> from nanoserde.serialization.encoding.utf8 import encode_utf8, decode_utf8
>>> from nanoserde.serialization.encoding.bool import encode_bool, decode_bool
>>> se = Serializer.build_bytes_serializer()
>>> encode_mapping(se, {'foo': False, 'bar': True}, encode_utf8, encode_bool)
>>> bytes(se.finalize()).hex()
'02000000000000000300000000000000666f6f00030000000000000062617201'

Breakdown of the result:

    0200000000000000: 2 as u64, the total length
    0300000000000000666f6f: 'foo' with length prefix
    00: False
    0300000000000000626172: 'bar' with length prefix
    01: True

Duplicate keys are accepted when decoding, the last one wins:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex(
...     '02000000000000000300000000000000666f6f000300000000000000666f6f01'
... ))
>>> decode_mapping(de, decode_utf8, decode_bool, dict)
{'foo': True}
>>> de.finalize()
"""

from collections.abc import Mapping
from typing import TypeVar

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.consts import DEFAULT_BYTES_MAX_LENGTH
from nanoserde.serialization.encoding.length import decode_length, encode_length

from . import Builder, Decoder, Encoder

KT = TypeVar('KT')
VT = TypeVar('VT')
R = TypeVar('R', bound=Mapping)


def encode_mapping(
    serializer: Serializer,
    values_mapping: Mapping[KT, VT],
    key_encoder: Encoder[KT],
    value_encoder: Encoder[VT],
) -> None:
    encode_length(serializer, len(values_mapping))
    for key, value in values_mapping.items():
        key_encoder(serializer, key)
        value_encoder(serializer, value)


def decode_mapping(
    deserializer: Deserializer,
    key_decoder: Decoder[KT],
    value_decoder: Decoder[VT],
    mapping_builder: Builder[tuple[KT, VT], R],
    *,
    max_length: int | None = DEFAULT_BYTES_MAX_LENGTH,
) -> R:
    size = decode_length(deserializer, max_length=max_length)
    return mapping_builder(
        (key_decoder(deserializer), value_decoder(deserializer))
        for _ in range(size)
    )
