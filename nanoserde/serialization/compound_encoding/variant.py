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
A variant value is written as its tag followed by the payload of that variant, the tag is the 0-based declaration index
of the variant as an unsigned 16-bit little-endian integer.

Layout: [tag: u16 little-endian][payload]

>>> from nanoserde.serialization.encoding.int import decode_int, encode_int
>>> se = Serializer.build_bytes_serializer()
>>> encode_variant(se, 2, 7, lambda se, v: encode_int(se, v, length=1, signed=False))
>>> bytes(se.finalize()).hex()
'020007'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('020007'))
>>> decode_variant_tag(de, variants=3)
2
>>> decode_int(de, length=1, signed=False)
7

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0300'))
>>> decode_variant_tag(de, variants=3)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.UnknownVariantError: variant tag 3 out of range, there are 3 variants (at offset 0)
"""

from typing import TypeVar

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.consts import VARIANT_TAG_BYTES
from nanoserde.serialization.encoding.int import decode_int, encode_int
from nanoserde.serialization.exceptions import UnknownVariantError

from . import Encoder

T = TypeVar('T')

MAX_VARIANTS = 1 << (VARIANT_TAG_BYTES * 8)


def encode_variant_tag(serializer: Serializer, tag: int) -> None:
    encode_int(serializer, tag, length=VARIANT_TAG_BYTES, signed=False)


def decode_variant_tag(deserializer: Deserializer, *, variants: int) -> int:
    offset = deserializer.cur_pos()
    tag = decode_int(deserializer, length=VARIANT_TAG_BYTES, signed=False)
    if tag >= variants:
        raise UnknownVariantError(tag, variants=variants, offset=offset)
    return tag


def encode_variant(serializer: Serializer, tag: int, value: T, encoder: Encoder[T]) -> None:
    encode_variant_tag(serializer, tag)
    encoder(serializer, value)
