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
A fixed array has a length that is part of its type, so no length is written, only the N elements.

Layout: [value_0]...[value_N-1]

>>> from nanoserde.serialization.encoding.int import decode_int, encode_int
>>> se = Serializer.build_bytes_serializer()
>>> encode_array(se, [1, 2], lambda se, v: encode_int(se, v, length=2, signed=False), length=2)
>>> bytes(se.finalize()).hex()
'01000200'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('01000200'))
>>> decode_array(de, lambda de: decode_int(de, length=2, signed=False), length=2)
[1, 2]

When an element fails to decode, the elements that were already built are released before the error propagates, so a
failed decode never keeps a partially built array alive:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('010002'))
>>> decode_array(de, lambda de: decode_int(de, length=2, signed=False), length=2)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.OutOfDataError: not enough data, wanted 2 bytes but size is 3 (at offset 2)
"""

from collections.abc import Sequence
from typing import Callable, TypeVar

from structlog import get_logger

from nanoserde.serialization import Deserializer, Serializer

from . import Decoder, Encoder

logger = get_logger()

T = TypeVar('T')


def build_array(produce: Callable[[], T], length: int) -> list[T]:
    """ Call `produce` exactly `length` times and collect the results.

    This is shared by every format. If `produce` raises, the items built so far are dropped before the exception is
    re-raised, this guarantees that exactly the successful prefix is released.
    """
    items: list[T] = []
    try:
        for _ in range(length):
            items.append(produce())
    except BaseException:
        logger.debug('released partial array', released=len(items), length=length)
        items.clear()
        raise
    return items


def encode_array(serializer: Serializer, values: Sequence[T], encoder: Encoder[T], *, length: int) -> None:
    if len(values) != length:
        raise ValueError(f'expected {length} items, got {len(values)}')
    for value in values:
        encoder(serializer, value)


def decode_array(deserializer: Deserializer, decoder: Decoder[T], *, length: int) -> list[T]:
    return build_array(lambda: decoder(deserializer), length)
