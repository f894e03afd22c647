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
Encoders for the binary layout of values that contain other values.

Each submodule handles one shape of the wire format and is given the encoders of the contained values:

- `collection`: a u64 length prefix followed by the items, used by sequences, sets and linked lists
- `mapping`: a u64 length prefix followed by key/value pairs
- `array`: exactly N items without a prefix
- `optional`: a 0/1 marker byte followed by the value when present
- `tuple`: the items in positional order, without framing
- `variant`: a u16 LE tag followed by the variant payload

None of them know about type annotations, `nanoserde.serde_types` wires them to the codecs of the inner types:

>>> from nanoserde.serialization import Serializer
>>> from nanoserde.serialization.compound_encoding.optional import encode_optional
>>> from nanoserde.serialization.encoding.utf8 import encode_utf8
>>> se = Serializer.build_bytes_serializer()
>>> encode_optional(se, 'a', encode_utf8)
>>> se.finalize().hex()
'01010000000000000061'
"""

from collections.abc import Iterable
from typing import Protocol, TypeVar

from nanoserde.serialization.deserializer import Deserializer
from nanoserde.serialization.serializer import Serializer

T_co = TypeVar('T_co', covariant=True)
T_contra = TypeVar('T_contra', contravariant=True)
R_co = TypeVar('R_co', covariant=True)


class Decoder(Protocol[T_co]):
    """Reads one inner value at the cursor."""

    def __call__(self, deserializer: Deserializer, /) -> T_co:
        ...


class Encoder(Protocol[T_contra]):
    """Writes one inner value."""

    def __call__(self, serializer: Serializer, value: T_contra, /) -> None:
        ...


class Builder(Protocol[T_contra, R_co]):
    """Makes the final container (a list, a set, a dict...) out of the decoded items."""

    def __call__(self, items: Iterable[T_contra], /) -> R_co:
        ...
