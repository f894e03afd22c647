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
This module implements utf-8 string encoding with a length prefix.

It works exactly like bytes-encoding but the encoded byte-sequence is utf-8 and it takes/returns a `str`.

>>> se = Serializer.build_bytes_serializer()
>>> encode_utf8(se, 'foobar')  # writes 0600000000000000666f6f626172
>>> encode_utf8(se, '😎')  # writes 0400000000000000f09f988e
>>> bytes(se.finalize()).hex()
'0600000000000000666f6f6261720400000000000000f09f988e'

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0600000000000000666f6f6261720400000000000000f09f988e'))
>>> decode_utf8(de)
'foobar'
>>> decode_utf8(de)
'😎'
>>> de.finalize()

Invalid utf-8 is refused:

>>> de = Deserializer.build_bytes_deserializer(bytes.fromhex('0100000000000000ff'))
>>> decode_utf8(de)
Traceback (most recent call last):
...
nanoserde.serialization.exceptions.BadDataError: invalid utf-8 (at offset 0)
"""

from nanoserde.serialization import Deserializer, Serializer
from nanoserde.serialization.consts import DEFAULT_BYTES_MAX_LENGTH
from nanoserde.serialization.exceptions import BadDataError

from .bytes import decode_bytes, encode_bytes


def encode_utf8(serializer: Serializer, value: str) -> None:
    """ Encodes a string using UTF-8 and adding a length prefix.

    This modules's docstring has more details and examples.
    """
    assert isinstance(value, str)
    try:
        data = value.encode('utf-8')
    except UnicodeEncodeError:
        # XXX: only lone surrogates can fail here
        raise ValueError('string is not a sequence of unicode scalars')
    encode_bytes(serializer, data)


def decode_utf8(deserializer: Deserializer, *, max_length: int | None = DEFAULT_BYTES_MAX_LENGTH) -> str:
    """ Decodes a UTF-8 string with a length prefix.

    This modules's docstring has more details and examples.
    """
    offset = deserializer.cur_pos()
    data = decode_bytes(deserializer, max_length=max_length)
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        raise BadDataError('invalid utf-8', offset=offset) from e
