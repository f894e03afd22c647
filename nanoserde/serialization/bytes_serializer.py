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

from typing_extensions import override

from .serializer import Serializer


class BytesSerializer(Serializer):
    """ Serializer that writes into a growing in-memory buffer.

    The length prefixes of the wire format are written before the items they count, so the buffer is only ever
    appended to. `finalize()` copies it out once.

    >>> se = BytesSerializer()
    >>> se.write_byte(1)
    >>> se.write_bytes(b'ab')
    >>> se.cur_pos()
    3
    >>> se.finalize()
    b'\\x01ab'
    """

    __slots__ = ('_buffer',)

    def __init__(self) -> None:
        self._buffer = bytearray()

    def finalize(self) -> bytes:
        """Get the bytes written so far."""
        return bytes(self._buffer)

    @override
    def cur_pos(self) -> int:
        return len(self._buffer)

    @override
    def write_byte(self, data: int) -> None:
        # bytearray.append checks for the 0..255 range
        self._buffer.append(data)

    @override
    def _write_bytes(self, data: bytes | memoryview) -> None:
        self._buffer += data
