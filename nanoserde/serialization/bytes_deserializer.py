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

from .consts import DEFAULT_BYTES_MAX_LENGTH
from .deserializer import Deserializer
from .exceptions import BadDataError, OutOfDataError, SerializationError
from .types import Buffer

_EMPTY_VIEW = memoryview(b'')


class BytesDeserializer(Deserializer):
    """Simple implementation of a Deserializer to parse values from a byte sequence.

    This implementation keeps the borrowed buffer and a read cursor, the buffer itself is never copied.
    """

    def __init__(self, data: Buffer, *, max_length: int | None = DEFAULT_BYTES_MAX_LENGTH) -> None:
        self._view = memoryview(data)
        self._pos = 0
        self.max_length = max_length

    def _require(self, n: int) -> None:
        if n < 0:
            raise SerializationError('value cannot be negative', offset=self._pos)
        if self._pos + n > len(self._view):
            raise OutOfDataError(offset=self._pos, wanted=n, size=len(self._view))

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise BadDataError(f'trailing data: {len(self._view) - self._pos} bytes left', offset=self._pos)
        self._view = _EMPTY_VIEW

    @override
    def is_empty(self) -> bool:
        return self._pos >= len(self._view)

    @override
    def cur_pos(self) -> int:
        return self._pos

    @override
    def read_byte(self) -> int:
        self._require(1)
        b = self._view[self._pos]
        self._pos += 1
        return b

    @override
    def _read_bytes(self, n: int) -> memoryview:
        self._require(n)
        b = self._view[self._pos:self._pos + n]
        self._pos += n
        return b
