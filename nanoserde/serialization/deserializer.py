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

from __future__ import annotations

import struct
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, final

from .consts import DEFAULT_BYTES_MAX_LENGTH
from .exceptions import TooLongError
from .types import Buffer

if TYPE_CHECKING:
    from .bytes_deserializer import BytesDeserializer


class Deserializer(ABC):
    # largest length prefix accepted by decoders that read one, `None` disables the check
    max_length: int | None = DEFAULT_BYTES_MAX_LENGTH

    @staticmethod
    def build_bytes_deserializer(
        data: Buffer,
        *,
        max_length: int | None = DEFAULT_BYTES_MAX_LENGTH,
    ) -> BytesDeserializer:
        from .bytes_deserializer import BytesDeserializer
        return BytesDeserializer(data, max_length=max_length)

    @abstractmethod
    def finalize(self) -> None:
        """Assert that all the data was consumed, raises BadDataError otherwise."""
        raise NotImplementedError

    @abstractmethod
    def is_empty(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def cur_pos(self) -> int:
        """Position of the read cursor, counted from the start of the data."""
        raise NotImplementedError

    @abstractmethod
    def read_byte(self) -> int:
        """Read a single byte as unsigned int."""
        raise NotImplementedError

    @abstractmethod
    def _read_bytes(self, n: int) -> memoryview:
        # XXX: it is recommended that implementors of Deserializer specialize this implementation
        return memoryview(bytes(self.read_byte() for _ in range(n)))

    @final
    def read_bytes(self, n: int, *, max_bytes: int | None = DEFAULT_BYTES_MAX_LENGTH) -> memoryview:
        """Read n bytes, errors if there isn't enough data"""
        if max_bytes is not None and n > max_bytes:
            raise TooLongError('requested length exceeds maximum length', offset=self.cur_pos())
        return self._read_bytes(n)

    def read_struct(self, format: str) -> tuple[Any, ...]:
        size = struct.calcsize(format)
        data = self.read_bytes(size, max_bytes=None)
        return struct.unpack_from(format, data)
