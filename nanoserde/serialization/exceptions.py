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

from nanoserde.exception import NanoserdeError


class SerializationError(NanoserdeError):
    """Base class for errors raised by the binary wire format.

    When the error happens while decoding, `offset` holds the position of the decoder cursor.
    """

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is None:
            return self.message
        return f'{self.message} (at offset {self.offset})'


class OutOfDataError(SerializationError):
    """Not enough bytes remain at the decoder cursor."""

    def __init__(self, *, offset: int, wanted: int, size: int) -> None:
        super().__init__(f'not enough data, wanted {wanted} bytes but size is {size}', offset=offset)
        self.wanted = wanted
        self.size = size


class TooLongError(SerializationError):
    """A length is above the allowed maximum."""
    pass


class OutOfRangeError(SerializationError):
    """A decoded value cannot be represented at the destination width."""
    pass


class BadDataError(SerializationError):
    """The bytes were read but do not form a valid value (invalid utf-8, duration nanos, trailing data, ...)."""
    pass


class UnknownVariantError(BadDataError):
    """A variant tag does not match any declared variant."""

    def __init__(self, tag: int, *, variants: int, offset: int | None = None) -> None:
        super().__init__(f'variant tag {tag} out of range, there are {variants} variants', offset=offset)
        self.tag = tag
