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
Errors raised by the text format decoders.

Every error carries the position of the decoder when it failed and a reason, reasons form a closed set:

>>> str(DeJsonError(OutOfRange('2147483648>2147483647'), line=0, col=18))
'Json Deserialize error: Value out of range 2147483648>2147483647 , line:1 col:19'
>>> str(DeRonError(MissingKey('a'), line=2, col=0))
'Ron Deserialize error: Key not found a, line:3 col:1'
"""

from dataclasses import dataclass
from typing import ClassVar

from nanoserde.exception import NanoserdeError
from nanoserde.text.tokens import Token


class ErrorReason:
    """Base class of the reasons a text decoder can fail."""
    __slots__ = ()


@dataclass(frozen=True, slots=True)
class UnexpectedToken(ErrorReason):
    token: Token
    expected: str

    def __str__(self) -> str:
        return f'Unexpected token {self.token} expected {self.expected} '


@dataclass(frozen=True, slots=True)
class UnexpectedKey(ErrorReason):
    name: str

    def __str__(self) -> str:
        return f'Unexpected key {self.name}'


@dataclass(frozen=True, slots=True)
class MissingKey(ErrorReason):
    name: str

    def __str__(self) -> str:
        return f'Key not found {self.name}'


@dataclass(frozen=True, slots=True)
class NoSuchEnum(ErrorReason):
    name: str

    def __str__(self) -> str:
        return f'Enum not defined {self.name}'


@dataclass(frozen=True, slots=True)
class OutOfRange(ErrorReason):
    value: str

    def __str__(self) -> str:
        return f'Value out of range {self.value} '


@dataclass(frozen=True, slots=True)
class WrongType(ErrorReason):
    what: str

    def __str__(self) -> str:
        return f'Token wrong type {self.what} '


@dataclass(frozen=True, slots=True)
class CannotParse(ErrorReason):
    what: str

    def __str__(self) -> str:
        return f'Cannot parse {self.what} '


class DeTextError(NanoserdeError):
    """Base class for text decoding errors, `line` and `col` are 0-based and rendered 1-based."""

    format_name: ClassVar[str] = 'Text'

    def __init__(self, reason: ErrorReason, *, line: int, col: int) -> None:
        self.reason = reason
        self.line = line
        self.col = col
        super().__init__(str(self))

    def __str__(self) -> str:
        return f'{self.format_name} Deserialize error: {self.reason}, line:{self.line + 1} col:{self.col + 1}'


class DeJsonError(DeTextError):
    format_name = 'Json'


class DeRonError(DeTextError):
    format_name = 'Ron'
