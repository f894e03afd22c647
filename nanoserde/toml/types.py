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

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True, slots=True)
class TomlStr:
    value: str


@dataclass(frozen=True, slots=True)
class TomlBool:
    value: bool


@dataclass(frozen=True, slots=True)
class TomlNum:
    """All numbers are floats, integers included."""
    value: float


@dataclass(frozen=True, slots=True)
class TomlDate:
    """A date or date-time, kept as the text it was written with."""
    value: str


@dataclass(frozen=True, slots=True)
class TomlArray:
    """The tables of a `[[name]]` array, one per header, in document order."""
    value: list[dict[str, 'TomlValue']] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class TomlSimpleArray:
    """A `[a, b, ...]` array of values, items may have different types."""
    value: list['TomlValue'] = field(default_factory=list)


TomlValue = Union[TomlStr, TomlBool, TomlNum, TomlDate, TomlArray, TomlSimpleArray]
