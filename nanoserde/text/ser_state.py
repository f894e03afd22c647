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

class SerTextState:
    """ Output buffer of a text encoder.

    Pieces are pushed into a list and joined once at the end, encoders never build intermediate strings for nested
    values.
    """

    __slots__ = ('_parts',)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def push(self, text: str) -> None:
        self._parts.append(text)

    def finalize(self) -> str:
        return ''.join(self._parts)
