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

from nanoserde.text.ser_state import SerTextState


def _build_escapes() -> dict[int, str]:
    escapes = {c: f'\\u{c:04x}' for c in range(0x20)}
    escapes.update({
        0x08: '\\b',
        0x09: '\\t',
        0x0A: '\\n',
        0x0C: '\\f',
        0x0D: '\\r',
        0x22: '\\"',
        0x5C: '\\\\',
        0x7F: '\\u007f',
    })
    return escapes


_ESCAPES = _build_escapes()


def escape_json_string(value: str) -> str:
    """ Quote and escape a string, every control character is escaped.

    >>> escape_json_string('a"b\\\\c')
    '"a\\\\"b\\\\\\\\c"'
    >>> escape_json_string('\\x00\\x1f\\n')
    '"\\\\u0000\\\\u001f\\\\n"'
    """
    return '"' + value.translate(_ESCAPES) + '"'


class SerJsonState(SerTextState):
    """Output buffer of the JSON encoder, no whitespace is ever written."""

    __slots__ = ()

    def label(self, name: str) -> None:
        self.push(escape_json_string(name))

    def field(self, name: str) -> None:
        self.label(name)
        self.push(':')

    def string(self, value: str) -> None:
        self.push(escape_json_string(value))
