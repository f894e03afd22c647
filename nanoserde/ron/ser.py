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

_ESCAPES = {
    ord('\n'): '\\n',
    ord('\r'): '\\r',
    ord('\t'): '\\t',
    ord('\0'): '\\0',
    ord('\\'): '\\\\',
    ord('"'): '\\"',
}


def escape_ron_string(value: str) -> str:
    """ Quote and escape a string.

    >>> escape_ron_string('a\\tb"')
    '"a\\\\tb\\\\""'
    """
    return '"' + value.translate(_ESCAPES) + '"'


def escape_ron_char(value: str) -> str:
    """ Quote a character literal, quotes and backslashes are escaped with a backslash.

    >>> escape_ron_char('x')
    "'x'"
    >>> escape_ron_char("'")
    "'\\\\''"
    """
    if value == "'" or value == '\\':
        return f"'\\{value}'"
    return f"'{value}'"


class SerRonState(SerTextState):
    """Output buffer of the RON encoder, records and collections are written one item per line."""

    __slots__ = ('_indent_width',)

    def __init__(self, *, indent_width: int = 4) -> None:
        super().__init__()
        self._indent_width = indent_width

    def indent(self, depth: int) -> None:
        self.push(' ' * (depth * self._indent_width))

    def field(self, depth: int, name: str) -> None:
        self.indent(depth)
        self.push(name)
        self.push(':')

    def conl(self) -> None:
        self.push(',\n')

    def st_pre(self) -> None:
        self.push('(\n')

    def st_post(self, depth: int) -> None:
        self.indent(depth)
        self.push(')')

    def string(self, value: str) -> None:
        self.push(escape_ron_string(value))
