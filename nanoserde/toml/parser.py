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
A small TOML reader for configuration files.

The result is a flat mapping, keys of a `[section]` are prefixed with the section name and a dot. Tables of a
`[[name]]` array are kept in a `TomlArray` stored under `name`.

>>> parse_toml('[server]\\nport = 8080\\nname = "main"')
{'server.port': TomlNum(value=8080.0), 'server.name': TomlStr(value='main')}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from structlog import get_logger

from nanoserde.toml.exceptions import TomlError
from nanoserde.toml.types import TomlArray, TomlBool, TomlDate, TomlNum, TomlSimpleArray, TomlStr, TomlValue

logger = get_logger()

# unicode ranges allowed in bare keys, besides these `.` joins dotted keys
_IDENT_RANGES = (
    (0x30, 0x39),
    (0x41, 0x5A),
    (0x61, 0x7A),
    (0x2D, 0x2D),
    (0x5F, 0x5F),
    (0xB2, 0xB3),
    (0xB9, 0xB9),
    (0xBC, 0xBE),
    (0xC0, 0xD6),
    (0xD8, 0xF6),
    (0xF8, 0x37D),
    (0x37F, 0x1FFF),
    (0x200C, 0x200D),
    (0x203F, 0x2040),
    (0x2070, 0x218F),
    (0x2460, 0x24FF),
    (0x2C00, 0x2FEF),
    (0x3001, 0xD7FF),
    (0xF900, 0xFDCF),
    (0xFDF0, 0xFFFD),
    (0x10000, 0xEFFFF),
)

# characters that may follow a bare key or keyword
_IDENT_TERMINATORS = frozenset(' \t\r\n=],')

_WHITESPACE = frozenset('\n\r\t ')


def _is_ident_char(c: str) -> bool:
    if c == '':
        return False
    code = ord(c)
    return any(low <= code <= high for low, high in _IDENT_RANGES)


def _is_ident_end(c: str) -> bool:
    return c == '' or c in _IDENT_TERMINATORS


class TomlTokenKind(Enum):
    IDENT = 'Ident'
    STR = 'Str'
    U64 = 'U64'
    I64 = 'I64'
    F64 = 'F64'
    BOOL = 'Bool'
    NAN = 'Nan'
    INF = 'Inf'
    DATE = 'Date'
    EQUALS = 'Equals'
    BLOCK_OPEN = 'BlockOpen'
    BLOCK_CLOSE = 'BlockClose'
    COMMA = 'Comma'
    EOF = 'Eof'


# tokens that can be used as a key, numbers and keywords are keys when they are on the left of `=`
_KEY_KINDS = frozenset({
    TomlTokenKind.IDENT,
    TomlTokenKind.STR,
    TomlTokenKind.U64,
    TomlTokenKind.I64,
    TomlTokenKind.F64,
    TomlTokenKind.BOOL,
    TomlTokenKind.NAN,
    TomlTokenKind.INF,
    TomlTokenKind.DATE,
})


@dataclass(frozen=True, slots=True)
class TomlToken:
    kind: TomlTokenKind
    value: Any = None
    # the text the token was read from, used when the token is a key
    text: str = ''

    def __str__(self) -> str:
        if self.value is None:
            return self.kind.value
        return f'{self.kind.value}({self.value!r})'


class _Output:
    """The flat output mapping, with the `[[name]]` table currently receiving keys."""

    def __init__(self) -> None:
        self.out: dict[str, TomlValue] = {}
        self.active: Optional[dict[str, TomlValue]] = None

    def start_array(self, key: str) -> None:
        array = self.out.get(key)
        if not isinstance(array, TomlArray):
            array = TomlArray()
            self.out[key] = array
        table: dict[str, TomlValue] = {}
        array.value.append(table)
        self.active = table

    def end_array(self) -> None:
        self.active = None

    def target(self) -> dict[str, TomlValue]:
        return self.active if self.active is not None else self.out


class TomlParser:
    """Reads one TOML document, use `parse_toml()` instead of this class directly."""

    def __init__(self, text: str) -> None:
        self._text = text
        self.log = logger.new(reader='toml')
        self._pos = 0
        self.cur = ''
        self.line = 0
        self.col = 0
        # where the last token started
        self.tok_line = 0
        self.tok_col = 0

    def parse(self) -> dict[str, TomlValue]:
        self.next()
        out = _Output()
        scope = ''
        while True:
            tok = self.next_tok()
            if tok.kind is TomlTokenKind.EOF:
                break
            if tok.kind is TomlTokenKind.BLOCK_OPEN:
                scope = self._parse_header(out, scope)
            elif tok.kind in _KEY_KINDS:
                self._parse_key_value(scope, tok.text, out.target())
            else:
                raise self.err_token(tok)
        return out.out

    def _parse_header(self, out: _Output, scope: str) -> str:
        """Parse `[name]` or `[[name]]` after the first `[`, returns the new key scope."""
        tok = self.next_tok()
        if tok.kind is TomlTokenKind.STR or tok.kind is TomlTokenKind.IDENT:
            self._expect_block_close()
            out.end_array()
            return tok.text
        if tok.kind is TomlTokenKind.BLOCK_OPEN:
            tok = self.next_tok()
            if tok.kind not in _KEY_KINDS or tok.kind is TomlTokenKind.STR:
                raise self.err_token(tok)
            line = self.tok_line
            self._expect_block_close()
            self._expect_block_close()
            out.start_array(tok.text)
            self.log.debug('table appended', array=tok.text, line=line + 1)
            return ''
        raise self.err_token(tok)

    def _expect_block_close(self) -> None:
        tok = self.next_tok()
        if tok.kind is not TomlTokenKind.BLOCK_CLOSE:
            raise self.err_token(tok)

    def _parse_key_value(self, scope: str, key: str, out: dict[str, TomlValue]) -> None:
        tok = self.next_tok()
        if tok.kind is not TomlTokenKind.EQUALS:
            raise self.err_token(tok)
        value = self._to_value(self.next_tok())
        out[f'{scope}.{key}' if scope else key] = value

    def _to_value(self, tok: TomlToken) -> TomlValue:
        kind = tok.kind
        if kind is TomlTokenKind.BLOCK_OPEN:
            items: list[TomlValue] = []
            while True:
                tok = self.next_tok()
                if tok.kind is TomlTokenKind.BLOCK_CLOSE or tok.kind is TomlTokenKind.EOF:
                    break
                if tok.kind is not TomlTokenKind.COMMA:
                    items.append(self._to_value(tok))
            return TomlSimpleArray(items)
        if kind is TomlTokenKind.STR:
            return TomlStr(tok.value)
        if kind in (TomlTokenKind.U64, TomlTokenKind.I64, TomlTokenKind.F64):
            return TomlNum(float(tok.value))
        if kind is TomlTokenKind.BOOL:
            return TomlBool(tok.value)
        if kind is TomlTokenKind.NAN:
            return TomlNum(-float('nan') if tok.value else float('nan'))
        if kind is TomlTokenKind.INF:
            return TomlNum(-float('inf') if tok.value else float('inf'))
        if kind is TomlTokenKind.DATE:
            return TomlDate(tok.value)
        raise self.err_token(tok)

    def next(self) -> None:
        if self._pos < len(self._text):
            self.cur = self._text[self._pos]
            self._pos += 1
            if self.cur == '\n':
                self.line += 1
                self.col = 0
            else:
                self.col += 1
        else:
            self.cur = ''

    def _mark_token(self) -> None:
        self.tok_line = self.line
        self.tok_col = self.col - 1 if self.cur else self.col

    def err_token(self, tok: TomlToken) -> TomlError:
        return TomlError(f'Unexpected token {tok} ', line=self.tok_line, col=self.tok_col)

    def err_parse(self, what: str) -> TomlError:
        return TomlError(f'Cannot parse toml {what} ', line=self.tok_line, col=self.tok_col)

    def next_tok(self) -> TomlToken:
        while True:
            while self.cur in _WHITESPACE:
                self.next()
            if self.cur != '#':
                break
            while self.cur != '\n' and self.cur != '':
                self.next()
        self._mark_token()

        cur = self.cur
        if cur == '':
            return TomlToken(TomlTokenKind.EOF)
        if cur == ',':
            self.next()
            return TomlToken(TomlTokenKind.COMMA)
        if cur == '[':
            self.next()
            return TomlToken(TomlTokenKind.BLOCK_OPEN)
        if cur == ']':
            self.next()
            return TomlToken(TomlTokenKind.BLOCK_CLOSE)
        if cur == '=':
            self.next()
            return TomlToken(TomlTokenKind.EQUALS)
        if cur == '+' or cur == '-' or '0' <= cur <= '9':
            return self._parse_number()
        if cur == '"':
            value = self._parse_string()
            return TomlToken(TomlTokenKind.STR, value, value)
        if _is_ident_char(cur):
            return self._parse_ident([])
        raise self.err_parse('tokenizer')

    def _parse_string(self) -> str:
        self.next()
        quotes = 1
        while self.cur == '"' and quotes < 3:
            quotes += 1
            self.next()
        if quotes == 2:
            return ''
        multiline = quotes == 3
        chars: list[str] = []
        while True:
            if self.cur == '"':
                if not multiline:
                    break
                run = 0
                while self.cur == '"':
                    run += 1
                    self.next()
                if run >= 3:
                    chars.append('"' * (run - 3))
                    return ''.join(chars)
                chars.append('"' * run)
                continue
            if self.cur == '\\':
                self.next()
            if self.cur == '':
                raise self.err_parse('string')
            chars.append(self.cur)
            self.next()
        self.next()
        return ''.join(chars)

    def _parse_ident(self, chars: list[str]) -> TomlToken:
        """Parse a bare key or keyword, `chars` holds what was already read as part of it."""
        while True:
            while _is_ident_char(self.cur):
                chars.append(self.cur)
                self.next()
            if self.cur != '.':
                break
            chars.append(self.cur)
            self.next()
        if not _is_ident_end(self.cur):
            raise self.err_parse('tokenizer')
        text = ''.join(chars)
        if text == 'true':
            return TomlToken(TomlTokenKind.BOOL, True, text)
        if text == 'false':
            return TomlToken(TomlTokenKind.BOOL, False, text)
        if text == 'inf':
            return TomlToken(TomlTokenKind.INF, False, text)
        if text == 'nan':
            return TomlToken(TomlTokenKind.NAN, False, text)
        return TomlToken(TomlTokenKind.IDENT, text, text)

    def _take_word(self, chars: list[str], word: str) -> bool:
        for c in word:
            if self.cur != c:
                return False
            chars.append(c)
            self.next()
        return _is_ident_end(self.cur)

    def _parse_number(self) -> TomlToken:
        """Parse a number, a date, signed `inf`/`nan`, or a bare key that starts with digits."""
        chars: list[str] = []
        negative = False
        if self.cur == '+':
            self.next()
        elif self.cur == '-':
            chars.append(self.cur)
            negative = True
            self.next()

        if self.cur == 'n' or self.cur == 'i':
            word = 'nan' if self.cur == 'n' else 'inf'
            if self._take_word(chars, word):
                kind = TomlTokenKind.NAN if word == 'nan' else TomlTokenKind.INF
                return TomlToken(kind, negative, ''.join(chars))

        self._take_digits(chars)
        if self.cur == '.':
            chars.append(self.cur)
            self.next()
            self._take_digits(chars)
            text = ''.join(chars)
            try:
                return TomlToken(TomlTokenKind.F64, float(text), text)
            except ValueError:
                raise self.err_parse('number')
        if self.cur == '-':
            # a run of digits followed by `-` is a date, time parts are kept as they are
            chars.append(self.cur)
            self.next()
            while '0' <= self.cur <= '9' or self.cur == ':' or self.cur == '-' or self.cur == 'T':
                chars.append(self.cur)
                self.next()
            text = ''.join(chars)
            return TomlToken(TomlTokenKind.DATE, text, text)

        if _is_ident_char(self.cur):
            return self._parse_ident(chars)

        text = ''.join(chars)
        try:
            number = int(text)
        except ValueError:
            raise self.err_parse('tokenizer')
        return TomlToken(TomlTokenKind.I64 if negative else TomlTokenKind.U64, number, text)

    def _take_digits(self, chars: list[str]) -> None:
        while '0' <= self.cur <= '9' or self.cur == '_':
            if self.cur != '_':
                chars.append(self.cur)
            self.next()


def parse_toml(text: str) -> dict[str, TomlValue]:
    parser = TomlParser(text)
    result = parser.parse()
    logger.debug('toml parsed', keys=len(result))
    return result
