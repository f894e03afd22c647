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

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar

from nanoserde.text.errors import (
    CannotParse,
    DeTextError,
    ErrorReason,
    MissingKey,
    NoSuchEnum,
    OutOfRange,
    UnexpectedKey,
    UnexpectedToken,
    WrongType,
)
from nanoserde.text.tokens import EOF_TOKEN, SCALAR_KINDS, Token, TokenKind

if TYPE_CHECKING:
    from nanoserde.conf.settings import CodecSettings

_WHITESPACE = frozenset('\n\r\t ')

_SIMPLE_ESCAPES = {
    'n': '\n',
    'r': '\r',
    't': '\t',
    'b': '\x08',
    'f': '\x0c',
    '0': '\0',
}


def _hex_digit(c: str) -> int | None:
    if '0' <= c <= '9':
        return ord(c) - ord('0')
    if 'a' <= c <= 'f':
        return ord(c) - ord('a') + 10
    if 'A' <= c <= 'F':
        return ord(c) - ord('A') + 10
    return None


class DeTextState(ABC):
    """ Lexer and parser state for one text document.

    The state reads the input one character at a time, `cur` is the current character (an empty string at the end of
    the input) and `tok` the current token. Value decoders look at `tok`, consume it and call `next_tok()`, so after
    decoding a value the state is always positioned at the token that follows it.

    A state is created for exactly one document and thrown away after it.
    """

    # XXX: subclasses must define which error class they raise
    error_class: ClassVar[type[DeTextError]]

    def __init__(self, text: str, *, settings: CodecSettings | None = None) -> None:
        if settings is None:
            from nanoserde.conf.get_settings import get_global_settings
            settings = get_global_settings()
        self.settings = settings
        self._text = text
        self._pos = 0
        self.cur = ''
        self.tok: Token = EOF_TOKEN
        self.strbuf = ''
        self.identbuf = ''
        self.line = 0
        self.col = 0
        # where the current token started, errors are reported there
        self.tok_line = 0
        self.tok_col = 0

    def start(self) -> None:
        """Read the first character and the first token, must be called once before decoding."""
        self.next()
        self.next_tok()

    def next(self) -> None:
        """Advance to the next character, keeping track of line and column."""
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

    def mark_token(self) -> None:
        """Remember the position of `cur` as the start of the token being lexed."""
        self.tok_line = self.line
        self.tok_col = self.col - 1 if self.cur else self.col

    @abstractmethod
    def next_tok(self) -> None:
        """Lex the next token into `tok`."""
        raise NotImplementedError

    # errors, these return the exception so the caller can `raise` it

    def _error(self, reason: ErrorReason) -> DeTextError:
        return self.error_class(reason, line=self.tok_line, col=self.tok_col)

    def err_exp(self, name: str) -> DeTextError:
        return self._error(UnexpectedKey(name))

    def err_nf(self, name: str) -> DeTextError:
        return self._error(MissingKey(name))

    def err_enum(self, name: str) -> DeTextError:
        return self._error(NoSuchEnum(name))

    def err_token(self, what: str) -> DeTextError:
        return self._error(UnexpectedToken(self.tok, what))

    def err_range(self, what: str) -> DeTextError:
        return self._error(OutOfRange(what))

    def err_type(self, what: str) -> DeTextError:
        return self._error(WrongType(what))

    def err_parse(self, what: str) -> DeTextError:
        return self._error(CannotParse(what))

    # lexing helpers

    def _skip_whitespace(self) -> None:
        while self.cur in _WHITESPACE:
            self.next()

    @abstractmethod
    def _err_comment(self, *, unterminated: bool) -> DeTextError:
        raise NotImplementedError

    def _skip_comment(self) -> None:
        """Skip a `// ...` or `/* ... */` comment, the current character is the opening `/`."""
        self.next()
        if self.cur == '/':
            while self.cur != '\n' and self.cur != '':
                self.next()
        elif self.cur == '*':
            self.next()
            last = ''
            while not (last == '*' and self.cur == '/'):
                if self.cur == '':
                    raise self._err_comment(unterminated=True)
                last = self.cur
                self.next()
            self.next()
        else:
            raise self._err_comment(unterminated=False)

    def _lex_digits(self, chars: list[str]) -> None:
        while '0' <= self.cur <= '9':
            chars.append(self.cur)
            self.next()

    def _lex_number(self) -> None:
        """Lex a number: a float when it has a fraction or exponent, otherwise a signed or unsigned integer."""
        chars: list[str] = []
        is_neg = False
        if self.cur == '-' or self.cur == '+':
            is_neg = self.cur == '-'
            chars.append(self.cur)
            self.next()
        self._lex_digits(chars)
        is_float = False
        if self.cur == '.':
            is_float = True
            chars.append(self.cur)
            self.next()
            self._lex_digits(chars)
        if self.cur == 'e' or self.cur == 'E':
            is_float = True
            chars.append(self.cur)
            self.next()
            if self.cur == '-' or self.cur == '+':
                chars.append(self.cur)
                self.next()
            self._lex_digits(chars)
        text = ''.join(chars)
        try:
            if is_float:
                self.tok = Token(TokenKind.F64, float(text))
            elif is_neg:
                self.tok = Token(TokenKind.I64, int(text))
            else:
                self.tok = Token(TokenKind.U64, int(text))
        except ValueError:
            raise self.err_parse('number')

    def _xdigit4(self) -> int | None:
        value = 0
        for _ in range(4):
            digit = _hex_digit(self.cur)
            if digit is None:
                return None
            value = (value << 4) | digit
            self.next()
        return value

    def _hex_unescape_char(self) -> str | None:
        """ Read the `XXXX` of a `\\uXXXX` escape, the current character is the `u`.

        A leading surrogate must be immediately followed by a `\\uXXXX` trailing surrogate, the pair is combined into
        a single character. Returns None on bad hex digits or unpaired surrogates.
        """
        self.next()
        a = self._xdigit4()
        if a is None:
            return None
        if not 0xD800 <= a < 0xE000:
            return chr(a)
        if 0xD800 <= a < 0xDC00 and self.cur == '\\':
            self.next()
            if self.cur == 'u':
                self.next()
                b = self._xdigit4()
                if b is not None and 0xDC00 <= b < 0xE000:
                    return chr((((a - 0xD800) << 10) | (b - 0xDC00)) + 0x10000)
        return None

    def _lex_string(self) -> None:
        """Lex a `"..."` string into `strbuf`, the current character is the opening quote."""
        chars: list[str] = []
        self.next()
        while self.cur != '"':
            if self.cur == '\\':
                self.next()
                if self.cur == '':
                    raise self.err_parse('string')
                if self.cur == 'u':
                    c = self._hex_unescape_char()
                    if c is None:
                        raise self.err_parse('string')
                    chars.append(c)
                    continue
                chars.append(_SIMPLE_ESCAPES.get(self.cur, self.cur))
                self.next()
            else:
                if self.cur == '':
                    raise self.err_parse('string')
                chars.append(self.cur)
                self.next()
        self.next()
        self.strbuf = ''.join(chars)
        self.tok = Token(TokenKind.STR)

    # punctuation

    def _expect(self, kind: TokenKind, what: str) -> None:
        if self.tok.kind is not kind:
            raise self.err_token(what)
        self.next_tok()

    def colon(self) -> None:
        self._expect(TokenKind.COLON, ':')

    def next_colon(self) -> None:
        self.next_tok()
        self.colon()

    def curly_open(self) -> None:
        self._expect(TokenKind.CURLY_OPEN, '{')

    def curly_close(self) -> None:
        self._expect(TokenKind.CURLY_CLOSE, '}')

    def block_open(self) -> None:
        self._expect(TokenKind.BLOCK_OPEN, '[')

    def block_close(self) -> None:
        self._expect(TokenKind.BLOCK_CLOSE, ']')

    def string(self) -> None:
        self._expect(TokenKind.STR, 'String')

    def next_str(self) -> bool:
        return self.tok.kind is TokenKind.STR

    def _allow_trailing_comma(self) -> bool:
        return True

    def _eat_comma(self, close: TokenKind, what: str) -> None:
        if self.tok.kind is TokenKind.COMMA:
            self.next_tok()
            if self.tok.kind is close and not self._allow_trailing_comma():
                raise self.err_token('value')
        elif self.tok.kind is not close:
            raise self.err_token(what)

    def eat_comma_block(self) -> None:
        self._eat_comma(TokenKind.BLOCK_CLOSE, ', or ]')

    def eat_comma_curly(self) -> None:
        self._eat_comma(TokenKind.CURLY_CLOSE, ', or }')

    def whole_field(self) -> None:
        """Skip a whole value: a scalar token or a balanced `{...}`/`[...]`/`(...)` subtree."""
        if self.tok.kind in SCALAR_KINDS:
            self.next_tok()
            return
        opening = (TokenKind.BLOCK_OPEN, TokenKind.CURLY_OPEN, TokenKind.PAREN_OPEN)
        closing = (TokenKind.BLOCK_CLOSE, TokenKind.CURLY_CLOSE, TokenKind.PAREN_CLOSE)
        if self.tok.kind not in opening:
            raise self.err_token('value')
        depth = 0
        while True:
            if self.tok.kind in opening:
                depth += 1
            elif self.tok.kind in closing:
                depth -= 1
            elif self.tok.kind is TokenKind.EOF:
                raise self.err_token('value')
            self.next_tok()
            if depth == 0:
                break

    # scalar readers, these look at the current token without consuming it

    def as_uint(self, max_value: int) -> int:
        if self.tok.kind is TokenKind.U64:
            value = self.tok.value
            if value > max_value:
                raise self.err_range(f'{value}>{max_value}')
            return value
        raise self.err_token('unsigned integer')

    def as_int(self, min_value: int, max_value: int) -> int:
        if self.tok.kind is TokenKind.I64 or self.tok.kind is TokenKind.U64:
            value = self.tok.value
            if value < min_value:
                raise self.err_range(f'{value}<{min_value}')
            if value > max_value:
                raise self.err_range(f'{value}>{max_value}')
            return value
        raise self.err_token('signed integer')

    def as_float(self) -> float:
        if self.tok.kind in (TokenKind.I64, TokenKind.U64, TokenKind.F64):
            try:
                return float(self.tok.value)
            except OverflowError:
                raise self.err_range(f'{self.tok.value}')
        raise self.err_token('floating point')

    def as_bool(self) -> bool:
        if self.tok.kind is TokenKind.BOOL:
            return self.tok.value
        raise self.err_token('boolean')

    def as_string(self) -> str:
        if self.tok.kind is TokenKind.STR:
            return self.strbuf
        raise self.err_token('string')

    @abstractmethod
    def as_char(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def as_unit(self) -> None:
        """Check that the current tokens form a unit value and consume them."""
        raise NotImplementedError
