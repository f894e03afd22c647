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

from typing import ClassVar

from typing_extensions import override

from nanoserde.text.de_state import DeTextState
from nanoserde.text.errors import DeRonError, DeTextError
from nanoserde.text.tokens import EOF_TOKEN, SCALAR_KINDS, Token, TokenKind

_PUNCTUATION = {
    ':': TokenKind.COLON,
    ',': TokenKind.COMMA,
    '[': TokenKind.BLOCK_OPEN,
    ']': TokenKind.BLOCK_CLOSE,
    '(': TokenKind.PAREN_OPEN,
    ')': TokenKind.PAREN_CLOSE,
    '{': TokenKind.CURLY_OPEN,
    '}': TokenKind.CURLY_CLOSE,
}


def _is_ident_start(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'


def _is_ident_char(c: str) -> bool:
    return _is_ident_start(c) or '0' <= c <= '9'


class DeRonState(DeTextState):
    """ RON lexer.

    On top of the JSON tokens RON has identifiers, character literals and parentheses. Trailing commas are always
    accepted since the RON writer emits them.
    """

    error_class: ClassVar[type[DeTextError]] = DeRonError

    @override
    def next_tok(self) -> None:
        while True:
            self._skip_whitespace()
            self.mark_token()
            if self.cur == '/':
                self._skip_comment()
                continue
            break

        cur = self.cur
        if cur == '':
            self.tok = EOF_TOKEN
        elif cur in _PUNCTUATION:
            self.next()
            self.tok = Token(_PUNCTUATION[cur])
        elif cur == '.' or cur == '-' or cur == '+' or '0' <= cur <= '9':
            self._lex_number()
        elif _is_ident_start(cur):
            chars: list[str] = []
            while _is_ident_char(self.cur):
                chars.append(self.cur)
                self.next()
            self.identbuf = ''.join(chars)
            if self.identbuf == 'true':
                self.tok = Token(TokenKind.BOOL, True)
            elif self.identbuf == 'false':
                self.tok = Token(TokenKind.BOOL, False)
            else:
                self.tok = Token(TokenKind.IDENT)
        elif cur == "'":
            self._lex_char()
        elif cur == '"':
            self._lex_string()
        else:
            raise self.err_token('tokenizer')

    def _lex_char(self) -> None:
        self.next()
        if self.cur == '\\':
            self.next()
        value = self.cur
        self.next()
        if value == '' or self.cur != "'":
            raise self.err_token('char')
        self.next()
        self.tok = Token(TokenKind.CHAR, value)

    @override
    def _err_comment(self, *, unterminated: bool) -> DeTextError:
        return self.err_parse('comment')

    def next_ident(self) -> bool:
        return self.tok.kind is TokenKind.IDENT

    def ident(self) -> str:
        """Consume an identifier and return its text."""
        if self.tok.kind is not TokenKind.IDENT:
            raise self.err_token('Identifier')
        name = self.identbuf
        self.next_tok()
        return name

    def paren_open(self) -> None:
        self._expect(TokenKind.PAREN_OPEN, '(')

    def paren_close(self) -> None:
        self._expect(TokenKind.PAREN_CLOSE, ')')

    def eat_comma_paren(self) -> None:
        self._eat_comma(TokenKind.PAREN_CLOSE, ', or )')

    @override
    def whole_field(self) -> None:
        # a variant with data is an identifier followed by a parenthesized payload
        if self.tok.kind is TokenKind.IDENT:
            self.next_tok()
            if self.tok.kind is TokenKind.PAREN_OPEN:
                super().whole_field()
            return
        if self.tok.kind in SCALAR_KINDS:
            self.next_tok()
            return
        super().whole_field()

    @override
    def as_bool(self) -> bool:
        if self.tok.kind is TokenKind.U64 and self.settings.RON_ALLOW_NUMERIC_BOOL:
            return self.tok.value != 0
        return super().as_bool()

    @override
    def as_char(self) -> str:
        if self.tok.kind is TokenKind.CHAR:
            return self.tok.value
        raise self.err_token('char')

    @override
    def as_unit(self) -> None:
        self.paren_open()
        self.paren_close()
