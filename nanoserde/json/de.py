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
from nanoserde.text.errors import DeJsonError, DeTextError
from nanoserde.text.tokens import EOF_TOKEN, Token, TokenKind

_PUNCTUATION = {
    ':': TokenKind.COLON,
    ',': TokenKind.COMMA,
    '[': TokenKind.BLOCK_OPEN,
    ']': TokenKind.BLOCK_CLOSE,
    '{': TokenKind.CURLY_OPEN,
    '}': TokenKind.CURLY_CLOSE,
}

_KEYWORDS = {
    'true': Token(TokenKind.BOOL, True),
    'false': Token(TokenKind.BOOL, False),
    'null': Token(TokenKind.NULL),
}


def _is_ident_char(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z' or c == '_'


class DeJsonState(DeTextState):
    """ JSON lexer.

    Besides strict JSON it accepts `//` and `/* */` comments, a leading `+` on numbers and trailing commas, each one
    can be turned off in the codec settings.
    """

    error_class: ClassVar[type[DeTextError]] = DeJsonError

    @override
    def next_tok(self) -> None:
        while True:
            self._skip_whitespace()
            self.mark_token()
            if self.cur == '/' and self.settings.JSON_ALLOW_COMMENTS:
                self._skip_comment()
                continue
            break

        cur = self.cur
        if cur == '':
            self.tok = EOF_TOKEN
        elif cur in _PUNCTUATION:
            self.next()
            self.tok = Token(_PUNCTUATION[cur])
        elif cur == '-' or '0' <= cur <= '9' or (cur == '+' and self.settings.JSON_ALLOW_PLUS_SIGN):
            self._lex_number()
        elif _is_ident_char(cur):
            chars: list[str] = []
            while _is_ident_char(self.cur):
                chars.append(self.cur)
                self.next()
            self.identbuf = ''.join(chars)
            keyword = _KEYWORDS.get(self.identbuf)
            if keyword is not None:
                self.tok = keyword
            else:
                self.tok = Token(TokenKind.BARE_IDENT)
                raise self.err_token(f'Got ##{self.identbuf}## needed true, false, null')
        elif cur == '"':
            self._lex_string()
        elif cur == '/':
            raise self.err_token('CommentOpen')
        else:
            raise self.err_token('tokenizer')

    @override
    def _err_comment(self, *, unterminated: bool) -> DeTextError:
        return self.err_token('MultiLineCommentClose' if unterminated else 'CommentOpen')

    @override
    def _allow_trailing_comma(self) -> bool:
        return self.settings.JSON_ALLOW_TRAILING_COMMA

    @override
    def as_char(self) -> str:
        if self.tok.kind is TokenKind.STR:
            if len(self.strbuf) != 1:
                raise self.err_type(f'expected a single character, got {len(self.strbuf)}')
            return self.strbuf
        raise self.err_token('string')

    @override
    def as_unit(self) -> None:
        if self.tok.kind is not TokenKind.NULL:
            raise self.err_token('null')
        self.next_tok()
