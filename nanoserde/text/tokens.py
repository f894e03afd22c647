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

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TokenKind(Enum):
    """ Kinds of tokens produced by the text lexers, RON uses a few that JSON does not and vice-versa.

    The values are the names used when a token shows up in an error message.
    """
    STR = 'Str'
    CHAR = 'Char'
    U64 = 'U64'
    I64 = 'I64'
    F64 = 'F64'
    BOOL = 'Bool'
    NULL = 'Null'
    COLON = 'Colon'
    COMMA = 'Comma'
    CURLY_OPEN = 'CurlyOpen'
    CURLY_CLOSE = 'CurlyClose'
    BLOCK_OPEN = 'BlockOpen'
    BLOCK_CLOSE = 'BlockClose'
    PAREN_OPEN = 'ParenOpen'
    PAREN_CLOSE = 'ParenClose'
    IDENT = 'Ident'
    BARE_IDENT = 'BareIdent'
    EOF = 'Eof'


# kinds that carry a value in `Token.value`
_VALUED_KINDS = frozenset({TokenKind.CHAR, TokenKind.U64, TokenKind.I64, TokenKind.F64, TokenKind.BOOL})

# kinds that are a complete value by themselves
SCALAR_KINDS = frozenset({
    TokenKind.STR,
    TokenKind.CHAR,
    TokenKind.U64,
    TokenKind.I64,
    TokenKind.F64,
    TokenKind.BOOL,
    TokenKind.NULL,
    TokenKind.IDENT,
})


@dataclass(frozen=True, slots=True)
class Token:
    """ A lexed token, numbers, booleans and characters carry their value.

    Text of strings and identifiers is kept in the state's `strbuf` and `identbuf`, like the other buffers.

    >>> str(Token(TokenKind.U64, 5))
    'U64(5)'
    >>> str(Token(TokenKind.BOOL, True))
    'Bool(true)'
    >>> str(Token(TokenKind.CURLY_OPEN))
    'CurlyOpen'
    """
    kind: TokenKind
    value: Any = None

    def __str__(self) -> str:
        if self.kind not in _VALUED_KINDS:
            return self.kind.value
        if self.kind is TokenKind.BOOL:
            return f'{self.kind.value}({"true" if self.value else "false"})'
        if self.kind is TokenKind.CHAR:
            return f'{self.kind.value}({self.value!r})'
        return f'{self.kind.value}({self.value})'


EOF_TOKEN = Token(TokenKind.EOF)
