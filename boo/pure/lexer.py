"""Lexical analysis for Boo: turns source text into a flat list of Tokens.

```
<integer>    ::= [0-9][0-9_]*                 ; '_' separators are stripped; a leading '-' is a separate operator token
<identifier> ::= [a-zA-Z_][a-zA-Z0-9_]*       ; except the keywords below, and the lone '_' wildcard
<keyword>    ::= "fn" | "let" | "in" | "match"
<operator>   ::= "+" | "-" | "*"
<symbol>     ::= "->" | "=" | "(" | ")" | "{" | "}" | ";"
```

Whitespace (including newlines) only separates tokens. The token list always ends with an END token, positioned at the
end of the source.
"""

import re
from dataclasses import dataclass
from enum import Enum

from boo.lang.error import LexError


class TokenKind(Enum):
    INTEGER = "an integer"
    IDENTIFIER = "an identifier"
    FN = "'fn'"
    LET = "'let'"
    IN = "'in'"
    MATCH = "'match'"
    ANYTHING = "'_'"
    OPERATOR = "an operator"
    ARROW = "'->'"
    ASSIGN = "'='"
    START_GROUP = "'('"
    END_GROUP = "')'"
    BLOCK_START = "'{'"
    BLOCK_END = "'}'"
    SEPARATOR = "';'"
    END = "end of input"


KEYWORDS = {
    "fn": TokenKind.FN,
    "let": TokenKind.LET,
    "in": TokenKind.IN,
    "match": TokenKind.MATCH,
    "_": TokenKind.ANYTHING,
}

SYMBOLS = {
    "->": TokenKind.ARROW,
    "=": TokenKind.ASSIGN,
    "(": TokenKind.START_GROUP,
    ")": TokenKind.END_GROUP,
    "{": TokenKind.BLOCK_START,
    "}": TokenKind.BLOCK_END,
    ";": TokenKind.SEPARATOR,
}

# order matters: "->" must be tried before the "-" operator
PATTERN = re.compile(r"""
    (?P<space>\s+)
  | (?P<integer>[0-9][0-9_]*)
  | (?P<name>[a-zA-Z_][a-zA-Z0-9_]*)
  | (?P<symbol>->|[=(){};])
  | (?P<operator>[+\-*])
""", re.VERBOSE)


@dataclass(frozen=True)
class Token:
    """A lexeme, with its kind and its [start, end) offsets in the source."""
    kind: TokenKind
    text: str
    start: int
    end: int

    @property
    def value(self):
        """The digits of an INTEGER token, separators removed."""
        return self.text.replace("_", "")

    def __str__(self):
        return self.text if self.text else self.kind.value


def tokenize(source):
    """Returns the list of Tokens in source. Raises a LexError on the first character that cannot start a token."""
    tokens = []
    position = 0

    while position < len(source):
        match = PATTERN.match(source, position)
        if match is None:
            raise LexError(source, position)

        group, text = match.lastgroup, match.group()
        if group == "integer":
            kind = TokenKind.INTEGER
        elif group == "name":
            kind = KEYWORDS.get(text, TokenKind.IDENTIFIER)
        elif group == "symbol":
            kind = SYMBOLS[text]
        elif group == "operator":
            kind = TokenKind.OPERATOR
        else:
            kind = None

        if kind is not None:
            tokens.append(Token(kind, text, match.start(), match.end()))
        position = match.end()

    tokens.append(Token(TokenKind.END, "", len(source), len(source)))
    return tokens
