from __future__ import annotations

import re
from enum import Enum
from typing import Iterator, List, NamedTuple

from gridgeo.utils.exceptions import MalformedGeometryError


class TokenType(Enum):
    """
    Lexical categories of well-known text.

    Values:
        WORD: A keyword such as POLYGON or EMPTY
        NUMBER: A decimal number, optionally signed and in exponent form
        LPAREN: "("
        RPAREN: ")"
        COMMA: ","
        END: The end of the input
    """

    WORD = "word"
    NUMBER = "number"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    END = "end"


class Token(NamedTuple):
    type: TokenType
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<number>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?(?![0-9.+\-]))
    |(?P<word>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<lparen>\()
    |(?P<rparen>\))
    |(?P<comma>,)
    """,
    re.VERBOSE,
)

_GROUP_TYPES = {
    "number": TokenType.NUMBER,
    "word": TokenType.WORD,
    "lparen": TokenType.LPAREN,
    "rparen": TokenType.RPAREN,
    "comma": TokenType.COMMA,
}


def iter_tokens(text: str) -> Iterator[Token]:
    """
    Yield the tokens of a WKT string, ending with a single END token.

    Whitespace is skipped. Keywords are returned upper-cased so callers can compare
    them directly.

    Raises:
        MalformedGeometryError: On a character that cannot start any token
    """
    position = 0
    while position < len(text):
        m = _TOKEN_RE.match(text, position)
        if m is None:
            raise MalformedGeometryError(
                f"unexpected character {text[position]!r}", position
            )

        kind = m.lastgroup
        if kind != "space":
            token_type = _GROUP_TYPES[kind]
            value = m.group()
            if token_type is TokenType.WORD:
                value = value.upper()
            yield Token(token_type, value, position)

        position = m.end()

    yield Token(TokenType.END, "", position)


def tokenize(text: str) -> List[Token]:
    return list(iter_tokens(text))
