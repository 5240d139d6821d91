"""Tokenizer for provider source files.

Produces a flat token list in which classified tokens are ``Token`` tuples and
any other character is returned on its own as a plain one-character string.
"""

import re
from typing import List, NamedTuple, Union

OPEN_TAG = "OPEN_TAG"
CLOSE_TAG = "CLOSE_TAG"
WHITESPACE = "WHITESPACE"
DOC_COMMENT = "DOC_COMMENT"
COMMENT = "COMMENT"
STRING = "STRING"
VARIABLE = "VARIABLE"
NUMBER = "NUMBER"
NAME = "NAME"
NAMESPACE = "NAMESPACE"
CLASS = "CLASS"
NS_SEPARATOR = "NS_SEPARATOR"
DOUBLE_COLON = "DOUBLE_COLON"
OBJECT_OPERATOR = "OBJECT_OPERATOR"

# Words lexed as NAME that get their own kind
KEYWORDS = {
    "namespace": NAMESPACE,
    "class": CLASS,
}

_TOKEN_RE = re.compile(
    r"""
    (?P<OPEN_TAG><\?(?:php\b|=)?)
  | (?P<CLOSE_TAG>\?>)
  | (?P<WHITESPACE>\s+)
  | (?P<DOC_COMMENT>(?s:/\*\*(?!/).*?(?:\*/|\Z)))
  | (?P<COMMENT>(?s:/\*.*?(?:\*/|\Z))|//[^\r\n]*|\#(?!\[)[^\r\n]*)
  | (?P<STRING>(?s:'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*"))
  | (?P<VARIABLE>\$[A-Za-z_]\w*)
  | (?P<NUMBER>\d+(?:\.\d+)?)
  | (?P<NAME>\\?[A-Za-z_]\w*(?:\\[A-Za-z_]\w*)*)
  | (?P<NS_SEPARATOR>\\)
  | (?P<DOUBLE_COLON>::)
  | (?P<OBJECT_OPERATOR>\??->)
  | (?P<CHAR>(?s:.))
    """,
    re.VERBOSE,
)


class Token(NamedTuple):
    """A classified token."""

    kind: str
    text: str


TokenLike = Union[Token, str]


def tokenize(source: str) -> List[TokenLike]:
    """
    Split source text into tokens.

    Args:
        source: Full file contents.

    Returns:
        Token list covering the whole input; unclassified characters are
        plain strings of length one.
    """
    tokens: List[TokenLike] = []
    for match in _TOKEN_RE.finditer(source):
        kind = match.lastgroup
        text = match.group()
        if kind == "CHAR":
            tokens.append(text)
            continue
        if kind == NAME:
            kind = KEYWORDS.get(text.lower(), NAME)
        tokens.append(Token(kind, text))
    return tokens


def is_classified(token: TokenLike) -> bool:
    """Return True for ``Token`` values, False for bare characters."""
    return isinstance(token, Token)
