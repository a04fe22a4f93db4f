"""Split descriptor strings into tokens, keeping parenthesised runs whole."""

from typing import List

from rowsift.extract.types import MediaCategory


def delimiter_for(category: MediaCategory) -> str:
    """Music descriptors are slash-separated; everything else uses pipes."""
    return "/" if category is MediaCategory.MUSIC else "|"


def tokenize(text: str, delimiter: str = "|") -> List[str]:
    """
    Split ``text`` on ``delimiter`` only at parenthesis depth zero.

    Tokens are trimmed and empty tokens dropped. An unclosed ``(`` keeps the
    rest of the string at depth > 0, so it is never split again; a stray
    ``)`` pushes depth below zero with the same effect.
    """
    if not text:
        return []

    tokens: List[str] = []
    current: List[str] = []
    depth = 0

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == delimiter and depth == 0:
            tokens.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    tokens.append("".join(current).strip())
    return [token for token in tokens if token]
