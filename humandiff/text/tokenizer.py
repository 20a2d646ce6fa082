"""Whitespace-preserving tokenizer for word-level text comparison.

Text is split into alternating runs of non-whitespace and whitespace so that
joining the tokens back together reproduces the input exactly.
"""

import re
from typing import List

_WHITESPACE_SPLIT = re.compile(r"(\s+)")
_WHITESPACE_ONLY = re.compile(r"\s+")


def tokenize(text: str) -> List[str]:
    """Split text into word and whitespace tokens.

    Leading or trailing whitespace produces an empty-string token at that
    boundary, so " a" becomes ["", " ", "a"]. An empty input yields an empty
    list rather than a single empty token.

    Args:
        text: The text to tokenize

    Returns:
        List of tokens whose concatenation equals the input
    """
    if not text:
        return []
    return _WHITESPACE_SPLIT.split(text)


def is_whitespace_token(token: str) -> bool:
    """Check if a token is a whitespace run.

    Args:
        token: The token to check

    Returns:
        True if the token consists only of whitespace, False otherwise
        (including for the empty boundary token)
    """
    return bool(_WHITESPACE_ONLY.fullmatch(token))
