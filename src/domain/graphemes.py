"""
Grapheme cluster counting - Length checks in user-perceived characters.

Username and password length policies are expressed in graphemes, so
composed characters (e.g. "e" + combining acute accent) count once.
"""

import regex

_GRAPHEME_PATTERN = regex.compile(r"\X")


def grapheme_length(text: str, limit: int | None = None) -> int:
    """
    Count extended grapheme clusters in text. The empty string has zero.

    With a limit, counting stops once the limit is reached, so oversized
    input is never fully segmented. Callers checking a maximum pass the
    maximum plus one.
    """
    count = 0
    for _ in _GRAPHEME_PATTERN.finditer(text):
        count += 1
        if limit is not None and count >= limit:
            break
    return count
