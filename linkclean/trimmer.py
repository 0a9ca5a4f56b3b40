"""Separate a matched link from the prose punctuation that follows it."""

from __future__ import annotations

TRAILING_PUNCTUATION = frozenset(".,:;!?)]}\"'")


def _has_unmatched_closing_paren(text: str) -> bool:
    return text.count(")") > text.count("(")


def split_trailing_punctuation(candidate: str) -> tuple[str, str]:
    """Split *candidate* into ``(url_part, trailing)``.

    Characters from :data:`TRAILING_PUNCTUATION` are peeled off the end one
    at a time.  A closing ``)`` is only peeled while the text up to and
    including it has more ``)`` than ``(``, so links such as
    ``https://en.wikipedia.org/wiki/Foo_(bar)`` keep their own parenthesis
    while ``(see https://example.com)`` loses the one closing the remark.

    ``url_part + trailing == candidate`` always holds; ``url_part`` may be
    empty.
    """
    cut = len(candidate)
    while cut > 0:
        ch = candidate[cut - 1]
        if ch not in TRAILING_PUNCTUATION:
            break
        if ch == ")" and not _has_unmatched_closing_paren(candidate[:cut]):
            break
        cut -= 1
    return candidate[:cut], candidate[cut:]
