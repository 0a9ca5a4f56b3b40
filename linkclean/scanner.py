"""Link detection inside raw text."""

from __future__ import annotations

import re
from typing import Iterator

# Compiled once at import; never mutated afterwards.  Python counts the
# information separators U+001C..U+001F as whitespace, Unicode does not.
URL_RE = re.compile(r"https?://(?:\S|[\x1c-\x1f])+")


def find_links(text: str) -> Iterator[re.Match[str]]:
    """Yield every URL-shaped span of *text*, left to right.

    A span starts at a literal (case-sensitive) ``http://`` or ``https://``
    and runs to the next whitespace character or the end of the text.  Spans
    never overlap and no URL validation happens here.
    """
    return URL_RE.finditer(text)
