"""Text-level cleaning: find every link, sanitize it, splice it back.

Everything outside the sanitized URL parts (prose, whitespace, trailing
punctuation) is copied to the output unchanged.
"""

from __future__ import annotations

from linkclean.models import CleanReport
from linkclean.sanitizer import sanitize_url
from linkclean.scanner import find_links
from linkclean.trimmer import split_trailing_punctuation


def clean_text_with_report(text: str) -> CleanReport:
    """Clean every link in *text* and report what changed."""
    pieces: list[str] = []
    last = 0
    urls_found = 0
    urls_modified = 0
    params_removed = 0

    for match in find_links(text):
        urls_found += 1
        pieces.append(text[last:match.start()])

        url_part, trailing = split_trailing_punctuation(match.group())
        result = sanitize_url(url_part)
        if result.modified:
            urls_modified += 1
            params_removed += result.params_removed

        pieces.append(result.url)
        pieces.append(trailing)
        last = match.end()

    pieces.append(text[last:])

    return CleanReport(
        output="".join(pieces),
        urls_found=urls_found,
        urls_modified=urls_modified,
        params_removed=params_removed,
    )


def clean_text(text: str) -> str:
    """Return *text* with every link cleaned."""
    return clean_text_with_report(text).output
