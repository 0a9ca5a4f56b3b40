"""Link Cleaner — strip tracking parameters from links embedded in text.

Public re-exports so callers can write::

    from linkclean import clean_text, clean_text_with_report
"""

from linkclean.cleaner import clean_text, clean_text_with_report
from linkclean.models import CleanReport, SanitizedUrl
from linkclean.sanitizer import sanitize_url

__all__ = [
    "clean_text",
    "clean_text_with_report",
    "sanitize_url",
    "CleanReport",
    "SanitizedUrl",
]
