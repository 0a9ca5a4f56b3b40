"""Tracking-parameter and referral-path removal for a single URL.

Rules applied, in order:

1. Amazon product links lose their ``/ref=...`` path suffix, as long as a
   non-empty path remains.
2. Query pairs whose key (case-insensitive) starts with ``utm_`` or is one
   of :data:`TRACKING_PARAMS` are dropped; every other pair keeps its
   position.

A URL that no rule touched is returned exactly as it was given, never
re-serialized.  Text that does not parse as an absolute http(s) URL passes
through unchanged as well.

A URL that a rule did touch is serialized in full: host lowercased and
IDNA-encoded, default port dropped, ``.``/``..`` path segments resolved and
non-ASCII characters percent-encoded (``w3lib.url.safe_url_string``).
"""

from __future__ import annotations

import logging
import re
from urllib.parse import SplitResult, parse_qsl, quote_plus, urlencode, urlsplit, urlunsplit

from w3lib.url import safe_url_string

from linkclean.models import SanitizedUrl

logger = logging.getLogger(__name__)

TRACKING_PREFIXES = ("utm_",)

TRACKING_PARAMS = frozenset(
    {
        "gclid",
        "fbclid",
        "mc_cid",
        "mc_eid",
        "ref",
        "ref_src",
        "ref_url",
        "igshid",
        "igsh",
        "si",
        "tag",
        "linkcode",
    }
)

AMAZON_HOST_MARKER = "amazon."
AMAZON_REF_MARKER = "/ref="

_DEFAULT_PORTS = {"http": 80, "https": 443}

# Characters that can never appear in a registered host name.
_FORBIDDEN_HOST_RE = re.compile(r"[\x00-\x20#%/:<>?@\[\\\]^|]")

# Everything before the query or fragment; backslashes there act as "/".
_HEAD_RE = re.compile(r"[^?#]*")

_DOT_SEGMENTS = {
    ".": ".",
    "%2e": ".",
    "..": "..",
    ".%2e": "..",
    "%2e.": "..",
    "%2e%2e": "..",
}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _parse(raw_url: str) -> SplitResult | None:
    """Return the split URL, or ``None`` when *raw_url* is not an absolute
    http(s) URL with a usable host."""
    if not raw_url:
        return None
    head = _HEAD_RE.match(raw_url).group()
    try:
        parts = urlsplit(head.replace("\\", "/") + raw_url[len(head):])
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return None

    if parts.scheme not in _DEFAULT_PORTS:
        return None
    host = parts.hostname
    if not host:
        return None
    # IPv6 literals keep their colons once the brackets are stripped.
    if ":" not in host and _FORBIDDEN_HOST_RE.search(host):
        return None
    return parts


def _remove_dot_segments(path: str) -> str:
    """Resolve ``.`` and ``..`` segments of an absolute *path*."""
    if not path:
        return "/"
    segments = path.split("/")[1:]
    out: list[str] = []
    for i, segment in enumerate(segments):
        dot = _DOT_SEGMENTS.get(segment.lower())
        if dot is None:
            out.append(segment)
            continue
        if dot == ".." and out:
            out.pop()
        if i == len(segments) - 1:
            out.append("")
    return "/" + "/".join(out)


def _netloc(parts: SplitResult) -> str:
    """Rebuild the authority of *parts* without a default port."""
    userinfo, at, _ = parts.netloc.rpartition("@")
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS[parts.scheme]:
        host = f"{host}:{port}"
    return f"{userinfo}{at}{host}"


def _form_quote(value: str, safe: str = "", encoding=None, errors=None) -> str:
    # application/x-www-form-urlencoded keeps "*" and escapes "~".
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def should_remove_param(key: str) -> bool:
    """Return ``True`` if the query key *key* is a known tracking parameter."""
    key = key.lower()
    return key.startswith(TRACKING_PREFIXES) or key in TRACKING_PARAMS


def strip_amazon_ref_path(host: str, path: str) -> str | None:
    """Return *path* cut at Amazon's ``/ref=`` marker, or ``None`` if the
    rule does not apply.

    The rule is skipped when the host is not an Amazon storefront, when the
    marker is absent, or when cutting would leave an empty path.
    """
    if AMAZON_HOST_MARKER not in host.lower():
        return None
    index = path.find(AMAZON_REF_MARKER)
    if index <= 0:
        return None
    return path[:index]


def _filter_query(query: str) -> tuple[list[tuple[str, str]], int]:
    """Split *query* into kept pairs and the number of removed ones."""
    kept: list[tuple[str, str]] = []
    removed = 0
    for key, value in parse_qsl(query, keep_blank_values=True):
        if should_remove_param(key):
            removed += 1
        else:
            kept.append((key, value))
    return kept, removed


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def sanitize_url(raw_url: str) -> SanitizedUrl:
    """Strip tracking parameters and referral paths from *raw_url*.

    Returns:
        A :class:`SanitizedUrl` carrying the (possibly rewritten) URL,
        whether anything changed and how many query pairs were removed.
        Unparseable input comes back untouched with ``modified=False``.
    """
    parts = _parse(raw_url)
    if parts is None:
        logger.debug("Passing through unparseable link %r", raw_url)
        return SanitizedUrl(raw_url, False, 0)

    modified = False
    path = _remove_dot_segments(parts.path)
    query = parts.query

    stripped = strip_amazon_ref_path(parts.hostname or "", path)
    if stripped is not None:
        path = stripped
        modified = True

    kept, removed = _filter_query(query)
    if removed:
        modified = True
        query = urlencode(kept, quote_via=_form_quote, errors="surrogatepass")

    if not modified:
        return SanitizedUrl(raw_url, False, 0)

    try:
        cleaned = safe_url_string(
            urlunsplit((parts.scheme, _netloc(parts), path, query, parts.fragment))
        )
    except ValueError:
        # Lone surrogates in the host, path or fragment cannot be encoded
        # (UnicodeEncodeError is a ValueError).
        logger.debug("Passing through unencodable link %r", raw_url)
        return SanitizedUrl(raw_url, False, 0)

    # A bare "#" is dropped on serialization; keep the fragment marker.
    if not parts.fragment and "#" in raw_url:
        cleaned += "#"
    return SanitizedUrl(cleaned, True, removed)
