"""Result types produced by the cleaning pipeline.

Plain Python objects, created per call and never shared.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, NamedTuple


class SanitizedUrl(NamedTuple):
    """Outcome of sanitizing a single candidate URL."""

    url: str
    modified: bool
    params_removed: int


@dataclass(frozen=True)
class CleanReport:
    """Cleaned text plus counters describing what changed."""

    output: str
    urls_found: int = 0
    urls_modified: int = 0
    params_removed: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def summary(self) -> str:
        """One-line human readable summary of the counters."""
        return (
            f"{self.urls_found} link(s) found, {self.urls_modified} cleaned, "
            f"{self.params_removed} tracking parameter(s) removed"
        )
