"""Clipboard watcher: poll the system clipboard and clean links on change.

The watcher owns all scheduling and clipboard I/O; the cleaning core is
called as a plain synchronous function on each new snapshot.

Toggling monitoring bumps :attr:`ClipboardWatcher.epoch`.  A poll captures
the epoch before reading the clipboard and only writes back if it is still
current, so a poll that straddles a toggle never overwrites the clipboard.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import pyperclip

from linkclean.cleaner import clean_text_with_report
from linkclean.config import settings
from linkclean.models import CleanReport

logger = logging.getLogger(__name__)


class ClipboardWatcher:
    """Poll a clipboard and replace its text with the cleaned version."""

    def __init__(
        self,
        read: Optional[Callable[[], str]] = None,
        write: Optional[Callable[[str], None]] = None,
        interval: Optional[float] = None,
        on_clean: Optional[Callable[[CleanReport], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._read = read or pyperclip.paste
        self._write = write or pyperclip.copy
        self.interval = settings.poll_interval if interval is None else interval
        self._on_clean = on_clean
        self._sleep = sleep

        self.enabled = True
        self.epoch = 0
        self._last_seen: str | None = None

    # ------------------------------------------------------------------
    # Monitoring switch
    # ------------------------------------------------------------------
    def enable(self) -> None:
        if not self.enabled:
            self.enabled = True
            self.epoch += 1

    def disable(self) -> None:
        if self.enabled:
            self.enabled = False
            self.epoch += 1

    def toggle(self) -> bool:
        """Flip monitoring on/off and return the new state."""
        if self.enabled:
            self.disable()
        else:
            self.enable()
        return self.enabled

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------
    def poll_once(self) -> CleanReport | None:
        """Check the clipboard once.

        Returns the report when the clipboard was rewritten, ``None`` when
        monitoring is off, the text was already seen, nothing needed
        cleaning, or the epoch moved while the poll was in flight.
        """
        if not self.enabled:
            return None

        epoch = self.epoch
        snapshot = self._read() or ""
        if snapshot == self._last_seen:
            return None
        self._last_seen = snapshot

        report = clean_text_with_report(snapshot)
        if report.output == snapshot:
            return None
        if epoch != self.epoch or not self.enabled:
            logger.debug("Monitoring toggled during poll; discarding result")
            return None

        self._write(report.output)
        self._last_seen = report.output
        logger.info("Clipboard cleaned: %s", report.summary())

        if self._on_clean is not None:
            self._on_clean(report)
        return report

    def run(self, stop: Optional[Callable[[], bool]] = None) -> None:
        """Poll until *stop* returns ``True`` (forever when omitted).

        Clipboard backend failures are logged and retried on the next tick.
        """
        while not (stop is not None and stop()):
            try:
                self.poll_once()
            except pyperclip.PyperclipException as exc:
                logger.warning("Clipboard unavailable: %s", exc)
            self._sleep(self.interval)
