"""Process-wide host observer — the fault boundary for handler failures.

Every host reports added events, state changes, handler failures and its
closing to the installed observer. ``on_error`` receives the original,
unclassified failure. Install one at startup to forward failures to crash
reporting::

    class CrashReportingObserver(HostObserver):
        def on_error(self, host: Any, error: BaseException) -> None:
            crash_reporter.record(error)

    set_observer(CrashReportingObserver())
"""

from __future__ import annotations

import threading
from typing import Any


class HostObserver:
    """Base observer; every callback is a no-op."""

    def on_event(self, host: Any, event: Any) -> None:
        """Called when *event* is added to *host*."""

    def on_change(self, host: Any, previous: Any, current: Any) -> None:
        """Called before *host* moves from *previous* to *current*."""

    def on_error(self, host: Any, error: BaseException) -> None:
        """Called with the raw failure of a handler invocation."""

    def on_close(self, host: Any) -> None:
        """Called once *host* is closed."""


_default_observer = HostObserver()
_observer: HostObserver = _default_observer
_observer_lock = threading.Lock()


def get_observer() -> HostObserver:
    """Return the process-wide observer."""
    return _observer


def set_observer(observer: HostObserver) -> None:
    """Install the process-wide observer."""
    global _observer
    with _observer_lock:
        _observer = observer


def reset_observer() -> None:
    """Restore the no-op observer (testing utility)."""
    set_observer(_default_observer)
