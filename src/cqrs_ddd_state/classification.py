"""Fatality policy and failure classification.

Whether a failure is fatal is decided by the most specific of four layers:

1. a per-registration predicate passed to ``StateController.register``;
2. the controller's overridable ``is_fatal_exception`` method;
3. the process-wide handler installed with :func:`set_global_fatality_handler`;
4. the default law (:func:`default_is_fatal`).

Layer 3 is the only process-wide mutable state in the package. Install it at
startup, before any controller runs, and reset it between tests::

    def treat_timeouts_as_business(
        failure: object, default_is_fatal: FatalityPredicate
    ) -> bool:
        if isinstance(failure, TimeoutError):
            return False
        return default_is_fatal(failure)

    set_global_fatality_handler(treat_timeouts_as_business)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from functools import partial
from typing import Any, Protocol

from .failures import BusinessTyped, BusinessUntyped, ClassifiedFailure, Fatal

logger = logging.getLogger(__name__)

FatalityPredicate = Callable[[Any], bool]

#: Business error types that mean "no specific business type declared".
TOP_TYPES: frozenset[Any] = frozenset({object, BaseException, Any})


class GlobalFatalityHandler(Protocol):
    """Process-wide fatality decision with access to the default law."""

    def __call__(self, failure: Any, default_is_fatal: FatalityPredicate) -> bool:
        ...


_global_handler: GlobalFatalityHandler | None = None
_global_handler_lock = threading.Lock()


def set_global_fatality_handler(handler: GlobalFatalityHandler | None) -> None:
    """Install (or clear, with ``None``) the process-wide fatality handler."""
    global _global_handler
    with _global_handler_lock:
        _global_handler = handler
    logger.debug(
        "Global fatality handler %s",
        "cleared" if handler is None else f"set to {handler!r}",
    )


def get_global_fatality_handler() -> GlobalFatalityHandler | None:
    """Return the process-wide fatality handler, if any."""
    return _global_handler


def reset_global_fatality_handler() -> None:
    """Clear the process-wide fatality handler (testing utility)."""
    set_global_fatality_handler(None)


def is_top_type(error_type: Any) -> bool:
    """Return True when *error_type* declares no specific business error."""
    try:
        return error_type in TOP_TYPES
    except TypeError:
        # Unhashable tokens cannot be top types.
        return False


def default_is_fatal(failure: Any, error_type: Any) -> bool:
    """The default law.

    With no specific business type every failure is fatal; otherwise a failure
    is fatal unless it is an instance of *error_type*.
    """
    if is_top_type(error_type):
        return True
    return not _is_instance(failure, error_type)


def resolve_is_fatal(failure: Any, error_type: Any) -> bool:
    """Apply the process-wide handler if installed, else the default law."""
    default = partial(default_is_fatal, error_type=error_type)
    handler = _global_handler
    if handler is not None:
        return handler(failure, default)
    return default(failure)


def classify(
    failure: Any,
    error_type: Any,
    is_fatal: FatalityPredicate | None = None,
) -> ClassifiedFailure[Any]:
    """Map *failure* onto exactly one case of the classified failure union.

    *is_fatal* replaces the global/default resolution when given. A predicate
    that raises is logged and the failure is treated as fatal, so this
    function never raises.
    """
    predicate = is_fatal or partial(resolve_is_fatal, error_type=error_type)
    try:
        fatal = bool(predicate(failure))
    except Exception:
        logger.warning(
            "Fatality predicate failed for %s; treating it as fatal",
            type(failure).__name__,
            exc_info=True,
        )
        fatal = True

    if fatal:
        result: ClassifiedFailure[Any] = Fatal(cause=failure)
    elif not is_top_type(error_type) and _is_instance(failure, error_type):
        result = BusinessTyped(error=failure)
    else:
        result = BusinessUntyped(cause=failure)

    logger.debug(
        "Classified %s as %s", type(failure).__name__, type(result).__name__
    )
    return result


def _is_instance(failure: Any, error_type: Any) -> bool:
    try:
        return isinstance(failure, error_type)
    except TypeError:
        logger.warning("Business error type %r is not a class", error_type)
        return False
