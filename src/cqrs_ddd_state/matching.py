"""Branch on classified failures outside any controller.

Meant for fault boundaries, where a value may or may not be a classified
failure::

    def report(value: object) -> None:
        match_exception(
            value,
            # only record defects
            business_typed=lambda _: None,
            business_untyped=lambda _: None,
            or_else=crash_reporter.record,
        )
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from .failures import ClassifiedFailure

if TYPE_CHECKING:
    from collections.abc import Callable

R = TypeVar("R")


def match_exception(
    value: Any,
    *,
    or_else: Callable[[Any], R],
    fatal: Callable[[Any], R] | None = None,
    business_typed: Callable[[Any], R] | None = None,
    business_untyped: Callable[[Any], R] | None = None,
) -> R:
    """Dispatch *value* to the handler of its classified failure case.

    Handlers receive the wrapped raw value. *or_else* is called with the raw
    value when the matching handler is missing, and with *value* itself when
    it is not a classified failure.
    """
    if not isinstance(value, ClassifiedFailure):
        return or_else(value)
    return value.match(
        fatal=fatal or or_else,
        business_typed=business_typed or or_else,
        business_untyped=business_untyped or or_else,
    )
