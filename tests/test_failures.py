from __future__ import annotations

import pytest
from pydantic import ValidationError

from cqrs_ddd_state.failures import (
    Business,
    BusinessTyped,
    BusinessUntyped,
    ClassifiedFailure,
    Fatal,
)


class TypedError(Exception):
    pass


class UntypedError(Exception):
    pass


# --- Construction & predicates ---


def test_factories_build_each_case() -> None:
    typed = TypedError()
    untyped = UntypedError()

    assert ClassifiedFailure.fatal(untyped) == Fatal(cause=untyped)
    assert ClassifiedFailure.business_typed(typed) == BusinessTyped(error=typed)
    assert ClassifiedFailure.business_untyped(untyped) == BusinessUntyped(
        cause=untyped
    )


def test_predicates_identify_exactly_one_case() -> None:
    fatal = Fatal(cause=ValueError("boom"))
    typed = BusinessTyped(error=TypedError())
    untyped = BusinessUntyped(cause=UntypedError())

    assert (fatal.is_fatal, fatal.is_business) == (True, False)
    assert (typed.is_business, typed.is_business_typed) == (True, True)
    assert typed.is_business_untyped is False
    assert (untyped.is_business, untyped.is_business_untyped) == (True, True)
    assert untyped.is_business_typed is False
    assert isinstance(typed, Business)
    assert isinstance(untyped, Business)
    assert not isinstance(fatal, Business)


def test_original_returns_wrapped_value() -> None:
    error = TypedError()
    assert Fatal(cause=error).original is error
    assert BusinessTyped(error=error).original is error
    assert BusinessUntyped(cause=error).original is error


def test_failures_are_immutable() -> None:
    failure = Fatal(cause=ValueError())
    with pytest.raises(ValidationError):
        failure.cause = ValueError()  # type: ignore[misc]


# --- Value semantics ---


def test_equality_is_structural_and_case_sensitive() -> None:
    error = UntypedError()

    assert Fatal(cause=error) == Fatal(cause=error)
    assert Fatal(cause=error) != BusinessUntyped(cause=error)
    assert Fatal(cause=error) != Fatal(cause=UntypedError())
    assert Fatal(cause="a") == Fatal(cause="a")
    assert Fatal(cause=error) != error


def test_parametrized_and_plain_cases_compare_equal() -> None:
    error = TypedError()
    assert BusinessTyped[TypedError](error=error) == BusinessTyped(error=error)


def test_failures_are_hashable() -> None:
    error = TypedError()
    failures = {
        Fatal(cause=error),
        Fatal(cause=error),
        BusinessTyped(error=error),
        BusinessUntyped(cause=error),
    }
    assert len(failures) == 3


def test_repr_names_case_and_value() -> None:
    assert repr(Fatal(cause="boom")) == "Fatal('boom')"
    assert str(BusinessTyped(error=1)) == "BusinessTyped(1)"


# --- Dispatch ---


def test_match_calls_handler_for_case() -> None:
    handlers = {
        "fatal": lambda e: ("fatal", e),
        "business_typed": lambda e: ("typed", e),
        "business_untyped": lambda e: ("untyped", e),
    }

    assert Fatal(cause=1).match(**handlers) == ("fatal", 1)
    assert BusinessTyped(error=2).match(**handlers) == ("typed", 2)
    assert BusinessUntyped(cause=3).match(**handlers) == ("untyped", 3)


def test_match_requires_every_handler() -> None:
    with pytest.raises(TypeError):
        Fatal(cause=1).match(fatal=lambda e: e)  # type: ignore[call-arg]


def test_match_or_none_returns_none_without_handler() -> None:
    failure = BusinessTyped(error=TypedError())

    assert failure.match_or_none(fatal=lambda e: "fatal") is None
    assert failure.match_or_none(business_typed=lambda e: "typed") == "typed"


def test_match_or_falls_back_with_original() -> None:
    error = UntypedError()
    failure = BusinessUntyped(cause=error)

    assert failure.match_or(lambda e: ("else", e), fatal=lambda e: "fatal") == (
        "else",
        error,
    )
    assert (
        failure.match_or(lambda e: "else", business_untyped=lambda e: "untyped")
        == "untyped"
    )
