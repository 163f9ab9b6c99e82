from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from cqrs_ddd_state.failures import BusinessTyped, Fatal
from cqrs_ddd_state.states import EmptyState, Phase

FAILURE = Fatal(cause=ValueError("boom"))

ALL_STATES = [
    EmptyState.initial(),
    EmptyState.loading(),
    EmptyState.success(),
    EmptyState.failure(FAILURE),
]

PREDICATES = {
    Phase.INITIAL: "is_initial",
    Phase.LOADING: "is_loading",
    Phase.SUCCESS: "is_success",
    Phase.FAILURE: "is_failure",
}


def _assert_only_phase(state: EmptyState[Any], phase: Phase) -> None:
    for candidate, predicate in PREDICATES.items():
        assert getattr(state, predicate) is (candidate is phase)
    assert state.is_executed is (phase in (Phase.SUCCESS, Phase.FAILURE))


# --- Construction ---


def test_constructors_set_phase() -> None:
    for state, phase in zip(ALL_STATES, Phase):
        assert state.phase is phase
        _assert_only_phase(state, phase)


def test_only_failure_carries_exception() -> None:
    assert EmptyState.failure(FAILURE).exception == FAILURE
    assert EmptyState.success().exception is None


def test_failure_requires_exception() -> None:
    with pytest.raises(ValidationError):
        EmptyState(phase=Phase.FAILURE)


def test_non_failure_rejects_exception() -> None:
    with pytest.raises(ValidationError):
        EmptyState(phase=Phase.LOADING, exception=FAILURE)


def test_state_is_immutable() -> None:
    state = EmptyState.initial()
    with pytest.raises(ValidationError):
        state.phase = Phase.LOADING  # type: ignore[misc]


# --- Transitions ---


@pytest.mark.parametrize("state", ALL_STATES)
def test_transitions_reach_target_phase(state: EmptyState[Any]) -> None:
    _assert_only_phase(state.to_initial(), Phase.INITIAL)
    _assert_only_phase(state.to_loading(), Phase.LOADING)
    _assert_only_phase(state.to_success(), Phase.SUCCESS)
    _assert_only_phase(state.to_failure(FAILURE), Phase.FAILURE)


def test_transitions_return_new_values() -> None:
    state = EmptyState.initial()
    loading = state.to_loading()

    assert loading is not state
    assert state.is_initial


def test_to_success_drops_data() -> None:
    assert EmptyState.loading().to_success("ignored") == EmptyState.success()


# --- Equality ---


def test_equality_is_structural() -> None:
    assert EmptyState.initial() == EmptyState.initial()
    assert EmptyState.initial() != EmptyState.loading()
    assert EmptyState.failure(FAILURE) == EmptyState.failure(
        Fatal(cause=FAILURE.cause)
    )
    assert EmptyState.failure(FAILURE) != EmptyState.failure(
        BusinessTyped(error=FAILURE.cause)
    )


def test_one_state_per_phase_gives_four_distinct_values() -> None:
    assert len(set(ALL_STATES)) == 4
    assert len(set(ALL_STATES + [EmptyState.initial()])) == 4


# --- Dispatch ---


def _label(state: EmptyState[Any]) -> str:
    return state.match(
        initial=lambda: "initial",
        loading=lambda: "loading",
        success=lambda: "success",
        failure=lambda exc: f"failure:{exc.original}",
    )


def test_match_dispatches_per_phase() -> None:
    assert [_label(s) for s in ALL_STATES] == [
        "initial",
        "loading",
        "success",
        "failure:boom",
    ]


def test_match_requires_every_handler() -> None:
    with pytest.raises(TypeError):
        EmptyState.initial().match(initial=lambda: 1)  # type: ignore[call-arg]


def test_match_or_none() -> None:
    assert EmptyState.loading().match_or_none(initial=lambda: 1) is None
    assert EmptyState.loading().match_or_none(loading=lambda: 2) == 2
    assert EmptyState.failure(FAILURE).match_or_none(failure=lambda e: e) == FAILURE


def test_match_or_falls_back() -> None:
    assert EmptyState.success().match_or(lambda: "else", initial=lambda: "i") == "else"
    assert EmptyState.success().match_or(lambda: "else", success=lambda: "s") == "s"


# --- copy_with ---


def test_copy_with_replaces_exception_only_when_failed() -> None:
    other = BusinessTyped(error=ValueError("other"))
    failed = EmptyState.failure(FAILURE)

    assert failed.copy_with(exception=other) == EmptyState.failure(other)
    assert failed.copy_with() == failed
    assert EmptyState.loading().copy_with(exception=other) == EmptyState.loading()


def test_copy_with_is_keyword_only() -> None:
    with pytest.raises(TypeError):
        EmptyState.failure(FAILURE).copy_with(FAILURE)  # type: ignore[misc]


def test_repr() -> None:
    assert repr(EmptyState.loading()) == "EmptyState.loading()"
