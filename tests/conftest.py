"""Shared fixtures: process-wide slots are reset around every test."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from cqrs_ddd_state.classification import reset_global_fatality_handler
from cqrs_ddd_state.host.observer import reset_observer


@pytest.fixture(autouse=True)
def _reset_process_wide_slots() -> Iterator[None]:
    """The fatality handler and host observer are process-wide; never leak them."""
    reset_global_fatality_handler()
    reset_observer()
    yield
    reset_global_fatality_handler()
    reset_observer()
