"""State families: Phase plus EmptyState, SuccessDataState and DataState."""

from __future__ import annotations

from .base import Phase, State
from .data import DataState
from .empty import EmptyState
from .success_data import SuccessDataState

__all__ = [
    "DataState",
    "EmptyState",
    "Phase",
    "State",
    "SuccessDataState",
]
