"""Unit-of-work controllers, one per state family."""

from __future__ import annotations

from .base import StateController
from .data import DataController
from .empty import EmptyController
from .success_data import SuccessDataController

__all__ = [
    "DataController",
    "EmptyController",
    "StateController",
    "SuccessDataController",
]
