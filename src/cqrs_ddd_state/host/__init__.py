"""In-process asyncio state host: emission, ordering transformers, observer."""

from __future__ import annotations

from .host import Emitter, StateHost
from .observer import HostObserver, get_observer, reset_observer, set_observer
from .transformers import (
    ConcurrentTransformer,
    DroppableTransformer,
    RestartableTransformer,
    SequentialTransformer,
    concurrent,
    droppable,
    restartable,
    sequential,
)

__all__ = [
    "ConcurrentTransformer",
    "DroppableTransformer",
    "Emitter",
    "HostObserver",
    "RestartableTransformer",
    "SequentialTransformer",
    "StateHost",
    "concurrent",
    "droppable",
    "get_observer",
    "reset_observer",
    "restartable",
    "sequential",
    "set_observer",
]
