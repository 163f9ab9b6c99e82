"""Common utility functions and helpers."""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel


class _Unset:
    """Marker for "argument not supplied" where ``None`` is a valid value."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final[Any] = _Unset()


def model_origin(model: BaseModel) -> type[BaseModel]:
    """Return the unparametrized class of a (possibly parametrized) model.

    ``DataState[int, MyError].initial(1)`` and ``DataState.initial(1)`` share
    the origin ``DataState``, so they can compare equal.
    """
    origin = model.__pydantic_generic_metadata__["origin"]
    return origin or type(model)
