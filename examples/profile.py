"""
Profile screen controllers, one per state family.

- LoadProfileController: data only after loading (SuccessDataState)
- DeleteProfileController: no data at all (EmptyState)
- UpdateProfileController: data kept through every phase (DataState)

Run with ``python examples/profile.py``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

from cqrs_ddd_state import (
    DataController,
    DataState,
    EmptyController,
    HostObserver,
    SuccessDataController,
    match_exception,
    set_global_fatality_handler,
    set_observer,
)

logger = logging.getLogger("examples.profile")

# ── Domain ────────────────────────────────────────────────────────────


class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class ProfileError(Exception):
    """Expected profile failures shown to the user."""


class ProfileNotFound(ProfileError):
    pass


class ProfileLocked(ProfileError):
    pass


class ServiceUnavailable(Exception):
    """Transient outage: not a defect, but not a ProfileError either."""


class ProfileService:
    def __init__(self) -> None:
        self._users = {1: User(id=1, name="Ada")}

    async def load(self, user_id: int) -> User:
        await asyncio.sleep(0)
        if user_id not in self._users:
            raise ProfileNotFound(user_id)
        return self._users[user_id]

    async def delete(self, user_id: int) -> None:
        await asyncio.sleep(0)
        raise ProfileLocked(user_id)

    async def update(self, user: User) -> User:
        await asyncio.sleep(0)
        if not user.name:
            raise ServiceUnavailable("profile backend is down")
        self._users[user.id] = user
        return user


# ── Events ────────────────────────────────────────────────────────────


class LoadProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int


class DeleteProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int


class UpdateProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: User


# ── Controllers ───────────────────────────────────────────────────────


class LoadProfileController(SuccessDataController[LoadProfile, User, ProfileError]):
    error_type = ProfileError

    def __init__(self, service: ProfileService) -> None:
        super().__init__()
        self.register(LoadProfile, lambda e: service.load(e.user_id))


class DeleteProfileController(EmptyController[DeleteProfile, ProfileError]):
    error_type = ProfileError

    def __init__(self, service: ProfileService) -> None:
        super().__init__()
        self.register(DeleteProfile, lambda e: service.delete(e.user_id))


class UpdateProfileController(DataController[UpdateProfile, User, ProfileError]):
    error_type = ProfileError

    def __init__(self, user: User, service: ProfileService) -> None:
        super().__init__(DataState.initial(user))
        self.register(UpdateProfile, lambda e: service.update(e.user))


# ── Fault boundary ────────────────────────────────────────────────────


class LoggingObserver(HostObserver):
    def on_error(self, host: Any, error: BaseException) -> None:
        logger.info("%s reported %r", type(host).__name__, error)


def treat_outages_as_business(failure: Any, default_is_fatal: Any) -> bool:
    if isinstance(failure, ServiceUnavailable):
        return False
    return bool(default_is_fatal(failure))


async def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")
    set_global_fatality_handler(treat_outages_as_business)
    set_observer(LoggingObserver())

    service = ProfileService()
    load = LoadProfileController(service)
    delete = DeleteProfileController(service)
    ada = await service.load(1)
    update = UpdateProfileController(ada, service)

    await load.add(LoadProfile(user_id=1))
    print("load:", load.state.match_or(lambda _: "-", success=lambda u: u.name))

    try:
        await delete.add(DeleteProfile(user_id=1))
    except ProfileLocked:
        pass
    print(
        "delete:",
        match_exception(
            delete.state.exception,
            business_typed=lambda e: f"cannot delete: {type(e).__name__}",
            or_else=lambda e: f"unexpected: {e!r}",
        ),
    )

    try:
        await update.add(UpdateProfile(user=User(id=1, name="")))
    except ServiceUnavailable:
        pass
    print(
        "update:",
        update.state.match(
            initial=lambda u: u.name,
            loading=lambda u: f"saving {u.name}",
            success=lambda u: f"saved {u.name}",
            failure=lambda u, exc: f"kept {u.name}, {type(exc).__name__}",
        ),
    )

    for controller in (load, delete, update):
        await controller.close()


if __name__ == "__main__":
    asyncio.run(main())
