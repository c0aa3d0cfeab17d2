from __future__ import annotations

from urllib.parse import quote

from .models import UpdateUserDto, User
from .resource import ApiResource


def _user_path(user_id: str) -> str:
    return f"/users/{quote(str(user_id), safe='')}"


class UsersAPI(ApiResource):
    async def get_all(self) -> list[User]:
        return await self._t.get("/users")

    async def get_by_id(self, user_id: str) -> User:
        return await self._t.get(_user_path(user_id))

    async def get_me(self) -> User:
        return await self._t.get("/users/me")

    async def update(self, user_id: str, data: UpdateUserDto) -> User:
        return await self._t.patch(_user_path(user_id), data)

    async def remove(self, user_id: str) -> None:
        await self._t.delete(_user_path(user_id))
