from __future__ import annotations

from routefetch.domain.result import Result
from routefetch.models.random_user import RandomUser
from routefetch.routes.users import UserRoute
from routefetch.service.network import NetworkService


async def get_user(service: NetworkService) -> Result[RandomUser]:
    return await service.fetch(UserRoute.GET_USER.endpoint(service.config), RandomUser)
