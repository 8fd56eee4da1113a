from __future__ import annotations

from routefetch.domain.json_value import JSON
from routefetch.domain.result import Result
from routefetch.routes.general import GeneralRoute
from routefetch.service.network import NetworkService


async def get_status(service: NetworkService) -> Result[JSON]:
    return await service.fetch(GeneralRoute.STATUS.endpoint(service.config), JSON)


async def get_compatibility(service: NetworkService) -> Result[JSON]:
    return await service.fetch(GeneralRoute.COMPATIBILITY.endpoint(service.config), JSON)
