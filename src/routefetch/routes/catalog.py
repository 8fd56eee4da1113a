from __future__ import annotations

from typing import Iterator, Union

from routefetch.routes.general import GeneralRoute
from routefetch.routes.users import UserRoute

Route = Union[GeneralRoute, UserRoute]

_ROUTE_SETS = (GeneralRoute, UserRoute)


def iter_routes() -> Iterator[Route]:
    for route_set in _ROUTE_SETS:
        yield from route_set


def find_route(name: str) -> Route:
    """Look up a route by catalog name, e.g. ``general.status``."""
    wanted = name.strip().lower()
    for route in iter_routes():
        if route.route_name == wanted:
            return route
    raise KeyError(f"Unknown route '{name}'")
