from __future__ import annotations

from enum import Enum

from routefetch.config.settings import ClientConfig
from routefetch.domain.models import EndpointSpec

RANDOM_USER_URL = "https://randomuser.me/api/"


class UserRoute(str, Enum):
    GET_USER = "get_user"

    @property
    def route_name(self) -> str:
        return f"users.{self.value}"

    def endpoint(self, config: ClientConfig) -> EndpointSpec:
        # randomuser.me is a public API outside the configured base url
        if self is UserRoute.GET_USER:
            return EndpointSpec(name=self.route_name, url=RANDOM_USER_URL, method="GET", encoding="json")
        raise ValueError(f"Unknown user route: {self!r}")  # pragma: no cover - closed enum
