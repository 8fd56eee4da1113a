from __future__ import annotations

from enum import Enum

from routefetch.config.settings import ClientConfig
from routefetch.domain.models import EndpointSpec


class GeneralRoute(str, Enum):
    STATUS = "status"
    COMPATIBILITY = "compatibility"

    @property
    def route_name(self) -> str:
        return f"general.{self.value}"

    def endpoint(self, config: ClientConfig) -> EndpointSpec:
        if self is GeneralRoute.STATUS:
            url = f"{config.api_base}/status"
        elif self is GeneralRoute.COMPATIBILITY:
            url = f"{config.api_base}/compatibility"
        else:  # pragma: no cover - closed enum
            raise ValueError(f"Unknown general route: {self!r}")

        return EndpointSpec(name=self.route_name, url=url, method="GET", encoding="json")
