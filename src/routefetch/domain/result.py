from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from routefetch.domain.errors import NetworkError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: NetworkError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Success[T], Failure]
