from __future__ import annotations

from pydantic import BaseModel


class Name(BaseModel):
    title: str
    first: str
    last: str

    @property
    def full_name(self) -> str:
        return f"{self.title} {self.first} {self.last}".strip()


class Picture(BaseModel):
    large: str
    medium: str
    thumbnail: str


class UserResult(BaseModel):
    name: Name
    picture: Picture


class RandomUser(BaseModel):
    """Payload of https://randomuser.me/api/ (only the fields we display)."""

    results: list[UserResult]
