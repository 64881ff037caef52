from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    id: str
    score: float


class ErrorPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: str = Field(alias="Error")


@dataclass(frozen=True)
class Response:
    """Result of a single call: the HTTP status plus the decoded JSON body.

    Non-2xx statuses are ordinary values here. Callers branch on ``status``.
    """

    status: int
    data: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def user(self) -> User:
        return User.model_validate(self.data)

    def error(self) -> ErrorPayload:
        return ErrorPayload.model_validate(self.data)


class MalformedResponseError(ValueError):
    def __init__(self, status: int, text: str):
        super().__init__(f"response body is not valid JSON (HTTP {status})")
        self.status = status
        self.text = text
