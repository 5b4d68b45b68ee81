"""
RoboFriends Client — Typed API Results
========================================

Every RobotsAPI call returns exactly one of these values instead of raising:

    Ok(value)                  request succeeded; value is the parsed payload
    ValidationFailure(message) service rejected the input (400, missing field)
    ConflictFailure(message)   service rejected a duplicate username/email/phone
    TransportFailure(message)  network error, non-JSON body, or unexpected status

Callers branch with isinstance(); failures share a `message` for display.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict


class Ok(BaseModel):
    value: Any

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class Failure(BaseModel):
    message: str

    model_config = ConfigDict(frozen=True)


class ValidationFailure(Failure):
    pass


class ConflictFailure(Failure):
    pass


class TransportFailure(Failure):
    pass


ApiResult = Union[Ok, ValidationFailure, ConflictFailure, TransportFailure]
