"""
Control verbs and the response shape shared by the start/stop/reboot handlers.

A control call either succeeds with the provider's acknowledgement or
fails with an error.  Both outcomes are rendered as an HTTP 200 response
whose JSON body carries a human-readable ``message`` and the raw
acknowledgement or error serialized as a string in ``response``; callers
tell the outcomes apart by the message.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Literal, Union

control_verbs = Literal["start", "stop", "reboot"]

CONTROL_VERBS: tuple[str, ...] = ("start", "stop", "reboot")

_PAST_TENSE: dict[str, str] = {
    "start": "Started",
    "stop": "Stopped",
    "reboot": "Rebooted",
}

RESPONSE_HEADERS: dict[str, str] = {"Content-Type": "text/json"}


def serialize_error(error: BaseException) -> str:
    """Serialize *error* (and its provider cause, if any) to a JSON string.

    The result always names the exception class, so it is never empty.
    """
    payload: dict[str, Any] = {
        "error": type(error).__name__,
        "message": str(error),
    }
    cause = error.__cause__
    response = getattr(cause, "response", None)
    if isinstance(response, dict):
        payload["code"] = response.get("Error", {}).get("Code")
        payload["response"] = response
    elif cause is not None:
        payload["cause"] = f"{type(cause).__name__}: {cause}"
    return json.dumps(payload, default=str)


@dataclass(frozen=True)
class ControlSucceeded:
    """The provider accepted the request."""

    verb: str
    acknowledgement: dict[str, Any]

    @property
    def message(self) -> str:
        return f"{_PAST_TENSE[self.verb]} satisfactory server"

    @property
    def detail(self) -> str:
        return json.dumps(self.acknowledgement, default=str)


@dataclass(frozen=True)
class ControlFailed:
    """The provider rejected the request, or it never reached the provider."""

    verb: str
    error: BaseException

    @property
    def message(self) -> str:
        return f"Failed to {self.verb} satisfactory server"

    @property
    def detail(self) -> str:
        return serialize_error(self.error)


ControlResult = Union[ControlSucceeded, ControlFailed]


def response_body(result: ControlResult) -> dict[str, str]:
    return {"message": result.message, "response": result.detail}


def to_http_response(result: ControlResult) -> dict[str, Any]:
    """Render *result* as an API Gateway proxy response.

    The status code is 200 for both success and failure.
    """
    return {
        "statusCode": 200,
        "headers": dict(RESPONSE_HEADERS),
        "body": json.dumps(response_body(result)),
    }


__all__ = [
    "control_verbs",
    "CONTROL_VERBS",
    "RESPONSE_HEADERS",
    "serialize_error",
    "ControlSucceeded",
    "ControlFailed",
    "ControlResult",
    "response_body",
    "to_http_response",
]
