"""
Lambda entry points for the start, stop and reboot endpoints.

Each handler reads the target instance from ``INSTANCE_ID``, submits one
control request, and answers with HTTP 200 whether or not the provider
accepted it.  There is no retry and no wait for the new power state.
"""

from __future__ import annotations

import os
from typing import Any

from hosting.aws.compute import Compute
from hosting.base.control import (
    ControlFailed,
    ControlResult,
    ControlSucceeded,
    control_verbs,
    to_http_response,
)
from hosting.base.exceptions import ComputeError, ConfigurationError
from hosting.base.logger import hosting_logger


def execute(
    verb: control_verbs,
    instance_id: str,
    region_name: str | None = None,
    request_id: str | None = None,
) -> ControlResult:
    """Submit one *verb* request for *instance_id* and capture the outcome.

    Provider failures are returned as :class:`ControlFailed`, never raised.
    """
    log_ctx = {
        "component": "handler",
        "operation": verb,
        "instance_id": instance_id,
        "request_id": request_id,
    }
    hosting_logger.info(f"Attempting to {verb} game server", **log_ctx)
    try:
        ack = Compute(region_name).control(verb, instance_id)
    except ComputeError as e:
        hosting_logger.error(f"Failed to {verb} game server: {e}", exc_info=True, **log_ctx)
        return ControlFailed(verb, e)
    hosting_logger.info(f"{verb} request accepted", **log_ctx)
    return ControlSucceeded(verb, ack)


def _invoke(verb: control_verbs, context: Any) -> dict[str, Any]:
    instance_id = os.environ.get("INSTANCE_ID")
    if not instance_id:
        raise ConfigurationError("INSTANCE_ID is not set in the handler environment")
    result = execute(
        verb,
        instance_id,
        region_name=os.environ.get("AWS_REGION"),
        request_id=getattr(context, "aws_request_id", None),
    )
    return to_http_response(result)


def start(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return _invoke("start", context)


def stop(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return _invoke("stop", context)


def reboot(event: dict[str, Any], context: Any) -> dict[str, Any]:
    return _invoke("reboot", context)
