"""AWS EC2 implementation of the instance control blueprint."""

from __future__ import annotations

from typing import Any, NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hosting.base.compute import InstanceControlBlueprint
from hosting.base.exceptions import (
    ComputeError,
    InstanceNotFoundError,
    InstancePermissionError,
    InstanceStateError,
)

_ERROR_MAP: dict[str, type[ComputeError]] = {
    "InvalidInstanceID.NotFound": InstanceNotFoundError,
    "InvalidInstanceID.Malformed": InstanceNotFoundError,
    "IncorrectInstanceState": InstanceStateError,
    "UnauthorizedOperation": InstancePermissionError,
    "AccessDenied": InstancePermissionError,
    "AccessDeniedException": InstancePermissionError,
}


def _handle(e: ClientError, msg: str) -> NoReturn:
    exc = _ERROR_MAP.get(e.response["Error"]["Code"])
    raise (exc or ComputeError)(msg) from e


class Compute(InstanceControlBlueprint):
    """AWS EC2 instance control.

    Every call is a single attempt; boto3's own retry behaviour is the
    only retrying that happens.

    Attributes:
        client: boto3 EC2 client.
    """

    def __init__(self, region_name: str | None = None) -> None:
        """Initialize the EC2 client.

        Args:
            region_name: AWS region.  ``None`` lets boto3 resolve it
                (``AWS_REGION`` is always set inside Lambda).
        """
        try:
            self.client = boto3.client("ec2", region_name=region_name)
        except BotoCoreError as e:
            raise ComputeError("Failed to create EC2 client") from e

    def start_instance(self, instance_id: str) -> dict[str, Any]:
        """Start a stopped EC2 instance.

        Args:
            instance_id: EC2 instance ID (e.g. ``i-0abcd1234``).

        Returns:
            The raw ``StartInstances`` response.

        Raises:
            InstanceNotFoundError: If the instance does not exist.
            InstanceStateError: If the instance cannot be started now.
        """
        try:
            return self.client.start_instances(InstanceIds=[instance_id])  # type: ignore[no-any-return]
        except ClientError as e:
            _handle(e, f"Failed to start instance '{instance_id}'")
        except BotoCoreError as e:
            raise ComputeError(f"Failed to start instance '{instance_id}'") from e

    def stop_instance(self, instance_id: str) -> dict[str, Any]:
        """Stop a running EC2 instance (preserves EBS volumes).

        Args:
            instance_id: EC2 instance ID.

        Returns:
            The raw ``StopInstances`` response.

        Raises:
            InstanceNotFoundError: If the instance does not exist.
        """
        try:
            return self.client.stop_instances(InstanceIds=[instance_id])  # type: ignore[no-any-return]
        except ClientError as e:
            _handle(e, f"Failed to stop instance '{instance_id}'")
        except BotoCoreError as e:
            raise ComputeError(f"Failed to stop instance '{instance_id}'") from e

    def reboot_instance(self, instance_id: str) -> dict[str, Any]:
        """Reboot a running EC2 instance.

        Args:
            instance_id: EC2 instance ID.

        Returns:
            The raw ``RebootInstances`` response (metadata only).

        Raises:
            InstanceNotFoundError: If the instance does not exist.
        """
        try:
            return self.client.reboot_instances(InstanceIds=[instance_id])  # type: ignore[no-any-return]
        except ClientError as e:
            _handle(e, f"Failed to reboot instance '{instance_id}'")
        except BotoCoreError as e:
            raise ComputeError(f"Failed to reboot instance '{instance_id}'") from e
