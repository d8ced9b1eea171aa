"""
Pydantic configuration models for deployment and instance control.

Validates the deployment inputs once, before any resource is declared,
instead of letting a bad value surface halfway through synthesis.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DeploymentConfig(BaseModel):
    """Settings consumed by the server hosting stack.

    Values are resolved in order:
    1. Explicit values passed in the config dict (or CDK context).
    2. ``SERVER_HOSTING_*`` environment variables.
    3. For ``account`` and ``region`` only, the ``CDK_DEFAULT_ACCOUNT`` /
       ``CDK_DEFAULT_REGION`` variables the CDK CLI exports.

    Blank optional identifiers are treated as absent.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    prefix: str = Field(
        pattern=r"^[A-Za-z][A-Za-z0-9-]*$",
        description="Prefix for every construct id and the stack name",
    )
    account: str = Field(pattern=r"^\d{12}$", description="AWS account id")
    region: str = Field(min_length=1, description="AWS region (e.g. 'us-east-1')")
    vpc_id: str | None = Field(default=None, description="Existing VPC to deploy into")
    subnet_id: str | None = Field(default=None, description="Existing subnet for the server")
    availability_zone: str | None = Field(
        default=None, description="Availability zone of ``subnet_id``"
    )
    bucket_name: str | None = Field(default=None, description="Existing saves bucket")
    restart_api: bool = Field(
        default=False, description="Create the start/stop/reboot HTTP API"
    )
    use_experimental_build: bool = Field(
        default=False, description="Install the experimental server build"
    )
    install_script: Path = Field(
        default=Path("scripts/install.sh"),
        description="Server install script uploaded as an asset and run at first boot",
    )

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: Any) -> dict[str, Any]:
        """Fall back to environment variables for missing settings."""
        values = dict(values or {})
        env_map = {
            "prefix": ("SERVER_HOSTING_PREFIX",),
            "account": ("SERVER_HOSTING_ACCOUNT", "CDK_DEFAULT_ACCOUNT"),
            "region": ("SERVER_HOSTING_REGION", "CDK_DEFAULT_REGION"),
            "vpc_id": ("SERVER_HOSTING_VPC_ID",),
            "subnet_id": ("SERVER_HOSTING_SUBNET_ID",),
            "availability_zone": ("SERVER_HOSTING_AVAILABILITY_ZONE",),
            "bucket_name": ("SERVER_HOSTING_BUCKET_NAME",),
            "restart_api": ("SERVER_HOSTING_RESTART_API",),
            "use_experimental_build": ("SERVER_HOSTING_USE_EXPERIMENTAL_BUILD",),
            "install_script": ("SERVER_HOSTING_INSTALL_SCRIPT",),
        }
        for field, env_vars in env_map.items():
            if values.get(field) in (None, ""):
                for env_var in env_vars:
                    if os.environ.get(env_var):
                        values[field] = os.environ[env_var]
                        break
        return values

    @field_validator("vpc_id", "subnet_id", "availability_zone", "bucket_name", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def stack_name(self) -> str:
        return f"{self.prefix}ServerHostingStack"


class ControlConfig(BaseModel):
    """Target of an operator-issued control call.

    Falls back to ``INSTANCE_ID`` and ``AWS_REGION`` / ``AWS_DEFAULT_REGION``,
    the same variables the control handlers see in Lambda.  A missing region
    is left as None so boto3 can use its own resolution chain.
    """

    model_config = ConfigDict(extra="forbid")

    instance_id: str = Field(min_length=1, description="EC2 instance id")
    region_name: str | None = Field(default=None, description="AWS region")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: Any) -> dict[str, Any]:
        values = dict(values or {})
        if not values.get("instance_id"):
            values["instance_id"] = os.environ.get("INSTANCE_ID")
        if not values.get("region_name"):
            values["region_name"] = os.environ.get("AWS_REGION") or os.environ.get(
                "AWS_DEFAULT_REGION"
            )
        return values


def load_deployment_config(raw: dict[str, Any] | str | None = None) -> DeploymentConfig:
    """Validate and return the deployment configuration.

    Args:
        raw: Settings dict, or a JSON object string as passed with
            ``cdk -c server_hosting='{...}'``.  ``None`` reads everything
            from the environment.

    Returns:
        A validated, immutable :class:`DeploymentConfig`.

    Raises:
        ValueError: If ``raw`` is a string that is not a JSON object.
        pydantic.ValidationError: If the settings are invalid.
    """
    if isinstance(raw, str):
        raw = json.loads(raw)
        if not isinstance(raw, dict):
            raise ValueError("Deployment config must be a JSON object")
    return DeploymentConfig(**(raw or {}))


__all__ = [
    "DeploymentConfig",
    "ControlConfig",
    "load_deployment_config",
]
