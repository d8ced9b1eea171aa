"""The server hosting stack."""

from __future__ import annotations

from typing import Any

from aws_cdk import CfnOutput, Environment, Stack
from constructs import Construct

from hosting.base.config import DeploymentConfig
from hosting.base.resolution import plan_deployment
from hosting.infra.control_api import add_control_api
from hosting.infra.network import bind_subnets, bind_vpc
from hosting.infra.security import build_security_group
from hosting.infra.server import provision_server
from hosting.infra.storage import bind_bucket


class ServerHostingStack(Stack):
    """Network placement, security group, game server, saves bucket and,
    when enabled, the start/stop/reboot API.

    Attributes:
        plan: The placement decisions taken from the config.
        server: The game server instance.
        saves_bucket: Bucket the server backs its saves up to.
        control_api: The REST API, or ``None`` when disabled.
        control_functions: Handler functions keyed by verb (empty when disabled).
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        *,
        config: DeploymentConfig,
        **kwargs: Any,
    ) -> None:
        # lookups need a concrete account and region
        kwargs.setdefault("env", Environment(account=config.account, region=config.region))
        super().__init__(scope, construct_id, **kwargs)

        prefix = config.prefix
        self.plan = plan_deployment(config)

        vpc = bind_vpc(self, prefix, self.plan.vpc)
        vpc_subnets = bind_subnets(self, prefix, self.plan.subnet)
        security_group = build_security_group(self, prefix, vpc)

        self.saves_bucket = bind_bucket(self, prefix, self.plan.bucket)
        self.server = provision_server(
            self,
            prefix,
            vpc=vpc,
            vpc_subnets=vpc_subnets,
            security_group=security_group,
            saves_bucket=self.saves_bucket,
            install_script=config.install_script,
            use_experimental_build=self.plan.use_experimental_build,
        )

        self.control_api = None
        self.control_functions = {}
        if self.plan.control_api:
            self.control_api, self.control_functions = add_control_api(
                self,
                prefix,
                account=config.account,
                instance_id=self.server.instance_id,
            )

        CfnOutput(self, "InstanceId", value=self.server.instance_id, description="Game server instance")
        CfnOutput(
            self,
            "SavesBucketName",
            value=self.saves_bucket.bucket_name,
            description="Bucket holding save backups",
        )
        if self.control_api is not None:
            CfnOutput(
                self,
                "ControlApiUrl",
                value=self.control_api.url,
                description="Base URL of the start/stop/reboot endpoints",
            )
