"""REST API exposing the start, stop and reboot handlers."""

from __future__ import annotations

from pathlib import Path

from aws_cdk import Duration
from aws_cdk import aws_apigateway as apigw
from aws_cdk import aws_iam as iam
from aws_cdk import aws_lambda as lambda_
from constructs import Construct

from hosting.base.control import CONTROL_VERBS

# Repository root; the handler asset is the hosting package without infra/.
_SOURCE_ROOT = Path(__file__).resolve().parents[2]
_ASSET_EXCLUDE = [
    "*",
    "!hosting",
    "!hosting/**",
    "hosting/infra",
    "__pycache__",
    "*.pyc",
]

HANDLER_TIMEOUT = Duration.seconds(10)
HANDLER_RUNTIME = lambda_.Runtime.PYTHON_3_12


def handler_code() -> lambda_.Code:
    return lambda_.Code.from_asset(str(_SOURCE_ROOT), exclude=_ASSET_EXCLUDE)


def instance_arn(account: str, instance_id: str) -> str:
    return f"arn:aws:ec2:*:{account}:instance/{instance_id}"


def add_control_handler(
    scope: Construct,
    prefix: str,
    rest_api: apigw.RestApi,
    *,
    account: str,
    instance_id: str,
    verb: str,
    code: lambda_.Code,
) -> lambda_.Function:
    """Create the Lambda for *verb*, allow it to act on the instance, and
    mount it as ``GET /<verb>``."""
    title = verb.capitalize()
    function = lambda_.Function(
        scope,
        f"{prefix}{title}ServerLambda",
        runtime=HANDLER_RUNTIME,
        handler=f"hosting.aws.handlers.{verb}",
        code=code,
        description=f"{title} game server",
        timeout=HANDLER_TIMEOUT,
        environment={"INSTANCE_ID": instance_id},
    )
    function.add_to_role_policy(
        iam.PolicyStatement(
            actions=[f"ec2:{title}Instances"],
            resources=[instance_arn(account, instance_id)],
        )
    )
    resource = rest_api.root.add_resource(verb)
    resource.add_method("GET", apigw.LambdaIntegration(function))
    return function


def add_control_api(
    scope: Construct,
    prefix: str,
    *,
    account: str,
    instance_id: str,
) -> tuple[apigw.RestApi, dict[str, lambda_.Function]]:
    """Create the REST API with one endpoint per control verb.

    Returns:
        The API and the handler functions keyed by verb.
    """
    rest_api = apigw.RestApi(scope, f"{prefix}ServerApi")
    code = handler_code()
    functions = {
        verb: add_control_handler(
            scope,
            prefix,
            rest_api,
            account=account,
            instance_id=instance_id,
            verb=verb,
            code=code,
        )
        for verb in CONTROL_VERBS
    }
    return rest_api, functions
