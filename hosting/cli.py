"""Server hosting CLI: control the game server and inspect deployment plans.

Usage examples::

    server-hosting start --instance-id i-0abc1234 --region us-east-1
    server-hosting reboot                      # INSTANCE_ID / AWS_REGION from env
    server-hosting plan --config '{"prefix": "Satisfactory", "account": "123456789012", "region": "us-east-1"}'
"""

from __future__ import annotations

import argparse
import json
import sys

from hosting.base.control import CONTROL_VERBS


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``server-hosting`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="server-hosting",
        description="Control and inspect the hosted game server",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for verb in CONTROL_VERBS:
        control = sub.add_parser(verb, help=f"Request the server to {verb}")
        control.add_argument(
            "--instance-id", "-i",
            default=None,
            help="EC2 instance id (default: $INSTANCE_ID)",
        )
        control.add_argument(
            "--region", "-r",
            default=None,
            help="AWS region (default: $AWS_REGION / $AWS_DEFAULT_REGION)",
        )

    plan = sub.add_parser("plan", help="Print the placement decisions for a config")
    plan.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help="JSON deployment config; missing keys come from SERVER_HOSTING_* env vars",
    )
    return parser


def _control(verb: str, instance_id: str | None, region: str | None) -> int:
    from pydantic import ValidationError

    from hosting.aws.handlers import execute
    from hosting.base.config import ControlConfig
    from hosting.base.control import ControlSucceeded, response_body

    try:
        config = ControlConfig(instance_id=instance_id, region_name=region)
    except ValidationError as e:
        print(f"Invalid control target: {e}", file=sys.stderr)
        return 1

    result = execute(verb, config.instance_id, region_name=config.region_name)
    print(json.dumps(response_body(result), indent=2))
    return 0 if isinstance(result, ControlSucceeded) else 1


def _plan(raw_config: str) -> int:
    from pydantic import ValidationError

    from hosting.base.config import load_deployment_config
    from hosting.base.resolution import plan_deployment

    try:
        config = load_deployment_config(raw_config)
    except (ValueError, ValidationError) as e:
        print(f"Invalid deployment config: {e}", file=sys.stderr)
        return 1

    summary = {"stack_name": config.stack_name, **plan_deployment(config).describe()}
    print(json.dumps(summary, indent=2))
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    if ns.command == "plan":
        code = _plan(ns.config)
    else:
        code = _control(ns.command, ns.instance_id, ns.region)
    sys.exit(code)


if __name__ == "__main__":
    main()
