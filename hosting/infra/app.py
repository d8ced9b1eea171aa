"""CDK application wiring."""

from __future__ import annotations

from typing import Any

from aws_cdk import App

from hosting.base.config import load_deployment_config
from hosting.infra.stack import ServerHostingStack

CONTEXT_KEY = "server_hosting"


def build_app(context: dict[str, Any] | None = None) -> App:
    """Create the app and its single stack.

    Deployment settings come from the ``server_hosting`` context value
    (``cdk.json`` or ``-c``), falling back to the environment.
    """
    app = App(context=context)
    config = load_deployment_config(app.node.try_get_context(CONTEXT_KEY))
    ServerHostingStack(app, config.stack_name, config=config)
    return app
