"""Provider-neutral blueprints and core utilities.

Only standard-library code lives behind this import, so the control
handlers can load it on a stock Lambda runtime.  Import
:mod:`hosting.base.config` explicitly for the pydantic models.
"""

from .compute import InstanceControlBlueprint
from .control import (
    CONTROL_VERBS,
    ControlFailed,
    ControlResult,
    ControlSucceeded,
    control_verbs,
    to_http_response,
)
from .resolution import DeploymentPlan, plan_deployment


__all__ = [
    "InstanceControlBlueprint",
    "CONTROL_VERBS",
    "ControlFailed",
    "ControlResult",
    "ControlSucceeded",
    "control_verbs",
    "to_http_response",
    "DeploymentPlan",
    "plan_deployment",
]
