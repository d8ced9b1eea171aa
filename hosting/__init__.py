"""Server hosting: provision a game server on EC2 and control its power state.

Deployment-time code lives in :mod:`hosting.infra` (aws-cdk-lib) and
:mod:`hosting.base.config` (pydantic).  The start/stop/reboot handlers in
:mod:`hosting.aws.handlers` need only boto3, so this module imports nothing
else eagerly.
"""

__version__ = "0.1.0"
