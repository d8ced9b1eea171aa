"""aws-cdk-lib constructs that provision the game server.

Deployment-time only; the Lambda asset excludes this package.
"""

from .stack import ServerHostingStack

__all__ = ["ServerHostingStack"]
