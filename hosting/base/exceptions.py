"""
Server hosting exception hierarchy.

Deployment-time failures inherit from :class:`ConfigurationError` or
:class:`ProvisioningError` and abort synthesis.  Runtime control-call
failures inherit from :class:`ComputeError`; the control handlers turn
those into a normal response body instead of an HTTP error.
"""


# ── Base ──────────────────────────────────────────────────────────────
class HostingError(Exception):
    """Root exception for all server hosting errors."""


# ── Deployment ────────────────────────────────────────────────────────
class ConfigurationError(HostingError):
    """Deployment or handler inputs are missing or unusable."""


class ProvisioningError(HostingError):
    """The stack could not be composed from the given inputs."""


# ── Compute ───────────────────────────────────────────────────────────
class ComputeError(HostingError):
    """Base exception for instance control operations."""


class InstanceNotFoundError(ComputeError):
    """Instance id is unknown or malformed."""


class InstanceStateError(ComputeError):
    """Instance is in a state that does not allow the requested action."""


class InstancePermissionError(ComputeError):
    """Caller is not allowed to act on the instance."""
