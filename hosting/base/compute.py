"""Instance control blueprint."""

from abc import ABC, abstractmethod
from typing import Any

from .control import control_verbs


class InstanceControlBlueprint(ABC):
    """Abstract interface for power-state requests against one instance.

    Each call only submits the request; none of them wait for the
    instance to reach the target state.  Implementations return the
    provider's raw acknowledgement and raise
    :class:`~hosting.base.exceptions.ComputeError` subclasses on rejection.
    """

    @abstractmethod
    def start_instance(self, instance_id: str) -> dict[str, Any]:
        """Request a stopped instance to start."""

    @abstractmethod
    def stop_instance(self, instance_id: str) -> dict[str, Any]:
        """Request a running instance to stop (disk is kept)."""

    @abstractmethod
    def reboot_instance(self, instance_id: str) -> dict[str, Any]:
        """Request a running instance to reboot."""

    def control(self, verb: control_verbs, instance_id: str) -> dict[str, Any]:
        """Dispatch *verb* (``start``, ``stop`` or ``reboot``) to its method.

        Raises:
            ValueError: If *verb* is not a control verb.
        """
        actions = {
            "start": self.start_instance,
            "stop": self.stop_instance,
            "reboot": self.reboot_instance,
        }
        if verb not in actions:
            raise ValueError(f"Unsupported control verb: {verb}")
        return actions[verb](instance_id)
