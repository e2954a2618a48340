"""
Engine client interface used by the sweep.
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from ..cleanup.models import ManagedResource, ResourceKind


class EngineClient(ABC):
    """Abstract capability for listing and force-removing engine resources."""

    @abstractmethod
    def list_resources(self, kind: ResourceKind, selector: Dict[str, List[str]]) -> List[ManagedResource]:
        """
        List resources of one kind matching an engine-side selector.

        Args:
            kind: Resource kind to list
            selector: Engine filters, forwarded verbatim

        Returns:
            Resource snapshots

        Raises:
            EngineConnectionError: If the engine cannot be reached
        """
        pass

    @abstractmethod
    def remove(self, resource: ManagedResource) -> None:
        """
        Force-remove a resource.

        Raises:
            RemovalError: Or a subclass, if the engine rejects the removal
        """
        pass
