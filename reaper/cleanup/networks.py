"""
Second-pass removal of the networks used by reaped containers.
"""

import logging
from typing import List, Sequence

from .executor import RemovalExecutor
from .models import ManagedResource, RemovalOutcome, ResourceKind

logger = logging.getLogger(__name__)

# Networks every Docker daemon ships with; the engine refuses to remove them.
PREDEFINED_NETWORKS = frozenset({"bridge", "host", "none"})


def networks_of(containers: Sequence[ManagedResource]) -> List[ManagedResource]:
    """
    Union of the networks attached to the given containers, in first-seen order.

    Networks are identified by name, matching how the engine adapter lists them.
    """
    seen = set()
    networks = []
    for container in containers:
        for name in container.networks:
            if name in seen:
                continue
            seen.add(name)
            if name in PREDEFINED_NETWORKS:
                logger.debug(f"Ignoring predefined network {name} from container {container.name}")
                continue
            logger.debug(f"Added network {name} from container {container.name}")
            networks.append(ManagedResource(id=name, kind=ResourceKind.NETWORK, name=name))
    return networks


class NetworkReapOrchestrator:
    """
    Removes networks by association with targeted containers.

    Must only be called once the container pass has fully resolved: the engine
    rejects removing a network that still has an active endpoint.
    """

    def __init__(self, executor: RemovalExecutor):
        self.executor = executor

    def reap_networks(self, containers: Sequence[ManagedResource], dry_run: bool) -> List[RemovalOutcome]:
        """
        Remove every network attached to the given containers.

        All containers count, whether or not their own removal succeeded. No
        age check is applied to the networks.
        """
        candidates = networks_of(containers)
        if not candidates:
            return []
        logger.info(f"Reaping {len(candidates)} network(s) attached to {len(containers)} container(s)")
        return self.executor.remove_all(candidates, dry_run)
