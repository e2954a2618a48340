"""
Forced removal of candidate resources with bounded concurrency.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from ..errors import RemovalInProgress, ResourceGone
from .models import DRY_RUN_REASON, ManagedResource, RemovalOutcome

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8


class RemovalExecutor:
    """
    Removes a batch of resources through an engine client.

    Removals run on a fixed-size thread pool. Each removal is isolated: an
    error becomes a Failed outcome for that resource and the rest of the
    batch carries on.
    """

    def __init__(self, engine, max_workers: int = DEFAULT_WORKERS):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.engine = engine
        self.max_workers = max_workers

    def remove_all(self, candidates: Sequence[ManagedResource], dry_run: bool) -> List[RemovalOutcome]:
        """
        Attempt to remove every candidate.

        Args:
            candidates: Resources selected for removal
            dry_run: Report candidates without removing anything

        Returns:
            One outcome per candidate, in candidate order
        """
        if dry_run:
            return [RemovalOutcome.skipped(resource, DRY_RUN_REASON) for resource in candidates]
        if not candidates:
            return []

        workers = min(self.max_workers, len(candidates))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="reaper-remove") as pool:
            # map() yields in submission order whatever order removals finish in,
            # and the with-block waits for every removal to resolve.
            outcomes = list(pool.map(self._remove_one, candidates))

        return outcomes

    def _remove_one(self, resource: ManagedResource) -> RemovalOutcome:
        kind = resource.kind.value
        try:
            self.engine.remove(resource)
        except ResourceGone:
            logger.debug(f"{kind} {resource.name} was already removed")
            return RemovalOutcome.skipped(resource, "already gone")
        except RemovalInProgress:
            logger.debug(f"Removal of {kind} {resource.name} already in progress")
            return RemovalOutcome.skipped(resource, "removal in progress")
        except Exception as e:
            logger.warning(f"Failed to remove {kind} {resource.name}: {e}")
            return RemovalOutcome.failed(resource, e)

        logger.info(f"Removed {kind} {resource.name}")
        return RemovalOutcome.removed(resource)
