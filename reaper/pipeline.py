"""
One reaping cycle: list, filter by age, remove, then optionally reap networks.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from .cleanup import age
from .cleanup.executor import RemovalExecutor
from .cleanup.models import ResourceKind, RunReport
from .cleanup.networks import NetworkReapOrchestrator
from .config import RunConfig
from .engine.base import EngineClient

logger = logging.getLogger(__name__)


def run_cycle(
    engine: EngineClient,
    config: RunConfig,
    now: Optional[datetime] = None,
    executor: Optional[RemovalExecutor] = None,
) -> RunReport:
    """
    Run a single reaping cycle.

    Args:
        engine: Engine client used for listing and removal
        config: Run configuration
        now: Evaluation time for ages, defaults to the current UTC time
        executor: Removal executor, defaults to one sized by config.workers

    Returns:
        Outcomes of this cycle

    Raises:
        EngineConnectionError: If the engine cannot be listed
    """
    now = now or datetime.now(timezone.utc)
    executor = executor or RemovalExecutor(engine, max_workers=config.workers)

    logger.info(f"Starting new run ({now.isoformat()})")
    if config.dry_run:
        logger.warning("Dry run: no resources will be removed")

    listed = engine.list_resources(config.kind, config.selector)
    candidates = age.select(listed, config.age_bound, now)
    logger.info(f"Found {len(candidates)} matching {config.kind.value}(s) out of {len(listed)} listed")

    report = RunReport(kind=config.kind)
    report.primary = executor.remove_all(candidates, config.dry_run)

    # Containers are fully resolved at this point; networks with active
    # endpoints cannot be removed.
    if config.reap_networks and config.kind is ResourceKind.CONTAINER:
        orchestrator = NetworkReapOrchestrator(executor)
        report.derived_networks = orchestrator.reap_networks(candidates, config.dry_run)

    counts = report.counts()
    logger.info(
        f"Run complete: {counts['removed']} removed, {counts['skipped']} skipped, "
        f"{counts['failed']} failed"
    )
    return report
