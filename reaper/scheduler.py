"""
Repeat-cycle scheduler for reaping runs.
"""

import logging
import threading
from datetime import timedelta
from enum import Enum
from typing import Callable, List, Optional, Tuple

from .cleanup.models import RunReport
from .durations import format_duration

logger = logging.getLogger(__name__)


class SchedulerState(Enum):
    """Scheduler lifecycle states."""
    IDLE = "idle"
    RUNNING = "running"
    SLEEPING = "sleeping"
    STOPPED = "stopped"


class CycleScheduler:
    """
    Runs a pipeline once, or repeatedly with a fixed pause between cycles.

    Cycles never overlap: the next one starts `interval` after the previous
    one returned. stop() is cooperative; it never interrupts a running cycle
    but does cut a pause short.
    """

    def __init__(self, interval: Optional[timedelta] = None, stop_event: Optional[threading.Event] = None):
        self.interval = interval
        self.stop_event = stop_event or threading.Event()
        self.state = SchedulerState.IDLE
        self.transitions: List[Tuple[SchedulerState, SchedulerState]] = []
        self.cycles = 0

    def stop(self) -> None:
        """Request the scheduler to stop after the current cycle."""
        logger.debug("Stop requested")
        self.stop_event.set()

    def _transition(self, new_state: SchedulerState) -> None:
        logger.debug(f"Scheduler {self.state.value} -> {new_state.value}")
        self.transitions.append((self.state, new_state))
        self.state = new_state

    def run(
        self,
        pipeline: Callable[[], RunReport],
        on_report: Optional[Callable[[RunReport], None]] = None,
    ) -> SchedulerState:
        """
        Drive the pipeline until single-shot completion or stop().

        Args:
            pipeline: Runs one full cycle and returns its report
            on_report: Called with each cycle's report

        Returns:
            The final state (always STOPPED)

        Raises:
            Exception: Whatever the pipeline raised; the scheduler is STOPPED
        """
        if self.state is not SchedulerState.IDLE:
            raise RuntimeError(f"Scheduler cannot start from state {self.state.value}")

        if self.interval is None:
            logger.info("Reaping resources once")
        else:
            logger.info(f"Reaping resources every {format_duration(self.interval)}")

        while not self.stop_event.is_set():
            self._transition(SchedulerState.RUNNING)
            try:
                report = pipeline()
                self.cycles += 1
                if on_report is not None:
                    on_report(report)
            except Exception:
                self._transition(SchedulerState.STOPPED)
                raise

            if self.interval is None or self.stop_event.is_set():
                break

            self._transition(SchedulerState.SLEEPING)
            logger.debug(f"Sleeping for {format_duration(self.interval)}")
            if self.stop_event.wait(self.interval.total_seconds()):
                break

        self._transition(SchedulerState.STOPPED)
        return self.state
