"""
Data models for resource sweeps and removal outcomes.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..errors import ConfigError


class ResourceKind(Enum):
    """Kinds of container-engine resources the reaper can remove."""
    CONTAINER = "container"
    NETWORK = "network"
    VOLUME = "volume"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class ManagedResource:
    """Snapshot of an engine resource, fetched fresh every cycle."""
    id: str
    kind: ResourceKind
    name: str
    labels: Dict[str, str] = field(default_factory=dict, hash=False, compare=False)
    created_at: Optional[datetime] = None  # None when the engine reported no usable timestamp
    networks: Tuple[str, ...] = ()  # attached network names, containers only


@dataclass(frozen=True)
class AgeBound:
    """Inclusive age window. Either end may be omitted."""
    min_age: Optional[timedelta] = None
    max_age: Optional[timedelta] = None

    @property
    def is_trivial(self) -> bool:
        return self.min_age is None and self.max_age is None

    def validate(self) -> "AgeBound":
        """
        Check the window is usable.

        Raises:
            ConfigError: If a bound is not positive or min_age >= max_age
        """
        for label, value in (("min_age", self.min_age), ("max_age", self.max_age)):
            if value is not None and value <= timedelta(0):
                raise ConfigError(f"{label} must be a positive duration")
        if self.min_age is not None and self.max_age is not None and self.min_age >= self.max_age:
            raise ConfigError("min_age must be less than max_age")
        return self

    @staticmethod
    def age_of(resource: ManagedResource, now: datetime) -> Optional[timedelta]:
        if resource.created_at is None:
            return None
        return now - resource.created_at


class RemovalResult(Enum):
    """Result of a single removal attempt."""
    REMOVED = "removed"
    SKIPPED = "skipped"
    FAILED = "failed"


DRY_RUN_REASON = "dry-run"


@dataclass(frozen=True)
class RemovalOutcome:
    """What happened to one candidate resource."""
    resource: ManagedResource
    result: RemovalResult
    reason: Optional[str] = None  # skip reason or error description

    @classmethod
    def removed(cls, resource: ManagedResource) -> "RemovalOutcome":
        return cls(resource, RemovalResult.REMOVED)

    @classmethod
    def skipped(cls, resource: ManagedResource, reason: str) -> "RemovalOutcome":
        return cls(resource, RemovalResult.SKIPPED, reason)

    @classmethod
    def failed(cls, resource: ManagedResource, error) -> "RemovalOutcome":
        return cls(resource, RemovalResult.FAILED, str(error))

    @property
    def is_dry_run(self) -> bool:
        return self.result is RemovalResult.SKIPPED and self.reason == DRY_RUN_REASON


@dataclass
class RunReport:
    """
    Outcomes of one cycle.

    The primary pass holds the resources of the configured kind; the derived
    networks pass holds networks reaped because a targeted container used them.
    """
    kind: ResourceKind
    primary: List[RemovalOutcome] = field(default_factory=list)
    derived_networks: List[RemovalOutcome] = field(default_factory=list)

    @property
    def outcomes(self) -> List[RemovalOutcome]:
        return self.primary + self.derived_networks

    def by_kind(self, kind: ResourceKind) -> List[RemovalOutcome]:
        return [o for o in self.outcomes if o.resource.kind is kind]

    def counts(self) -> Dict[str, int]:
        totals = {result.value: 0 for result in RemovalResult}
        for outcome in self.outcomes:
            totals[outcome.result.value] += 1
        return totals

    def __len__(self) -> int:
        return len(self.primary) + len(self.derived_networks)
