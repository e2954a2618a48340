"""
In-memory engine double returning scripted resources and removal outcomes.
"""

import threading
import time
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from reaper.cleanup.models import ManagedResource, ResourceKind
from reaper.engine.base import EngineClient

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_resource(
    resource_id: str,
    kind: ResourceKind = ResourceKind.CONTAINER,
    age: Optional[timedelta] = None,
    networks=(),
    labels=None,
) -> ManagedResource:
    return ManagedResource(
        id=resource_id,
        kind=kind,
        name=resource_id,
        labels=labels or {},
        created_at=NOW - age if age is not None else None,
        networks=tuple(networks),
    )


class FakeEngine(EngineClient):
    """Records every call; removal failures and delays are scripted per resource id."""

    def __init__(
        self,
        resources: Optional[List[ManagedResource]] = None,
        failures: Optional[Dict[str, Exception]] = None,
        delays: Optional[Dict[str, float]] = None,
        list_error: Optional[Exception] = None,
    ):
        self.resources = resources or []
        self.failures = failures or {}
        self.delays = delays or {}
        self.list_error = list_error
        self.list_calls = []
        self.events = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def list_resources(self, kind, selector):
        self.list_calls.append((kind, selector))
        if self.list_error is not None:
            raise self.list_error
        return [r for r in self.resources if r.kind is kind]

    def remove(self, resource):
        with self._lock:
            self.events.append(("start", resource.kind, resource.id))
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(self.delays.get(resource.id, 0))
            if resource.id in self.failures:
                raise self.failures[resource.id]
        finally:
            with self._lock:
                self.in_flight -= 1
                self.events.append(("end", resource.kind, resource.id))

    @property
    def removal_calls(self):
        return [(kind, resource_id) for event, kind, resource_id in self.events if event == "start"]
