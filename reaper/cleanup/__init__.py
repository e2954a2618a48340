"""
Age-based selection and forced removal of engine resources.
"""

from .models import (
    AgeBound,
    ManagedResource,
    RemovalOutcome,
    RemovalResult,
    ResourceKind,
    RunReport,
)
from .age import select
from .executor import RemovalExecutor
from .networks import NetworkReapOrchestrator

__all__ = [
    "AgeBound",
    "ManagedResource",
    "RemovalOutcome",
    "RemovalResult",
    "ResourceKind",
    "RunReport",
    "select",
    "RemovalExecutor",
    "NetworkReapOrchestrator",
]
