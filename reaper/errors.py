"""
Exception types raised by the reaper.

Fatal errors (configuration, engine connectivity) propagate to the caller.
Removal errors are per-resource and never leave the removal executor.
"""


class ReaperError(Exception):
    """Base class for all reaper errors."""


class ConfigError(ReaperError):
    """Raised for invalid durations, malformed filters or age bounds."""


class EngineConnectionError(ReaperError):
    """Raised when the container engine cannot be reached or listed."""


class RemovalError(ReaperError):
    """A single resource could not be removed."""

    def __init__(self, resource_id: str, reason: str):
        self.resource_id = resource_id
        self.reason = reason
        super().__init__(reason)


class ResourceGone(RemovalError):
    """The resource no longer exists (removed externally after listing)."""


class RemovalInProgress(RemovalError):
    """The engine is already removing this resource."""


class EngineConflict(RemovalError):
    """The engine refused the removal because of a conflicting state."""
