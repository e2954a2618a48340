"""
Run configuration for a reaper invocation.
"""

from datetime import timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .cleanup.executor import DEFAULT_WORKERS
from .cleanup.models import AgeBound, ResourceKind
from .errors import ConfigError


class RunConfig(BaseModel):
    """Immutable settings for every cycle of one process invocation."""
    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    selector: Dict[str, List[str]] = Field(default_factory=dict)
    min_age: Optional[timedelta] = None
    max_age: Optional[timedelta] = None
    dry_run: bool = False
    reap_networks: bool = False
    interval: Optional[timedelta] = None
    workers: int = Field(default=DEFAULT_WORKERS, ge=1, le=64)

    @model_validator(mode="after")
    def _check_consistency(self) -> "RunConfig":
        try:
            self.age_bound.validate()
        except ConfigError as e:
            raise ValueError(str(e))
        if self.reap_networks and self.kind is not ResourceKind.CONTAINER:
            raise ValueError("reap_networks is only supported for containers")
        if self.interval is not None and self.interval <= timedelta(0):
            raise ValueError("interval must be a positive duration")
        return self

    @property
    def age_bound(self) -> AgeBound:
        return AgeBound(min_age=self.min_age, max_age=self.max_age)

    @classmethod
    def build(cls, **values) -> "RunConfig":
        """
        Create a RunConfig, reporting invalid settings as ConfigError.

        Raises:
            ConfigError: If the settings are inconsistent
        """
        try:
            return cls(**values)
        except ValidationError as e:
            messages = [error["msg"].replace("Value error, ", "") for error in e.errors()]
            raise ConfigError("; ".join(messages)) from e
