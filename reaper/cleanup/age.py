"""
Age-based selection of removal candidates.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, List

from .models import AgeBound, ManagedResource

logger = logging.getLogger(__name__)


def within_bound(age: timedelta, bound: AgeBound) -> bool:
    """Closed-interval check: both age == min_age and age == max_age count."""
    if bound.min_age is not None and age < bound.min_age:
        return False
    if bound.max_age is not None and age > bound.max_age:
        return False
    return True


def select(resources: Iterable[ManagedResource], bound: AgeBound, now: datetime) -> List[ManagedResource]:
    """
    Return the resources whose age lies inside the bound, in input order.

    Labels and names are never inspected here; the engine-side selector has
    already narrowed the candidates.

    Args:
        resources: Resources listed for this cycle
        bound: Inclusive age window
        now: Evaluation time (timezone-aware)

    Returns:
        Eligible resources
    """
    if bound.is_trivial:
        return list(resources)

    eligible = []
    for resource in resources:
        age = AgeBound.age_of(resource, now)
        if age is None:
            logger.warning(f"Skipped {resource.kind.value} {resource.name}: missing creation timestamp")
            continue
        if age < timedelta(0):
            logger.warning(f"Skipped {resource.kind.value} {resource.name}: creation timestamp after system time")
            continue
        if not within_bound(age, bound):
            logger.debug(f"Skipped {resource.kind.value} {resource.name}: age outside of specified range")
            continue
        eligible.append(resource)

    return eligible
