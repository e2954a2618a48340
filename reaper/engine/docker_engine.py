"""
Docker Engine client built on the docker SDK low-level API.

Networks and volumes are identified by name rather than ID: Docker requires
both to be unique by name and names are more meaningful in reports.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import docker
from docker.errors import APIError, DockerException, NotFound
from requests.exceptions import RequestException

from ..cleanup.models import ManagedResource, ResourceKind
from ..errors import (
    EngineConflict,
    EngineConnectionError,
    RemovalError,
    RemovalInProgress,
    ResourceGone,
)
from .base import EngineClient

logger = logging.getLogger(__name__)

# Docker reports RFC3339 timestamps with up to nanosecond precision
_FRACTION_RE = re.compile(r"\.(\d+)")


def connect(timeout: int = 60) -> "DockerEngine":
    """
    Connect to the Docker daemon described by the environment.

    DOCKER_HOST, DOCKER_TLS_VERIFY and DOCKER_CERT_PATH are honoured; without
    them the local socket is used.

    Raises:
        EngineConnectionError: If the daemon cannot be reached
    """
    try:
        client = docker.from_env(timeout=timeout)
    except (DockerException, RequestException) as e:
        raise EngineConnectionError(f"Failed to connect to Docker daemon: {e}") from e
    logger.debug(f"Connected to Docker daemon at {client.api.base_url}")
    return DockerEngine(client.api)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a Docker RFC3339 timestamp, returning None if it is missing or malformed."""
    if not value:
        return None
    # fromisoformat only accepts microsecond precision on older interpreters
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.strip())
    text = text.replace("Z", "+00:00")
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _from_unix(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        return None
    if seconds < 0:
        return None
    return datetime.fromtimestamp(seconds, tz=timezone.utc)


class DockerEngine(EngineClient):
    """EngineClient backed by a docker.APIClient."""

    def __init__(self, api: docker.APIClient):
        self.api = api

    def list_resources(self, kind: ResourceKind, selector: Dict[str, List[str]]) -> List[ManagedResource]:
        try:
            if kind is ResourceKind.CONTAINER:
                return self._list_containers(selector)
            elif kind is ResourceKind.NETWORK:
                return self._list_networks(selector)
            elif kind is ResourceKind.VOLUME:
                return self._list_volumes(selector)
        except (DockerException, RequestException) as e:
            raise EngineConnectionError(f"Failed to list {kind.value}s: {e}") from e
        raise ValueError(f"Unsupported resource kind: {kind}")

    def _list_containers(self, selector: Dict[str, List[str]]) -> List[ManagedResource]:
        resources = []
        for container in self.api.containers(all=True, filters=selector or None):
            container_id = container.get("Id")
            if not container_id:
                logger.warning("Skipped container (unknown ID): missing ID value")
                continue

            names = container.get("Names") or []
            name = names[0].lstrip("/") if names else container_id
            networks = (container.get("NetworkSettings") or {}).get("Networks") or {}

            resources.append(ManagedResource(
                id=container_id,
                kind=ResourceKind.CONTAINER,
                name=name,
                labels=container.get("Labels") or {},
                created_at=_from_unix(container.get("Created")),
                networks=tuple(networks.keys()),
            ))
        return resources

    def _list_networks(self, selector: Dict[str, List[str]]) -> List[ManagedResource]:
        resources = []
        for network in self.api.networks(filters=selector or None):
            name = network.get("Name")
            if not name:
                logger.warning("Skipped network (unknown name): missing name value")
                continue
            resources.append(ManagedResource(
                id=name,
                kind=ResourceKind.NETWORK,
                name=name,
                labels=network.get("Labels") or {},
                created_at=parse_timestamp(network.get("Created")),
            ))
        return resources

    def _list_volumes(self, selector: Dict[str, List[str]]) -> List[ManagedResource]:
        response = self.api.volumes(filters=selector or None) or {}
        for warning in response.get("Warnings") or []:
            logger.warning(f"Encountered warning when listing volumes: {warning}")

        volumes = response.get("Volumes")
        if not volumes:
            logger.debug("No volumes returned")
            return []

        return [
            ManagedResource(
                id=volume["Name"],
                kind=ResourceKind.VOLUME,
                name=volume["Name"],
                labels=volume.get("Labels") or {},
                created_at=parse_timestamp(volume.get("CreatedAt")),
            )
            for volume in volumes
        ]

    def remove(self, resource: ManagedResource) -> None:
        logger.debug(f"Removing {resource.kind.value} {resource.name}")
        try:
            if resource.kind is ResourceKind.CONTAINER:
                self.api.remove_container(resource.id, force=True)
            elif resource.kind is ResourceKind.NETWORK:
                self.api.remove_network(resource.id)
            elif resource.kind is ResourceKind.VOLUME:
                self.api.remove_volume(resource.id, force=True)
        except NotFound as e:
            raise ResourceGone(resource.id, _explain(e)) from e
        except APIError as e:
            reason = _explain(e)
            if e.status_code == 409:
                if "already in progress" in reason.lower():
                    raise RemovalInProgress(resource.id, reason) from e
                raise EngineConflict(resource.id, reason) from e
            raise RemovalError(resource.id, reason) from e
        except (DockerException, RequestException) as e:
            raise RemovalError(resource.id, str(e)) from e


def _explain(error: APIError) -> str:
    return str(error.explanation or error)
