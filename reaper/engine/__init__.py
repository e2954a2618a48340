"""
Container engine clients.
"""

from .base import EngineClient
from .docker_engine import DockerEngine, connect

__all__ = [
    "EngineClient",
    "DockerEngine",
    "connect",
]
