"""
docker-reaper - Removes expired Docker containers, networks and volumes.

This package provides a CLI and a small library for sweeping container-engine
resources whose age falls inside a configured window, once or on a timer.
"""

__version__ = "1.1.0"
__author__ = "docker-reaper contributors"
