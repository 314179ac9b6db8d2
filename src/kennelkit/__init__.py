"""
Kennelkit - Monitoring resources as code.

This library declares monitors and dashboards as Python constructor calls
whose settings are lazily evaluated, and ships the registry the importer in
kennelkit_tools uses to turn existing remote resources into such
declarations.

Quick Start:
    from kennelkit import Monitor

    cpu = Monitor(
        project,
        name=lambda self: "CPU high",
        kennel_id=lambda self: "cpu-high",
        type=lambda self: "metric alert",
        query=lambda self: f"avg(last_5m):avg:system.cpu.user{{*}} > {self.critical}",
        critical=lambda self: 90,
    )
    cpu.query  # 'avg(last_5m):avg:system.cpu.user{*} > 90'
"""

__version__ = "0.1.0"

from kennelkit.api import Api, ApiError
from kennelkit.models import (
    Dash,
    Dashboard,
    ModelDescriptor,
    ModelRegistry,
    Monitor,
    Record,
    Screen,
)
from kennelkit.utils import parameterize

__all__ = [
    # API
    "Api",
    "ApiError",
    # Models
    "Record",
    "ModelDescriptor",
    "ModelRegistry",
    "Monitor",
    "Dash",
    "Screen",
    "Dashboard",
    # Utilities
    "parameterize",
]
