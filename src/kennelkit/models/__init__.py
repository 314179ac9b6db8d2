"""
Declarative monitoring resources.

Every model is a Record subclass; ModelRegistry maps resource type names to
the descriptors the importer works with.
"""

from .base import ModelDescriptor, Record
from .dashboards import Dash, Dashboard, Screen
from .monitors import MONITOR_DEFAULTS, MONITOR_OPTION_DEFAULTS, Monitor
from .registry import ModelRegistry

__all__ = [
    # Base
    "Record",
    "ModelDescriptor",
    "ModelRegistry",
    # Monitors
    "Monitor",
    "MONITOR_DEFAULTS",
    "MONITOR_OPTION_DEFAULTS",
    # Dashboards
    "Dash",
    "Screen",
    "Dashboard",
]
