"""
Registry mapping resource type names to model descriptors.

The registry is an explicit map built once, either from the built-in models
or from descriptors supplied by the caller:

    registry = ModelRegistry.default()
    registry.register(MyCustomRecord.descriptor())
    registry.get("monitor").name  # 'Monitor'
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .base import ModelDescriptor
from .dashboards import Dash, Dashboard, Screen
from .monitors import Monitor

logger = logging.getLogger(__name__)


class ModelRegistry:
    """Resource type name -> ModelDescriptor, in registration order."""

    def __init__(self, descriptors: Optional[Iterable[ModelDescriptor]] = None) -> None:
        self._descriptors: Dict[str, ModelDescriptor] = {}
        for descriptor in descriptors or ():
            self.register(descriptor)

    @classmethod
    def default(cls) -> "ModelRegistry":
        """Registry of every built-in model."""
        return cls(model.descriptor() for model in (Monitor, Dash, Screen, Dashboard))

    def register(self, descriptor: ModelDescriptor) -> None:
        """
        Register a descriptor under its api_resource.

        Registering the same resource twice replaces the earlier descriptor.
        """
        if descriptor.api_resource in self._descriptors:
            logger.debug(f"Replacing model for resource: {descriptor.api_resource}")
        self._descriptors[descriptor.api_resource] = descriptor

    def get(self, resource: str) -> Optional[ModelDescriptor]:
        """Descriptor for a resource type, or None when unknown."""
        return self._descriptors.get(resource)

    def resources(self) -> List[str]:
        """Registered resource type names."""
        return list(self._descriptors)

    def __contains__(self, resource: object) -> bool:
        return resource in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
