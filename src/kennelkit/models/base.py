"""
Base classes for declarative monitoring resources.

A resource is declared as a constructor call whose settings are lazily
evaluated callables:

    Monitor(
        self,
        name=lambda self: "CPU high",
        query=lambda self: f"avg(last_5m):avg:system.cpu.user{{*}} > {self.critical}",
        critical=lambda self: 90,
    )

Settings are resolved against the record on attribute access, so one setting
can reference another. Each Record subclass also knows how to normalize the
raw API payload of its resource type, which is what the importer relies on.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, ClassVar, Dict, FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

Normalizer = Callable[[Dict[str, Any], Dict[str, Any]], Dict[str, Any]]


# =============================================================================
# MODEL DESCRIPTOR
# =============================================================================

class ModelDescriptor(BaseModel):
    """
    Capability record describing one resource type.

    Attributes:
        name: Constructor name rendered into declarations (e.g., 'Monitor')
        api_resource: API path segment of the resource type (e.g., 'monitor')
        settings: Field names a declaration of this type accepts
        normalize: Pure function (expected, actual) -> normalized copy of actual
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    api_resource: str
    settings: FrozenSet[str]
    normalize: Normalizer


# =============================================================================
# RECORD
# =============================================================================

class Record:
    """
    Base class for every declarable resource.

    Subclasses define:
        - api_resource: API path segment
        - SETTINGS: accepted settings besides id and kennel_id
        - READONLY_FIELDS: API fields that are never declared
        - DEFAULTS: values the declaration format assumes when a setting is absent
    """

    api_resource: ClassVar[str] = ""

    SETTINGS: ClassVar[Tuple[str, ...]] = ()
    READONLY_FIELDS: ClassVar[Tuple[str, ...]] = (
        "deleted",
        "matching_downtimes",
        "id",
        "created",
        "created_at",
        "creator",
        "org_id",
        "modified",
        "overall_state_modified",
        "overall_state",
        "api_resource",
    )
    DEFAULTS: ClassVar[Dict[str, Any]] = {}

    def __init__(self, project: Any, **settings: Callable[["Record"], Any]) -> None:
        unknown = sorted(set(settings) - self.settings())
        if unknown:
            raise ValueError(f"{type(self).__name__} does not support settings: {unknown}")
        for key, value in settings.items():
            if not callable(value):
                raise ValueError(
                    f"{type(self).__name__}.{key} must be callable, e.g. {key}=lambda self: ..."
                )

        object.__setattr__(self, "project", project)
        object.__setattr__(self, "_settings", dict(settings))

    def __getattr__(self, name: str) -> Any:
        # Only called when regular lookup fails
        try:
            setting = self.__dict__["_settings"][name]
        except KeyError:
            raise AttributeError(f"{type(self).__name__} has no setting '{name}'") from None
        return setting(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(sorted(self._settings))})"

    @classmethod
    def settings(cls) -> FrozenSet[str]:
        """All setting names a declaration of this type accepts."""
        return frozenset(("id", "kennel_id") + cls.SETTINGS)

    def as_json(self) -> Dict[str, Any]:
        """Resolve every declared setting into a plain mapping."""
        return {key: getattr(self, key) for key in self._settings}

    # -------------------------------------------------------------------------
    # Normalization of raw API payloads
    # -------------------------------------------------------------------------

    @classmethod
    def normalize(cls, expected: Dict[str, Any], actual: Dict[str, Any]) -> Dict[str, Any]:
        """
        Return a copy of an API payload without read-only fields and defaults.

        Neither argument is modified.

        Args:
            expected: Values the local declaration expects (empty when importing)
            actual: Raw payload returned by the API

        Returns:
            Normalized copy of actual
        """
        normalized = copy.deepcopy(actual)
        for key in cls.READONLY_FIELDS:
            normalized.pop(key, None)
        cls.ignore_default(expected, normalized, cls.DEFAULTS)
        return normalized

    @staticmethod
    def ignore_default(expected: Dict[str, Any], actual: Dict[str, Any], defaults: Dict[str, Any]) -> None:
        """
        Drop keys from actual whose value is what the declaration assumes anyway.

        A key counts as defaulted when its value equals the expected value, or
        the default when nothing is expected. Mutates actual.
        """
        for key, default in defaults.items():
            if key not in actual:
                continue
            if actual[key] == expected.get(key, default):
                del actual[key]

    @classmethod
    def descriptor(cls) -> ModelDescriptor:
        """Build the capability record the importer works with."""
        return ModelDescriptor(
            name=cls.__name__,
            api_resource=cls.api_resource,
            settings=cls.settings(),
            normalize=cls.normalize,
        )
