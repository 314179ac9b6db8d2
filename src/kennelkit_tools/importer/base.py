"""
Options and results shared by the importer components.
"""

import os
import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

_LIST_SEPARATOR = re.compile(r"\s*,\s*")


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated setting, ignoring whitespace and empty entries."""
    if not value:
        return []
    return [item for item in _LIST_SEPARATOR.split(value.strip()) if item]


@dataclass
class ImportResult:
    """Result of importing one resource type."""

    resource_type: str
    count: int
    resources: List[Any]
    errors: List[str] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        """Check if import was successful (no errors)."""
        return len(self.errors) == 0

    @property
    def has_errors(self) -> bool:
        """Check if any errors occurred."""
        return len(self.errors) > 0

    def __repr__(self) -> str:
        status = "OK" if self.success else f"ERRORS({len(self.errors)})"
        return f"ImportResult({self.resource_type}: {self.count} resources, {status})"


class ImportOptions(BaseModel):
    """
    Options for controlling import behavior.

    Attributes:
        resources: Resource types to import (empty = every registered type)
        tags: Only list monitors carrying all of these tags
        name: Only list resources whose name contains this string
        with_downtimes: Ask the API to include downtime information
        max_workers: Thread pool size for concurrent listing (None = one per type)
        skip_on_error: Record a failing resource type and continue instead of raising
    """

    resources: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    name: Optional[str] = None
    with_downtimes: bool = False
    max_workers: Optional[int] = Field(default=None, ge=1)
    skip_on_error: bool = False

    @field_validator("resources", "tags", mode="before")
    @classmethod
    def split_comma_separated(cls, v: Any) -> Any:
        """Accept 'a, b,c' as well as ['a', 'b', 'c']."""
        if isinstance(v, str):
            return split_list(v)
        return v

    @field_validator("name", mode="before")
    @classmethod
    def blank_name_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "ImportOptions":
        """
        Read RESOURCE, TAGS and NAME from the environment.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Explicit option values that win over the environment
        """
        env = os.environ if environ is None else environ
        values: dict = {
            "resources": env.get("RESOURCE", ""),
            "tags": env.get("TAGS", ""),
            "name": env.get("NAME"),
        }
        values.update(overrides)
        return cls(**values)
