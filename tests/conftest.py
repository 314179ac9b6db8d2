"""
Shared pytest fixtures for kennelkit tests.

Provides environment management, the default model registry and helpers to
load rendered declarations back into models.
"""

import os
import textwrap
from typing import Any, Callable, Dict, Generator

import pytest

from kennelkit.models import Dash, Dashboard, ModelRegistry, Monitor, Record, Screen

IMPORT_ENV_VARS = ("RESOURCE", "TAGS", "NAME")


@pytest.fixture(autouse=True)
def clean_import_environment() -> Generator[None, None, None]:
    """
    Autouse fixture that removes RESOURCE, TAGS and NAME for the test duration.

    This prevents the developer's shell from leaking into import options.
    """
    originals = {key: os.environ.pop(key, None) for key in IMPORT_ENV_VARS}
    yield
    for key, value in originals.items():
        if value is not None:
            os.environ[key] = value
        elif key in os.environ:
            del os.environ[key]


@pytest.fixture
def registry() -> ModelRegistry:
    """Registry of the built-in models."""
    return ModelRegistry.default()


@pytest.fixture
def project() -> object:
    """Stand-in for the project a declaration is made in."""
    return object()


@pytest.fixture
def load_declaration(project: object) -> Callable[[str], Record]:
    """
    Evaluate rendered declaration text into a model instance.

    'self' in the text refers to the project fixture.
    """

    def _load(text: str) -> Any:
        namespace: Dict[str, Any] = {
            "self": project,
            "textwrap": textwrap,
            "Monitor": Monitor,
            "Dash": Dash,
            "Screen": Screen,
            "Dashboard": Dashboard,
        }
        return eval(text, namespace)

    return _load
