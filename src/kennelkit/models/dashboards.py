"""
Dashboard models.

Three generations of dashboards are supported:
    - Dash: legacy timeboards, titled by 'title' and made of 'graphs'
    - Screen: legacy screenboards, titled by 'board_title' and made of 'widgets'
    - Dashboard: the unified dashboards API, titled by 'title'

A legacy dashboard id does not tell which kind it is, so importing a 'dash' id
falls back to 'screen' when the timeboard endpoint has no match.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Tuple

from .base import Record


class Dash(Record):
    """Legacy timeboard."""

    api_resource: ClassVar[str] = "dash"

    SETTINGS: ClassVar[Tuple[str, ...]] = ("title", "description", "graphs", "template_variables")
    READONLY_FIELDS: ClassVar[Tuple[str, ...]] = Record.READONLY_FIELDS + (
        "resource",
        "created_by",
        "read_only",
        "new_id",
        "url",
    )
    DEFAULTS: ClassVar[Dict[str, Any]] = {"template_variables": []}


class Screen(Record):
    """Legacy screenboard."""

    api_resource: ClassVar[str] = "screen"

    SETTINGS: ClassVar[Tuple[str, ...]] = (
        "board_title",
        "description",
        "widgets",
        "template_variables",
        "height",
        "width",
    )
    READONLY_FIELDS: ClassVar[Tuple[str, ...]] = Record.READONLY_FIELDS + (
        "created_by",
        "read_only",
        "disableCog",
        "disableEditing",
        "isIntegration",
        "isShared",
        "original_title",
        "title_edited",
        "new_id",
        "board_bgtype",
        "showGlobalTimeOnboarding",
    )
    DEFAULTS: ClassVar[Dict[str, Any]] = {"template_variables": [], "height": None, "width": None}


class Dashboard(Record):
    """Dashboard managed through the unified dashboards API."""

    api_resource: ClassVar[str] = "dashboard"

    SETTINGS: ClassVar[Tuple[str, ...]] = (
        "title",
        "description",
        "layout_type",
        "widgets",
        "template_variables",
        "template_variable_presets",
        "reflow_type",
        "notify_list",
    )
    READONLY_FIELDS: ClassVar[Tuple[str, ...]] = Record.READONLY_FIELDS + (
        "author_handle",
        "author_name",
        "modified_at",
        "url",
        "is_read_only",
        "restricted_roles",
    )
    DEFAULTS: ClassVar[Dict[str, Any]] = {
        "template_variables": [],
        "template_variable_presets": [],
        "notify_list": [],
        "reflow_type": None,
    }
