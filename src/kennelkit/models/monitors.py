"""
Monitor model.

Monitors keep most of their configuration inside a nested 'options' mapping
(with thresholds nested once more). Declarations keep these flat, so the
settings below list the option and threshold names next to the top-level
fields.
"""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Tuple

from .base import Record

MONITOR_DEFAULTS: Dict[str, Any] = {
    "priority": None,
}

MONITOR_OPTION_DEFAULTS: Dict[str, Any] = {
    "evaluation_delay": None,
    "new_host_delay": 300,
    "timeout_h": 0,
    "renotify_interval": 0,
    "notify_audit": False,
    # notify_no_data is on by default in declarations, so this stays None when it matters
    "no_data_timeframe": None,
    "groupby_simple_monitor": False,
}


class Monitor(Record):
    """Metric, service check, event and query alert monitors."""

    api_resource: ClassVar[str] = "monitor"

    SETTINGS: ClassVar[Tuple[str, ...]] = (
        "name",
        "type",
        "query",
        "message",
        "tags",
        "priority",
        # flattened options
        "escalation_message",
        "evaluation_delay",
        "include_tags",
        "locked",
        "new_host_delay",
        "no_data_timeframe",
        "notify_audit",
        "notify_no_data",
        "renotify_interval",
        "require_full_window",
        "threshold_windows",
        "timeout_h",
        "groupby_simple_monitor",
        # flattened thresholds
        "critical",
        "critical_recovery",
        "warning",
        "warning_recovery",
        "ok",
        "unknown",
    )
    READONLY_FIELDS: ClassVar[Tuple[str, ...]] = Record.READONLY_FIELDS + ("multi",)
    DEFAULTS: ClassVar[Dict[str, Any]] = MONITOR_DEFAULTS

    @classmethod
    def normalize(cls, expected: Dict[str, Any], actual: Dict[str, Any]) -> Dict[str, Any]:
        normalized = super().normalize(expected, actual)

        options = normalized.get("options")
        if options is None:
            return normalized

        # silencing is managed outside of declarations
        options.pop("silenced", None)
        if options.get("escalation_message") == "":
            options["escalation_message"] = None

        cls.ignore_default(expected.get("options") or {}, options, MONITOR_OPTION_DEFAULTS)
        return normalized
