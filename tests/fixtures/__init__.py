"""Test fixtures for kennelkit."""

from .payload_factories import (
    FakeApi,
    make_dash_payload,
    make_monitor_payload,
    make_screen_payload,
)

__all__ = [
    "FakeApi",
    "make_monitor_payload",
    "make_dash_payload",
    "make_screen_payload",
]
