"""
Unit tests for the Fetcher.

Tests listing, unwrapping, concurrent listing and the alias fallback.
"""

import threading

import pytest

from kennelkit.api import ApiError
from kennelkit_tools.importer import Fetcher, ImportOptions
from kennelkit_tools.importer.fetcher import alias_for
from tests.fixtures import FakeApi, make_dash_payload, make_monitor_payload, make_screen_payload


class TestFetcherList:
    """Tests for Fetcher.list()."""

    def test_passes_filters(self) -> None:
        """Filters are passed to the API, downtimes excluded by default."""
        api = FakeApi(lists={"monitor": []})

        Fetcher(api).list("monitor", ImportOptions(name="cpu", tags=["team:a"]))

        assert api.calls == [
            ("list", "monitor", {"with_downtimes": False, "name": "cpu", "monitor_tags": ["team:a"]})
        ]

    def test_plain_list_returned_as_is(self) -> None:
        """Lists come back in API order."""
        monitors = [make_monitor_payload(id=2), make_monitor_payload(id=1)]
        api = FakeApi(lists={"monitor": monitors})

        assert [m["id"] for m in Fetcher(api).list("monitor")] == [2, 1]

    def test_wrapped_collection_unwrapped_and_ids_coerced(self) -> None:
        """A single-key mapping is unwrapped and ids become integers."""
        api = FakeApi(lists={"dash": {"dashes": [make_dash_payload(id="42"), make_dash_payload(id="7")]}})

        records = Fetcher(api).list("dash")

        assert [r["id"] for r in records] == [42, 7]

    def test_wrapped_collection_keeps_other_ids(self) -> None:
        """Ids that are not integer-like, or absent, are left as they are."""
        no_id = make_dash_payload()
        del no_id["id"]
        api = FakeApi(
            lists={"dashboard": {"dashboards": [{"id": "abc-def-ghi", "title": "T"}, {"id": None, "title": "U"}, no_id]}}
        )

        records = Fetcher(api).list("dashboard")

        assert [r.get("id", "missing") for r in records] == ["abc-def-ghi", None, "missing"]

    def test_negative_string_id_coerced(self) -> None:
        api = FakeApi(lists={"dash": {"dashes": [make_dash_payload(id="-3")]}})

        assert Fetcher(api).list("dash")[0]["id"] == -3

    def test_errors_propagate(self) -> None:
        """API errors are not swallowed."""
        api = FakeApi(lists={"monitor": ApiError("Error 500 during GET /api/v1/monitor")})

        with pytest.raises(ApiError):
            Fetcher(api).list("monitor")


class TestFetcherListMany:
    """Tests for Fetcher.list_many()."""

    def test_results_in_input_order(self) -> None:
        """Results follow the requested order even when completion order differs."""
        dash_listed = threading.Event()

        def on_list(resource: str) -> None:
            if resource == "dash":
                dash_listed.set()
            else:
                # monitor finishes only after dash
                dash_listed.wait(timeout=5)

        api = FakeApi(
            lists={"monitor": [make_monitor_payload()], "dash": {"dashes": [make_dash_payload()]}},
            on_list=on_list,
        )

        results = Fetcher(api).list_many(["monitor", "dash"])

        assert [r.resource_type for r in results] == ["monitor", "dash"]
        assert [r.count for r in results] == [1, 1]

    def test_failure_raises(self) -> None:
        """One failing type fails the whole listing."""
        api = FakeApi(lists={"monitor": [], "dash": ApiError("boom")})

        with pytest.raises(ApiError):
            Fetcher(api).list_many(["monitor", "dash"])

    def test_failure_isolated_with_skip_on_error(self) -> None:
        """With skip_on_error a failing type is reported on its own result."""
        api = FakeApi(lists={"monitor": [make_monitor_payload()], "dash": ApiError("boom")})

        monitor, dash = Fetcher(api).list_many(["monitor", "dash"], ImportOptions(skip_on_error=True))

        assert monitor.success and monitor.count == 1
        assert dash.has_errors
        assert dash.errors == ["Failed to list dash: boom"]

    def test_no_resources(self) -> None:
        """Nothing to list means no API calls."""
        api = FakeApi()

        assert Fetcher(api).list_many([]) == []
        assert api.calls == []


class TestFetcherShowWithAlias:
    """Tests for Fetcher.show_with_alias()."""

    def test_success_without_retry(self) -> None:
        """A found record is returned after one call."""
        api = FakeApi(shows={("dash", 42): make_dash_payload()})

        outcome = Fetcher(api).show_with_alias("dash", 42)

        assert outcome.ok
        assert outcome.resource == "dash"
        assert outcome.attempts == 1
        assert outcome.unwrap()["title"] == "Web Overview"

    def test_dash_retried_as_screen(self) -> None:
        """A 'no match' failure for dash is retried once as screen."""
        api = FakeApi(
            shows={
                ("dash", 42): ApiError("Error 404 during GET /api/v1/dash/42\nNo dashboards match that id"),
                ("screen", 42): make_screen_payload(),
            }
        )

        outcome = Fetcher(api).show_with_alias("dash", 42)

        assert outcome.ok
        assert outcome.resource == "screen"
        assert outcome.attempts == 2
        assert api.calls_to("show") == [("show", "dash", 42), ("show", "screen", 42)]

    def test_second_failure_not_retried(self) -> None:
        """A failing fallback is returned, not retried again."""
        second = ApiError("No screens match that id")
        api = FakeApi(shows={("dash", 42): ApiError("No dashboards match that id"), ("screen", 42): second})

        outcome = Fetcher(api).show_with_alias("dash", 42)

        assert not outcome.ok
        assert outcome.error is second
        assert len(api.calls_to("show")) == 2
        with pytest.raises(ApiError):
            outcome.unwrap()

    def test_other_errors_not_retried(self) -> None:
        """Errors that are not 'no match' are returned after one call."""
        error = ApiError("Error 500 during GET /api/v1/dash/42")
        api = FakeApi(shows={("dash", 42): error})

        outcome = Fetcher(api).show_with_alias("dash", 42)

        assert outcome.error is error
        assert len(api.calls_to("show")) == 1

    def test_resources_without_alias_not_retried(self) -> None:
        """Only dash has a fallback."""
        api = FakeApi(shows={("monitor", 1): ApiError("No monitors match that id")})

        outcome = Fetcher(api).show_with_alias("monitor", 1)

        assert not outcome.ok
        assert len(api.calls_to("show")) == 1

    def test_no_retry_without_aliases(self) -> None:
        """An empty alias map turns the fallback off."""
        error = ApiError("No dashboards match that id")
        api = FakeApi(shows={("dash", 42): error, ("screen", 42): make_screen_payload()})

        outcome = Fetcher(api).show_with_alias("dash", 42, aliases={})

        assert outcome.error is error
        assert api.calls == [("show", "dash", 42)]


class TestAliasFor:
    """Tests for alias_for()."""

    def test_dash_no_match(self) -> None:
        assert alias_for("dash", Exception("No dashboards match that id")) == "screen"

    def test_dash_other_error(self) -> None:
        assert alias_for("dash", Exception("Forbidden")) is None

    def test_screen_has_no_alias(self) -> None:
        assert alias_for("screen", Exception("No screens match that id")) is None

    def test_custom_aliases(self) -> None:
        """An explicit alias map replaces the default one."""
        error = Exception("No dashboards match that id")

        assert alias_for("dash", error, {}) is None
        assert alias_for("dash", error, {"dash": "dashboard"}) == "dashboard"

    def test_singular_no_match_message(self) -> None:
        assert alias_for("dash", Exception("No dash matches that id")) == "screen"
