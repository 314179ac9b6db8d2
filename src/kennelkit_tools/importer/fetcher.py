"""
Fetching raw resource records from the API.

The fetcher is the only component that talks to the network. Listing several
resource types runs one thread per type; single records are fetched with an
explicit alias fallback for legacy dashboards.
"""

import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from .base import ImportOptions, ImportResult

logger = logging.getLogger(__name__)

RawRecord = Dict[str, Any]

# Legacy ids can belong to either kind of legacy dashboard
RESOURCE_ALIASES: Dict[str, str] = {"dash": "screen"}
NO_MATCH = re.compile(r"No \S+ match(?:es)? that")
INTEGER_ID = re.compile(r"-?\d+")


class ResourceApi(Protocol):
    """The two calls the importer issues against the API."""

    def list(
        self,
        resource: str,
        with_downtimes: bool = ...,
        name: Optional[str] = ...,
        monitor_tags: Optional[List[str]] = ...,
    ) -> Union[List[RawRecord], Dict[str, List[RawRecord]]]:
        ...

    def show(self, resource: str, id: Union[int, str]) -> RawRecord:
        ...


@dataclass
class FetchOutcome:
    """
    Result of fetching a single record.

    Exactly one of record and error is set. resource is the resource type that
    produced the outcome, which differs from the requested one after an alias
    fallback.
    """

    resource: str
    record: Optional[RawRecord] = None
    error: Optional[Exception] = None
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> RawRecord:
        """Return the record or raise the original error."""
        if self.error is not None:
            raise self.error
        return self.record


def alias_for(resource: str, error: Exception, aliases: Optional[Dict[str, str]] = None) -> Optional[str]:
    """Resource type to retry with after a failed show, or None."""
    alias = (RESOURCE_ALIASES if aliases is None else aliases).get(resource)
    if alias and NO_MATCH.search(str(error)):
        return alias
    return None


class Fetcher:
    """
    Issues list and show calls for resource types.

    Usage:
        fetcher = Fetcher(api)
        records = fetcher.list("monitor", ImportOptions(tags=["team:core"]))
        outcome = fetcher.show_with_alias("dash", 42)
    """

    def __init__(self, api: ResourceApi):
        self.api = api

    def list(self, resource: str, options: Optional[ImportOptions] = None) -> List[RawRecord]:
        """
        List raw records of one resource type, in API order.

        Collections wrapped under a single key are unwrapped and their
        integer-like string ids coerced to integers. Other ids, missing ones
        included, are left for the normalizer to judge per record.
        """
        options = options or ImportOptions()
        results = self.api.list(
            resource,
            with_downtimes=options.with_downtimes,
            name=options.name,
            monitor_tags=list(options.tags),
        )
        if isinstance(results, dict):
            results = results[next(iter(results))]
            for record in results:
                if isinstance(record.get("id"), str) and INTEGER_ID.fullmatch(record["id"]):
                    record["id"] = int(record["id"])

        logger.debug(f"Listed {len(results)} {resource} records")
        return list(results)

    def list_many(self, resources: Sequence[str], options: Optional[ImportOptions] = None) -> List[ImportResult]:
        """
        List several resource types concurrently.

        Results come back in the order of resources, whatever order the
        requests finish in. The first failure is raised unless
        options.skip_on_error is set, in which case it is recorded on that
        type's result.
        """
        options = options or ImportOptions()
        if not resources:
            return []

        workers = options.max_workers or len(resources)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="kennelkit-fetch") as pool:
            futures = [pool.submit(self._timed_list, resource, options) for resource in resources]
            return [future.result() for future in futures]

    def _timed_list(self, resource: str, options: ImportOptions) -> ImportResult:
        start_time = time.time()
        try:
            records = self.list(resource, options)
        except Exception as e:
            if not options.skip_on_error:
                raise
            error_msg = f"Failed to list {resource}: {e}"
            logger.warning(error_msg)
            return ImportResult(
                resource_type=resource,
                count=0,
                resources=[],
                errors=[error_msg],
                duration_seconds=time.time() - start_time,
            )

        return ImportResult(
            resource_type=resource,
            count=len(records),
            resources=records,
            duration_seconds=time.time() - start_time,
        )

    def show(self, resource: str, id: Union[int, str]) -> RawRecord:
        """Fetch one raw record."""
        return self.api.show(resource, id)

    def show_with_alias(
        self, resource: str, id: Union[int, str], aliases: Optional[Dict[str, str]] = None
    ) -> FetchOutcome:
        """
        Fetch one raw record, falling back to the resource's alias once.

        The fallback is attempted only when the first error says no resource
        matched. A failure of the fallback is returned as is. aliases
        replaces RESOURCE_ALIASES, e.g. to offer only registered types.
        """
        try:
            return FetchOutcome(resource=resource, record=self.show(resource, id))
        except Exception as e:
            alias = alias_for(resource, e, aliases)
            if alias is None:
                return FetchOutcome(resource=resource, error=e)
            logger.info(f"No {resource} {id}, retrying as {alias}")

        try:
            return FetchOutcome(resource=alias, record=self.show(alias, id), attempts=2)
        except Exception as e:
            return FetchOutcome(resource=alias, error=e, attempts=2)
