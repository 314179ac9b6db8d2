"""
Turning raw API records into canonical records ready for rendering.

A canonical record is a plain mapping that always carries the numeric 'id'
returned by the API and a 'kennel_id' slug derived from the resource's title.
"""

import copy
import logging
import re
from typing import Any, Dict, Optional

from kennelkit.models import ModelDescriptor
from kennelkit.utils import parameterize

from .errors import MissingIdentifier, TitleMissing

logger = logging.getLogger(__name__)

TITLES = ("name", "title", "board_title")

# Monitor options the API reports that are already the declaration defaults
MONITOR_DECLARATION_DEFAULTS = ("notify_no_data", "notify_audit")


class QueryTemplate(str):
    """
    A query that references its monitor's critical threshold.

    The value is a str.format template: '{critical}' marks the reference and
    literal braces are doubled.
    """

    FIELD = "critical"

    def resolve(self, critical: Any) -> str:
        return self.format(critical=critical)


def title_of(record: Dict[str, Any]) -> Optional[Any]:
    """First present title field of a record."""
    for key in TITLES:
        if record.get(key) is not None:
            return record[key]
    return None


def normalize(resource: str, model: ModelDescriptor, raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the canonical record for one raw API record.

    The raw record is left untouched.

    Args:
        resource: Resource type the record was fetched as
        model: Descriptor of the resource type
        raw: Record as returned by the API, possibly wrapped under the resource name

    Returns:
        Canonical record

    Raises:
        MissingIdentifier: If the record has no id
        TitleMissing: If the record has none of the title fields
    """
    record = raw.get(resource) or raw
    id = record.get("id")
    if id is None:
        raise MissingIdentifier(resource)

    record = model.normalize({}, record)
    record["id"] = id

    title = title_of(record)
    if title is None:
        raise TitleMissing(resource, id, TITLES)
    record["kennel_id"] = parameterize(title)

    if resource == "monitor":
        record = _flatten_monitor(record, model)

    logger.debug(f"Normalized {resource} {id} as {record['kennel_id']}")
    return record


def _flatten_monitor(record: Dict[str, Any], model: ModelDescriptor) -> Dict[str, Any]:
    flat = copy.copy(record)
    flat.update(flat.pop("options", None) or {})
    flat.update(flat.pop("thresholds", None) or {})

    for key in MONITOR_DECLARATION_DEFAULTS:
        if flat.get(key):
            del flat[key]

    flat = {key: value for key, value in flat.items() if key in model.settings}

    query = flat.get("query")
    critical = flat.get("critical")
    if query and critical is not None:
        flat["query"] = reference_critical(query, critical)
    return flat


def reference_critical(query: str, critical: Any) -> str:
    """
    Point a trailing threshold literal of a monitor query at 'critical'.

    This is a textual heuristic: 'x > 5' becomes a QueryTemplate when 5 is the
    float or integer rendering of critical. Queries that do not end that way
    are returned unchanged.
    """
    try:
        threshold = float(critical)
    except (TypeError, ValueError):
        return query

    literals = {repr(threshold)}
    if threshold.is_integer():
        literals.add(str(int(threshold)))

    pattern = re.compile(
        r"([><=]) (" + "|".join(re.escape(literal) for literal in sorted(literals)) + r")\Z"
    )
    match = pattern.search(query)
    if not match:
        return query

    prefix = query[: match.start(2)].replace("{", "{{").replace("}", "}}")
    return QueryTemplate(prefix + "{" + QueryTemplate.FIELD + "}")
