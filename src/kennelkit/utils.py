"""
Small helpers shared by the models and the importer.
"""

import re

_INVALID_SLUG_CHARS = re.compile(r"[^a-z0-9\-_]+")
_REPEATED_SEPARATORS = re.compile(r"-{2,}")


def parameterize(value: str) -> str:
    """
    Turn a human readable title into a slug usable as a kennel_id.

    Example:
        parameterize("CPU > 90% on Web (prod)")
        # Returns: "cpu-90-on-web-prod"
    """
    slug = _INVALID_SLUG_CHARS.sub("-", str(value).lower())
    slug = _REPEATED_SEPARATORS.sub("-", slug)
    return slug.strip("-")
