"""
Resource importer - Capture existing remote resources as kennelkit declarations.

Resources are fetched from the API, normalized against their model (read-only
fields and defaults removed, a kennel_id slug derived from the title) and
rendered as deterministic Python source ready to be checked in.

Usage:
    from kennelkit import Api
    from kennelkit_tools.importer import Importer, ImportOptions

    importer = Importer(Api.from_env())

    # All registered resource types, filtered by RESOURCE / TAGS / NAME
    print(importer.import_all(ImportOptions.from_env()))

    # A single dashboard (legacy 'dash' ids fall back to 'screen')
    print(importer.import_one("dash", 42))

Key Classes:
    - Importer: Entry point tying fetching, normalizing and rendering together
    - Fetcher: List and show calls, concurrent listing, alias fallback
    - ImportOptions: Resource types and filters
    - ImportResult: Declarations and errors of one resource type
"""

from .base import ImportOptions, ImportResult
from .errors import ImporterError, MissingIdentifier, TitleMissing, UnsupportedResource
from .fetcher import FetchOutcome, Fetcher, ResourceApi
from .importer import Importer
from .normalizer import TITLES, QueryTemplate, normalize
from .pretty_printer import SORT_ORDER, render, render_declaration

__all__ = [
    # Main classes
    "Importer",
    "Fetcher",
    "FetchOutcome",
    "ResourceApi",
    "ImportOptions",
    "ImportResult",
    # Conversion
    "normalize",
    "render",
    "render_declaration",
    "QueryTemplate",
    "TITLES",
    "SORT_ORDER",
    # Errors
    "ImporterError",
    "UnsupportedResource",
    "MissingIdentifier",
    "TitleMissing",
]
