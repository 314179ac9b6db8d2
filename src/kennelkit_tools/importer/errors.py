"""
Errors raised while converting remote resources into declarations.

API failures are not wrapped: whatever the API client raises reaches the
caller unchanged.
"""


class ImporterError(Exception):
    """Base class for importer errors."""


class UnsupportedResource(ImporterError, ValueError):
    """The requested resource type has no registered model."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} is not supported")
        self.resource = resource


class MissingIdentifier(ImporterError, KeyError):
    """A fetched record has no id."""

    def __init__(self, resource: str):
        super().__init__(f"{resource} record has no id")
        self.resource = resource

    def __str__(self) -> str:
        return self.args[0]


class TitleMissing(ImporterError, KeyError):
    """A fetched record has none of the title fields a kennel_id is derived from."""

    def __init__(self, resource: str, id: object, titles: tuple):
        super().__init__(f"{resource} {id} has none of {', '.join(titles)}")
        self.resource = resource
        self.id = id

    def __str__(self) -> str:
        return self.args[0]
