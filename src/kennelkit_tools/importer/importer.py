"""
Importer - Turn existing remote resources into kennelkit declarations.

This module provides the main entry points: importing every resource of one
or more types, or importing a single resource by id.
"""

import logging
import time
from typing import Any, Dict, List, Optional, Union

from kennelkit.models import ModelDescriptor, ModelRegistry

from .base import ImportOptions, ImportResult
from .errors import UnsupportedResource
from .fetcher import RESOURCE_ALIASES, Fetcher, ResourceApi
from .normalizer import normalize
from .pretty_printer import render_declaration

logger = logging.getLogger(__name__)

DECLARATION_SEPARATOR = ",\n"


class Importer:
    """
    Import existing monitors and dashboards as declarations.

    Usage:
        from kennelkit import Api
        from kennelkit_tools.importer import Importer, ImportOptions

        importer = Importer(Api.from_env())

        # Everything matching RESOURCE / TAGS / NAME from the environment
        text = importer.import_all(ImportOptions.from_env())

        # Only monitors of one team
        text = importer.import_all(ImportOptions(resources=["monitor"], tags=["team:core"]))

        # One dashboard
        text = importer.import_one("dash", 42)

    Listing runs concurrently per resource type; normalizing and rendering
    happen sequentially once a type's records are in.
    """

    def __init__(self, api: ResourceApi, registry: Optional[ModelRegistry] = None):
        self.api = api
        self.registry = registry or ModelRegistry.default()
        self.fetcher = Fetcher(api)

    def model_for(self, resource: str) -> ModelDescriptor:
        """
        Descriptor for a resource type.

        Raises:
            UnsupportedResource: If no model is registered for resource
        """
        model = self.registry.get(resource)
        if model is None:
            raise UnsupportedResource(resource)
        return model

    def resolve_resources(self, options: ImportOptions) -> List[str]:
        """Resource types to import, in order and without duplicates."""
        resources = options.resources or self.registry.resources()
        resolved: List[str] = []
        for resource in resources:
            if resource not in resolved:
                resolved.append(resource)
        return resolved

    def import_all(self, options: Optional[ImportOptions] = None) -> str:
        """
        Import every resource of the selected types.

        Args:
            options: Resource types and filters (default: all types, no filters)

        Returns:
            Declarations of all resources joined by ',\\n', grouped by resource
            type in the order the types were requested
        """
        declarations: List[str] = []
        for result in self.import_all_results(options):
            declarations.extend(result.resources)
        return DECLARATION_SEPARATOR.join(declarations)

    def import_all_results(self, options: Optional[ImportOptions] = None) -> List[ImportResult]:
        """
        Import every resource of the selected types, one result per type.

        The declarations of each type are in the result's resources. Any
        failure is raised unless options.skip_on_error is set, in which case
        the failing type contributes an error and no declarations.
        """
        options = options or ImportOptions()
        resources = self.resolve_resources(options)
        models = {resource: self.model_for(resource) for resource in resources}

        logger.info(f"Importing resource types: {resources}")
        listed = self.fetcher.list_many(resources, options)

        results = []
        for result in listed:
            if result.has_errors:
                results.append(result)
                continue
            results.append(self._convert(result, models[result.resource_type], options))
        return results

    def import_one(self, resource: str, id: Union[int, str]) -> str:
        """
        Import a single resource by id.

        A 'dash' id that the API does not know is retried once as 'screen',
        provided 'screen' is registered.

        Raises:
            UnsupportedResource: If no model is registered for resource
            MissingIdentifier: If the fetched record has no id
            TitleMissing: If the fetched record has no title field
        """
        model = self.model_for(resource)
        aliases = {name: alias for name, alias in RESOURCE_ALIASES.items() if alias in self.registry}
        outcome = self.fetcher.show_with_alias(model.api_resource, id, aliases)
        record = outcome.unwrap()
        if outcome.resource != model.api_resource:
            model = self.model_for(outcome.resource)

        return render_declaration(model, normalize(outcome.resource, model, record))

    def _convert(self, listed: ImportResult, model: ModelDescriptor, options: ImportOptions) -> ImportResult:
        start_time = time.time()
        resource = listed.resource_type
        declarations: List[str] = []
        errors: List[str] = []

        for raw in listed.resources:
            try:
                declarations.append(self._to_declaration(resource, model, raw))
            except Exception as e:
                if not options.skip_on_error:
                    raise
                error_msg = f"Failed to import {resource} {raw.get('id')}: {e}"
                logger.warning(error_msg)
                errors.append(error_msg)

        logger.info(
            f"  Imported {len(declarations)} {resource}"
            + (f" ({len(errors)} errors)" if errors else "")
        )
        return ImportResult(
            resource_type=resource,
            count=len(declarations),
            resources=declarations,
            errors=errors,
            duration_seconds=listed.duration_seconds + time.time() - start_time,
        )

    @staticmethod
    def _to_declaration(resource: str, model: ModelDescriptor, raw: Dict[str, Any]) -> str:
        return render_declaration(model, normalize(resource, model, raw)).strip()
