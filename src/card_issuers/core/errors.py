"""Catalog loading exceptions.

Only the loaders raise these. Filtering, scoring and metadata reflection
accept any input and never raise.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for catalog loading problems."""


class CatalogLoadError(CatalogError):
    """The dataset could not be read, fetched or decoded."""


class CatalogValidationError(CatalogError):
    """The dataset was read but one or more records are invalid."""

    def __init__(self, errors: list[str], source: str = "<document>"):
        self.errors = errors
        self.source = source
        super().__init__(f"{len(errors)} validation error(s) in {source}")
