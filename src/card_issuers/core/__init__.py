"""Core business logic — catalog, filters, scoring and metadata.

This module is framework-agnostic. It has no dependency on MCP, Starlette,
or any server framework. The server and the validator CLI both import from
here.
"""

from .catalog import IssuerCatalog, load_catalog, parse_catalog
from .errors import CatalogError, CatalogLoadError, CatalogValidationError
from .filters import filter_catalog
from .metadata import reflect_metadata
from .scoring import compare_issuers, default_matches, run_comparison

__all__ = [
    "CatalogError",
    "CatalogLoadError",
    "CatalogValidationError",
    "IssuerCatalog",
    "compare_issuers",
    "default_matches",
    "filter_catalog",
    "load_catalog",
    "parse_catalog",
    "reflect_metadata",
    "run_comparison",
]
