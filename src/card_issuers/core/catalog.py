"""Issuer catalog — the immutable, in-memory dataset and its loaders.

The catalog is read once at start-up and passed explicitly into every
filtering, scoring and metadata function. Loading failures either raise
(strict mode) or degrade to an empty catalog, depending on configuration.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from pydantic import ValidationError

from ..config import Settings
from .clients.remote import fetch_catalog_document
from .errors import CatalogError, CatalogLoadError, CatalogValidationError
from .models import Issuer

logger = logging.getLogger(__name__)

BUNDLED_DATA = "issuers.json"


class IssuerCatalog:
    """Read-only sequence of validated issuers."""

    def __init__(self, issuers: Iterable[Issuer] = (), source: str = "<memory>"):
        self._issuers: tuple[Issuer, ...] = tuple(issuers)
        self._by_id: dict[str, Issuer] = {}
        for issuer in self._issuers:
            self._by_id.setdefault(issuer.id, issuer)
        self.source = source

    def __iter__(self) -> Iterator[Issuer]:
        return iter(self._issuers)

    def __len__(self) -> int:
        return len(self._issuers)

    def __repr__(self) -> str:
        return f"IssuerCatalog({len(self)} issuers from {self.source})"

    @property
    def issuers(self) -> tuple[Issuer, ...]:
        return self._issuers

    def get(self, issuer_id: str) -> Optional[Issuer]:
        """Look up an issuer by id. Unknown ids return None."""
        return self._by_id.get(issuer_id)

    def ids(self) -> list[str]:
        return [issuer.id for issuer in self._issuers]


def parse_catalog(document: Any, source: str = "<document>") -> IssuerCatalog:
    """Validate a decoded JSON document and build a catalog from it.

    Every invalid record and every duplicate id is reported; the errors are
    raised together as a single CatalogValidationError.
    """
    if not isinstance(document, list):
        raise CatalogValidationError(["issuers document must contain an array"], source)

    errors: list[str] = []
    issuers: list[Issuer] = []
    seen: set[str] = set()

    for index, record in enumerate(document):
        record_id = record.get("id") if isinstance(record, dict) else None
        label = record_id if isinstance(record_id, str) and record_id else f"[{index}]"
        if label in seen:
            errors.append(f"Duplicate ID: {label}")
        try:
            issuer = Issuer.model_validate(record)
        except ValidationError as exc:
            for err in exc.errors():
                location = ".".join(str(part) for part in err["loc"]) or "<record>"
                errors.append(f"{label}: {location}: {err['msg']}")
            seen.add(label)
            continue
        seen.add(issuer.id)
        issuers.append(issuer)

    if errors:
        raise CatalogValidationError(errors, source)
    return IssuerCatalog(issuers, source=source)


def load_catalog_file(path: Path) -> IssuerCatalog:
    """Read, decode and validate a dataset file."""
    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(f"Cannot read {path}: {exc}") from exc
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogLoadError(f"Invalid JSON in {path}: {exc}") from exc
    return parse_catalog(document, source=str(path))


def bundled_data_path() -> Path:
    """Path of the dataset shipped inside the package."""
    return Path(str(resources.files("card_issuers").joinpath("data", BUNDLED_DATA)))


def candidate_paths(data_path: Optional[Path] = None, cwd: Optional[Path] = None) -> list[Path]:
    """Dataset locations to try, in order."""
    base = cwd or Path.cwd()
    paths = []
    if data_path is not None:
        paths.append(data_path)
    paths.extend([
        base / "data" / BUNDLED_DATA,
        base / "api" / "data" / BUNDLED_DATA,
        bundled_data_path(),
    ])
    return paths


def load_first_available(paths: Iterable[Path]) -> IssuerCatalog:
    """Load the first candidate that exists.

    A file that exists but fails validation is an error, not a reason to move
    on to the next candidate.
    """
    tried = []
    for path in paths:
        tried.append(str(path))
        if not path.is_file():
            logger.debug("No issuers dataset at %s", path)
            continue
        return load_catalog_file(path)
    raise CatalogLoadError("Could not find issuers.json in any known path: " + ", ".join(tried))


async def load_catalog(settings: Settings) -> IssuerCatalog:
    """Load the catalog described by settings.

    Fetches over HTTP when ``settings.data_url`` is set, otherwise walks the
    candidate paths. Failures raise in strict mode and degrade to an empty
    catalog otherwise.
    """
    try:
        if settings.data_url:
            document = await fetch_catalog_document(settings.data_url, timeout=settings.http_timeout)
            catalog = parse_catalog(document, source=settings.data_url)
        else:
            catalog = load_first_available(candidate_paths(settings.data_path))
    except CatalogError as exc:
        if settings.strict_load:
            raise
        if isinstance(exc, CatalogValidationError):
            for message in exc.errors:
                logger.error("  %s", message)
        logger.error("Issuers dataset unavailable, serving an empty catalog: %s", exc)
        return IssuerCatalog(source="<empty>")

    logger.info("Loaded %d issuers from %s", len(catalog), catalog.source)
    return catalog
