"""Metadata reflection for client-side form population."""

from __future__ import annotations

from typing import Iterable

from .models import ENUM_DOMAINS, Issuer, MetadataResponse


def supported_countries(issuers: Iterable[Issuer]) -> list[str]:
    """Region codes observed across the catalog, deduplicated and sorted."""
    return sorted({region.code for issuer in issuers for region in issuer.regions_supported})


def reflect_metadata(issuers: Iterable[Issuer]) -> MetadataResponse:
    """Fixed enum domains for every filterable field plus the observed countries."""
    domains = {key: [member.value for member in enum] for key, enum in ENUM_DOMAINS.items()}
    return MetadataResponse(**domains, supported_countries=supported_countries(issuers))
