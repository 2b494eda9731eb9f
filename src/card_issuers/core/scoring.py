"""Issuer ranking engine.

Country is a hard gate: issuers that do not operate in the requested country
are dropped before scoring. Every other criterion is soft: a match adds
points and an explanation, a mismatch only adds a ``missing`` entry. API
maturity and documentation quality are always credited.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from .models import (
    KYCKYB,
    Chain,
    CompareQuery,
    CompareResponse,
    ComparisonResult,
    CustomerType,
    Issuer,
    MatchReason,
)

logger = logging.getLogger(__name__)

COUNTRY_POINTS = 20
CRITERION_POINTS = 10
QUALITY_MULTIPLIER = 2
DEFAULT_SCORE = 50


def _kyc_matches(issuer: Issuer, wanted: str) -> bool:
    # "optional" is satisfied by any issuer that does not refuse KYC outright.
    if wanted == KYCKYB.REQUIRED.value:
        return issuer.kyc_kyb == KYCKYB.REQUIRED.value
    if wanted == KYCKYB.OPTIONAL.value:
        return issuer.kyc_kyb != KYCKYB.NOT_SUPPORTED.value
    return False


@dataclass(frozen=True)
class Criterion:
    """A soft criterion: which query field it reads and how it is judged."""

    field: str
    reason_type: str
    matches: Callable[[Issuer, str], bool]
    matched: Callable[[Issuer, str], str]
    unmatched: Callable[[Issuer, str], str]


CRITERIA: tuple[Criterion, ...] = (
    Criterion(
        field="network",
        reason_type="network",
        matches=lambda issuer, v: v in issuer.networks,
        matched=lambda issuer, v: f"Supports {v} network",
        unmatched=lambda issuer, v: f"Does not support network: {v}",
    ),
    Criterion(
        field="stablecoin",
        reason_type="stablecoin",
        matches=lambda issuer, v: v in issuer.stablecoins,
        matched=lambda issuer, v: f"Supports {v}",
        unmatched=lambda issuer, v: f"Does not support stablecoin: {v}",
    ),
    Criterion(
        field="chain",
        reason_type="chain",
        matches=lambda issuer, v: v in issuer.chains or Chain.AGNOSTIC.value in issuer.chains,
        matched=lambda issuer, v: f"Supports {v} or is chain-agnostic",
        unmatched=lambda issuer, v: f"Does not support chain: {v}",
    ),
    Criterion(
        field="custody_model",
        reason_type="custody",
        matches=lambda issuer, v: issuer.custody_model == v,
        matched=lambda issuer, v: f"Matches custody model: {v}",
        unmatched=lambda issuer, v: f"Custody model mismatch: {issuer.custody_model} vs {v}",
    ),
    Criterion(
        field="card_type",
        reason_type="card_type",
        matches=lambda issuer, v: v in issuer.card_types,
        matched=lambda issuer, v: f"Supports {v} cards",
        unmatched=lambda issuer, v: f"Does not support card type: {v}",
    ),
    Criterion(
        field="customer_type",
        reason_type="customer_type",
        matches=lambda issuer, v: v in issuer.customer_type or CustomerType.BOTH.value in issuer.customer_type,
        matched=lambda issuer, v: f"Supports {v} customers",
        unmatched=lambda issuer, v: f"Does not support customer type: {v}",
    ),
    Criterion(
        field="kyc",
        reason_type="kyc",
        matches=_kyc_matches,
        matched=lambda issuer, v: f"KYC requirement matches: {v}",
        unmatched=lambda issuer, v: f"KYC requirement mismatch: {issuer.kyc_kyb} vs {v}",
    ),
)


def score_issuer(issuer: Issuer, query: CompareQuery) -> Optional[ComparisonResult]:
    """Score one issuer against a query with a country.

    Returns None when the issuer does not support the query country.
    """
    if not issuer.supports_country(query.country):
        return None

    reasons = [MatchReason(type="country", message=f"Supports country: {query.country}", score=COUNTRY_POINTS)]
    missing: list[str] = []

    for criterion in CRITERIA:
        wanted = getattr(query, criterion.field)
        if not wanted:
            continue
        if criterion.matches(issuer, wanted):
            reasons.append(MatchReason(
                type=criterion.reason_type,
                message=criterion.matched(issuer, wanted),
                score=CRITERION_POINTS,
            ))
        else:
            missing.append(criterion.unmatched(issuer, wanted))

    reasons.append(MatchReason(
        type="api_maturity",
        message=f"API maturity: {issuer.api_maturity}/5",
        score=issuer.api_maturity * QUALITY_MULTIPLIER,
    ))
    reasons.append(MatchReason(
        type="docs_quality",
        message=f"Documentation quality: {issuer.docs_quality}/5",
        score=issuer.docs_quality * QUALITY_MULTIPLIER,
    ))

    return ComparisonResult(
        issuer=issuer,
        score=sum(reason.score for reason in reasons),
        reasons=reasons,
        missing=missing,
    )


def compare_issuers(issuers: Iterable[Issuer], query: CompareQuery) -> list[ComparisonResult]:
    """Rank the issuers supporting ``query.country``, best first.

    Ties keep catalog order. The caller handles queries without a country
    (see ``run_comparison``).
    """
    results = []
    excluded = 0
    for issuer in issuers:
        result = score_issuer(issuer, query)
        if result is None:
            excluded += 1
            continue
        results.append(result)

    logger.debug("Compared %d issuers for %s (%d excluded by country)", len(results), query.country, excluded)
    return sorted(results, key=lambda r: r.score, reverse=True)


def default_matches(issuers: Iterable[Issuer]) -> list[ComparisonResult]:
    """Every issuer with the flat default score, in catalog order."""
    return [ComparisonResult(issuer=issuer, score=DEFAULT_SCORE) for issuer in issuers]


def run_comparison(issuers: Iterable[Issuer], query: CompareQuery) -> CompareResponse:
    """Answer a comparison request, falling back to flat scores without a country."""
    if not query.country:
        matches = default_matches(issuers)
    else:
        matches = compare_issuers(issuers, query)
    return CompareResponse(matches=matches, query=query)
