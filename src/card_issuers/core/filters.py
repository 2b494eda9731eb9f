"""Hard filters for the issuer list endpoints.

Criteria combine with AND; the values given for one criterion combine with
OR. Absent or empty criteria impose no constraint, and unrecognized values
simply match nothing.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping, Optional, Sequence, Union

from .models import Issuer

logger = logging.getLogger(__name__)

CriterionValue = Union[str, Sequence[str], None]


def _has_role(issuer: Issuer, value: str) -> bool:
    return value in issuer.roles


def _has_network(issuer: Issuer, value: str) -> bool:
    return value in issuer.networks


def _has_customer_type(issuer: Issuer, value: str) -> bool:
    return value in issuer.customer_type


def _has_country(issuer: Issuer, value: str) -> bool:
    return issuer.supports_country(value)


FILTERS: dict[str, Callable[[Issuer, str], bool]] = {
    "role": _has_role,
    "network": _has_network,
    "customer_type": _has_customer_type,
    "country": _has_country,
}


def _accepted_values(value: CriterionValue) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value] if value else []
    return [v for v in value if v]


def filter_catalog(
    issuers: Iterable[Issuer],
    criteria: Optional[Mapping[str, CriterionValue]] = None,
) -> list[Issuer]:
    """Return the issuers satisfying every supplied criterion, in catalog order."""
    active: list[tuple[Callable[[Issuer, str], bool], list[str]]] = []
    for name, value in (criteria or {}).items():
        predicate = FILTERS.get(name)
        if predicate is None:
            logger.debug("Ignoring unknown filter criterion %r", name)
            continue
        accepted = _accepted_values(value)
        if accepted:
            active.append((predicate, accepted))

    return [
        issuer
        for issuer in issuers
        if all(any(predicate(issuer, v) for v in accepted) for predicate, accepted in active)
    ]
