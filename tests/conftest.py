from __future__ import annotations

from typing import Any, Callable

import pytest

from card_issuers.core.catalog import IssuerCatalog
from card_issuers.core.models import Issuer


def issuer_record(**overrides: Any) -> dict:
    """A valid issuer record; override any field."""
    record = {
        "id": "acme",
        "name": "Acme Cards",
        "website": "https://acme.example",
        "roles": ["program_manager"],
        "networks": ["visa"],
        "card_types": ["debit"],
        "regions_supported": [{"code": "US"}],
        "customer_type": ["b2b"],
        "custody_model": "custodial",
        "funding_sources": ["stablecoin"],
        "stablecoins": ["USDC"],
        "chains": ["Ethereum"],
        "kyc_kyb": "required",
        "pricing_model": ["per_card"],
        "api_maturity": 3,
        "docs_quality": 3,
        "confidence": "medium",
        "notes": "",
        "sources": [],
    }
    record.update(overrides)
    return record


@pytest.fixture
def make_issuer() -> Callable[..., Issuer]:
    def factory(**overrides: Any) -> Issuer:
        return Issuer.model_validate(issuer_record(**overrides))

    return factory


@pytest.fixture
def catalog(make_issuer) -> IssuerCatalog:
    """Three issuers with distinct coverage and capabilities."""
    return IssuerCatalog([
        make_issuer(
            id="alpha",
            name="Alpha",
            roles=["orchestration", "program_manager"],
            networks=["visa"],
            regions_supported=[{"code": "US"}, {"code": "MX"}],
            customer_type=["both"],
            custody_model="hybrid",
            stablecoins=["USDC", "USDT"],
            chains=["Ethereum", "Base"],
            kyc_kyb="required",
            card_types=["debit", "credit"],
            api_maturity=4,
            docs_quality=4,
        ),
        make_issuer(
            id="beta",
            name="Beta",
            roles=["processor"],
            networks=["mastercard"],
            regions_supported=[{"code": "GB"}, {"code": "us", "notes": "pilot"}],
            customer_type=["b2c"],
            custody_model="non_custodial",
            stablecoins=["USDC"],
            chains=["agnostic"],
            kyc_kyb="optional",
            card_types=["prepaid"],
            api_maturity=2,
            docs_quality=5,
        ),
        make_issuer(
            id="gamma",
            name="Gamma",
            roles=["bin_sponsor"],
            networks=["visa", "mastercard"],
            regions_supported=[{"code": "SG"}],
            customer_type=["b2b"],
            custody_model="custodial",
            stablecoins=["DAI"],
            chains=["Solana"],
            kyc_kyb="not_supported",
            card_types=["debit"],
            api_maturity=5,
            docs_quality=5,
        ),
    ], source="fixture")
