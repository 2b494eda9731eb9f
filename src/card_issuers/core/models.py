"""Pydantic data models — the shared business objects.

The REST routes, the MCP tools and the validator CLI all use these models as
the common interface for filtering, scoring and metadata reflection.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Position an issuer occupies in the card program stack."""

    ORCHESTRATION = "orchestration"
    PROGRAM_MANAGER = "program_manager"
    PROCESSOR = "processor"
    BIN_SPONSOR = "bin_sponsor"


class Network(str, Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"


class CardType(str, Enum):
    DEBIT = "debit"
    PREPAID = "prepaid"
    CREDIT = "credit"


class CustomerType(str, Enum):
    B2B = "b2b"
    B2C = "b2c"
    BOTH = "both"


class CustodyModel(str, Enum):
    """Who holds the underlying crypto assets."""

    CUSTODIAL = "custodial"
    NON_CUSTODIAL = "non_custodial"
    HYBRID = "hybrid"


class FundingSource(str, Enum):
    STABLECOIN = "stablecoin"
    FIAT_ACH = "fiat_ach"
    WIRE = "wire"
    CRYPTO = "crypto"


class Stablecoin(str, Enum):
    USDC = "USDC"
    USDT = "USDT"
    DAI = "DAI"
    USDP = "USDP"


class Chain(str, Enum):
    """Funding chains. ``agnostic`` means any chain is accepted."""

    ETHEREUM = "Ethereum"
    BASE = "Base"
    SOLANA = "Solana"
    POLYGON = "Polygon"
    CRONOS = "Cronos"
    AGNOSTIC = "agnostic"


class KYCKYB(str, Enum):
    """Identity verification requirement level."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    NOT_SUPPORTED = "not_supported"


class Confidence(str, Enum):
    """How confident the curators are in an issuer record."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Metadata key -> enum domain. Issuer validation goes through the field types
# below; the metadata reflector lists the same enums in this order.
ENUM_DOMAINS: dict[str, type[Enum]] = {
    "roles": Role,
    "networks": Network,
    "card_types": CardType,
    "customer_types": CustomerType,
    "custody_models": CustodyModel,
    "funding_sources": FundingSource,
    "stablecoins": Stablecoin,
    "chains": Chain,
    "kyc_kyb_options": KYCKYB,
    "confidence_levels": Confidence,
}

# Comparison queries accept narrower domains than issuer records.
QUERY_CUSTOMER_TYPES = (CustomerType.B2B.value, CustomerType.B2C.value)
QUERY_KYC_OPTIONS = (KYCKYB.REQUIRED.value, KYCKYB.OPTIONAL.value)


class Region(BaseModel):
    """A supported country, optionally annotated."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(min_length=2, max_length=2, description="ISO 3166-1 alpha-2 country code")
    notes: Optional[str] = None


class Issuer(BaseModel):
    """One card-issuing entity from the curated dataset."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    id: str = Field(min_length=1, description="Unique key across the catalog")
    name: str
    website: str
    roles: list[Role]
    networks: list[Network]
    card_types: list[CardType]
    regions_supported: list[Region]
    customer_type: list[CustomerType]
    custody_model: CustodyModel
    funding_sources: list[FundingSource]
    stablecoins: list[Stablecoin]
    chains: list[Chain]
    kyc_kyb: KYCKYB
    pricing_model: list[str]
    api_maturity: int = Field(ge=1, le=5, strict=True, description="API maturity from 1 (early) to 5 (mature)")
    docs_quality: int = Field(ge=1, le=5, strict=True, description="Documentation quality from 1 to 5")
    confidence: Confidence
    notes: str
    sources: list[str]

    def supports_country(self, country: str) -> bool:
        """Case-insensitive match against any supported region code."""
        wanted = country.upper()
        return any(region.code.upper() == wanted for region in self.regions_supported)


class CompareQuery(BaseModel):
    """Desired issuer configuration submitted for ranking.

    Values stay plain strings: an unknown value is not an error, it simply
    never matches.
    """

    country: str = Field("", description="ISO country code; empty means no country given")
    network: Optional[str] = None
    customer_type: Optional[str] = Field(None, description="b2b or b2c")
    custody_model: Optional[str] = None
    stablecoin: Optional[str] = None
    chain: Optional[str] = None
    kyc: Optional[str] = Field(None, description="required or optional")
    card_type: Optional[str] = None


class MatchReason(BaseModel):
    """One scored line of the explanation for a ranking."""

    type: str
    message: str
    score: int


class ComparisonResult(BaseModel):
    """An issuer ranked against a query."""

    issuer: Issuer
    score: int
    reasons: list[MatchReason] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list, description="Requested criteria the issuer does not meet")


class CompareResponse(BaseModel):
    matches: list[ComparisonResult]
    query: CompareQuery


class MetadataResponse(BaseModel):
    """Enum domains for every filterable field plus observed countries."""

    roles: list[str]
    networks: list[str]
    card_types: list[str]
    customer_types: list[str]
    custody_models: list[str]
    funding_sources: list[str]
    stablecoins: list[str]
    chains: list[str]
    kyc_kyb_options: list[str]
    confidence_levels: list[str]
    supported_countries: list[str]
