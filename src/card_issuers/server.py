"""Stablecoin Card Issuers server.

FastMCP server exposing the issuer catalog both as read-only MCP tools and
as plain REST routes (served by the HTTP transports).
Run: card-issuers-mcp
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.requests import Request
from starlette.responses import JSONResponse

from .config import Settings
from .core.catalog import IssuerCatalog, load_catalog
from .core.filters import filter_catalog
from .core.metadata import reflect_metadata
from .core.models import CompareQuery, ComparisonResult, Issuer
from .core.scoring import run_comparison

logger = logging.getLogger(__name__)

READ_ONLY = ToolAnnotations(readOnlyHint=True, destructiveHint=False, idempotentHint=True, openWorldHint=False)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

COMPARE_FIELDS = ("country", "network", "customer_type", "custody_model", "stablecoin", "chain", "kyc", "card_type")

NOT_FOUND = {"error": "Issuer not found"}


def _issuers_json(issuers: list[Issuer]) -> list[dict]:
    return [issuer.model_dump(mode="json") for issuer in issuers]


def _matches_summary(matches: list[ComparisonResult], query: CompareQuery) -> str:
    if not query.country:
        return f"No country given, all {len(matches)} issuers returned with a flat score."
    if not matches:
        return f"No issuers support {query.country}."
    best = matches[0]
    return (
        f"{len(matches)} issuer(s) support {query.country}. "
        f"Best match: {best.issuer.name} ({best.score} points)."
    )


def _query_from_params(params) -> CompareQuery:
    return CompareQuery(**{name: params.get(name) for name in COMPARE_FIELDS if params.get(name) is not None})


def create_server(catalog: IssuerCatalog, settings: Optional[Settings] = None) -> FastMCP:
    """Build a server bound to a loaded catalog."""
    settings = settings or Settings()

    mcp = FastMCP(
        "Stablecoin Card Issuers",
        instructions="Find and rank stablecoin card issuers by country, network, custody model, stablecoin, chain, KYC preference and card type.",
        host=settings.host,
        port=settings.port,
    )

    # ─── Tool 1: List ────────────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def issuers_list(
        role: Optional[list[str]] = None,
        network: Optional[str] = None,
        customer_type: Optional[str] = None,
        country: Optional[str] = None,
    ) -> dict:
        """List stablecoin card issuers, optionally filtered.

        Args:
            role: Any of orchestration, program_manager, processor, bin_sponsor. Matches if the issuer has any of them.
            network: visa or mastercard.
            customer_type: b2b, b2c or both.
            country: ISO 3166-1 alpha-2 code (case-insensitive), e.g. 'US'.
        """
        issuers = filter_catalog(catalog, {
            "role": role,
            "network": network,
            "customer_type": customer_type,
            "country": country,
        })
        return {
            "title": "Stablecoin Card Issuers",
            "issuers": _issuers_json(issuers),
            "count": len(issuers),
            "summary": f"{len(issuers)} of {len(catalog)} issuers match",
        }

    # ─── Tool 2: Details ─────────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def issuers_get(issuer_id: str) -> dict:
        """Full record for one issuer.

        Args:
            issuer_id: Issuer id as returned by issuers_list.
        """
        issuer = catalog.get(issuer_id)
        if issuer is None:
            return {**NOT_FOUND, "issuer_id": issuer_id, "known_ids": catalog.ids()}
        return {
            "title": issuer.name,
            "issuer": issuer.model_dump(mode="json"),
            "summary": issuer.notes,
        }

    # ─── Tool 3: Compare ─────────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def issuers_compare(
        country: str = "",
        network: Optional[str] = None,
        customer_type: Optional[str] = None,
        custody_model: Optional[str] = None,
        stablecoin: Optional[str] = None,
        chain: Optional[str] = None,
        kyc: Optional[str] = None,
        card_type: Optional[str] = None,
    ) -> dict:
        """Rank issuers against a desired card program configuration.

        Issuers that do not operate in the country are excluded. Each other
        matched preference adds 10 points; API maturity and docs quality add
        2 points per level. Without a country every issuer gets a flat 50.

        Args:
            country: ISO country code, e.g. 'US'. Leave empty to list everything unscored.
            network: visa or mastercard.
            customer_type: b2b or b2c.
            custody_model: custodial, non_custodial or hybrid.
            stablecoin: USDC, USDT, DAI or USDP.
            chain: Ethereum, Base, Solana, Polygon or Cronos.
            kyc: required or optional.
            card_type: debit, prepaid or credit.
        """
        query = CompareQuery(
            country=country,
            network=network,
            customer_type=customer_type,
            custody_model=custody_model,
            stablecoin=stablecoin,
            chain=chain,
            kyc=kyc,
            card_type=card_type,
        )
        response = run_comparison(catalog, query)
        return {
            "title": "Issuer Comparison",
            **response.model_dump(mode="json"),
            "summary": _matches_summary(response.matches, query),
        }

    # ─── Tool 4: Metadata ────────────────────────────────────────────────────

    @mcp.tool(annotations=READ_ONLY)
    async def issuers_metadata() -> dict:
        """Accepted values for every filter plus the countries present in the dataset."""
        metadata = reflect_metadata(catalog)
        return {
            "title": "Filter Metadata",
            **metadata.model_dump(),
            "summary": f"{len(metadata.supported_countries)} countries covered by {len(catalog)} issuers",
        }

    # ─── REST routes ─────────────────────────────────────────────────────────

    @mcp.custom_route("/issuers", methods=["GET"])
    async def list_route(request: Request) -> JSONResponse:
        params = request.query_params
        issuers = filter_catalog(catalog, {
            "role": params.getlist("role"),
            "network": params.get("network"),
            "customer_type": params.get("customer_type"),
            "country": params.get("country"),
        })
        return JSONResponse(_issuers_json(issuers))

    @mcp.custom_route("/issuers/{issuer_id}", methods=["GET"])
    async def detail_route(request: Request) -> JSONResponse:
        issuer = catalog.get(request.path_params["issuer_id"])
        if issuer is None:
            return JSONResponse(NOT_FOUND, status_code=404)
        return JSONResponse(issuer.model_dump(mode="json"))

    @mcp.custom_route("/compare", methods=["GET"])
    async def compare_route(request: Request) -> JSONResponse:
        response = run_comparison(catalog, _query_from_params(request.query_params))
        return JSONResponse(response.model_dump(mode="json"))

    @mcp.custom_route("/metadata", methods=["GET"])
    async def metadata_route(request: Request) -> JSONResponse:
        return JSONResponse(reflect_metadata(catalog).model_dump())

    @mcp.custom_route("/health", methods=["GET"])
    async def health_route(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "issuers_count": len(catalog)})

    return mcp


def main():
    """Entry point for the CLI command."""
    settings = Settings.load()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    catalog = asyncio.run(load_catalog(settings))
    server = create_server(catalog, settings)
    logger.info("Serving %d issuers over %s", len(catalog), settings.transport)
    server.run(transport=settings.transport)


if __name__ == "__main__":
    main()
