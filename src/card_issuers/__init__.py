"""Stablecoin Card Issuers MCP Server.

Find and rank stablecoin card issuers by country, card network, custody
model, stablecoin, chain, KYC preference and card type. Served as MCP tools
and as a small read-only REST API over a curated dataset.
"""

__version__ = "0.1.0"
