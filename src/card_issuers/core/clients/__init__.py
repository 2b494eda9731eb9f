"""Clients for fetching the issuers dataset from remote sources."""
