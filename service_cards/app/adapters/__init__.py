"""
Adapters package for the card records service.

Contains the HTTP client for the upstream table store. Adapters map
transport and HTTP failures onto the shared error types and keep no state
beyond their connection pool.
"""

from .airtable_client import AirtableClient

__all__ = [
    "AirtableClient",
]
