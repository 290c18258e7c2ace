"""
Error Types

Exceptions raised across the ingestion pipeline and the registries.

Only TransportError (and anything not listed here) is fatal to an ingestion
run. The others are caught per item by the pipeline:
    - NotFoundError: pool goes to the pending bucket
    - RegistrationError / DuplicateIdError: item is dropped with a warning
    - AssetLookupError: denomination is skipped during asset registration
"""

from typing import Iterable, List


class AnsError(Exception):
    """Base error for registry and ingestion operations."""
    pass


class TransportError(AnsError):
    """Raised when an upstream document could not be fetched."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class NotFoundError(AnsError):
    """Raised when one or more denominations have no canonical asset name."""

    def __init__(self, denoms: Iterable[str]):
        self.denoms: List[str] = list(denoms)
        super().__init__(f"Denoms not registered: {', '.join(self.denoms)}")


class RegistrationError(AnsError):
    """Raised when a registry rejects an entry."""
    pass


class DuplicateIdError(RegistrationError):
    """Raised when an entry with the same key is already registered."""
    pass


class AssetLookupError(AnsError, LookupError):
    """Raised when chain metadata has no entry for a denomination."""

    def __init__(self, denom: str, chain_id: str):
        self.denom = denom
        self.chain_id = chain_id
        super().__init__(f"Asset {denom} not found in the {chain_id} asset list")
