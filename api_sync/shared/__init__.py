"""Shared utilities for the contract sync tools."""

from .contract_loader import (
    DEFAULT_TIMEOUT,
    contract_url,
    fetch_contract,
    load_contract,
)
from .naming import (
    is_identifier,
    quote_key,
)
from .errors import (
    ContractError,
    ContractValidationError,
    ContractFetchError,
)

__all__ = [
    # Contract loading
    "DEFAULT_TIMEOUT",
    "contract_url",
    "fetch_contract",
    "load_contract",
    # Naming utilities
    "is_identifier",
    "quote_key",
    # Errors
    "ContractError",
    "ContractValidationError",
    "ContractFetchError",
]
