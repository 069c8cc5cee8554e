"""Custom exceptions for contract loading."""

from __future__ import annotations


class ContractError(Exception):
    """Base exception for contract-related errors."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        full_message = f"{message}" if not source else f"[{source}] {message}"
        super().__init__(full_message)


class ContractValidationError(ContractError):
    """Raised when a contract document has the wrong shape."""

    def __init__(
        self,
        message: str,
        source: str | None = None,
        field: str | None = None,
    ) -> None:
        self.field = field
        if field:
            message = f"Field '{field}': {message}"
        super().__init__(message, source)


class ContractFetchError(ContractError):
    """Raised when the contract cannot be retrieved from a server."""

    def __init__(
        self,
        message: str,
        url: str,
        status: int | None = None,
    ) -> None:
        self.url = url
        self.status = status
        if status is not None:
            message = f"HTTP {status}: {message}"
        super().__init__(message, url)
