"""Contract loading utilities for local files and running servers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final
from urllib.parse import urljoin

import requests
import yaml
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import ContractError, ContractFetchError

DEFAULT_TIMEOUT: Final[float] = 10.0
RETRY_STATUSES: Final[tuple[int, ...]] = (500, 502, 503, 504)


def contract_url(base_url: str, endpoint: str) -> str:
    """Resolve the contract endpoint against the server base URL.

    Examples:
        >>> contract_url("http://localhost:3000", "/__contract__")
        'http://localhost:3000/__contract__'
    """
    return urljoin(base_url, endpoint)


def load_contract(contract_path: Path) -> dict[str, Any]:
    """Load a contract document from a file.

    Supports both YAML and JSON formats.

    Args:
        contract_path: Path to the contract file.

    Returns:
        The parsed contract mapping.

    Raises:
        ContractError: If the file cannot be read or parsed.
    """
    try:
        raw = contract_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ContractError(f"Failed to read contract file: {e}", str(contract_path)) from e

    try:
        if contract_path.suffix.lower() in {".yml", ".yaml"}:
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ContractError(f"Invalid contract document: {e}", str(contract_path)) from e

    if not isinstance(data, dict):
        raise ContractError("Contract root must be a mapping", str(contract_path))

    return data


def _build_session(retries: int) -> requests.Session:
    session = requests.Session()
    retry = Retry(total=retries, backoff_factor=0.5, status_forcelist=RETRY_STATUSES)
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_contract(
    base_url: str,
    endpoint: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    retries: int = 3,
) -> dict[str, Any]:
    """Fetch a contract document from a running server.

    Uses urllib3 Retry via requests.adapters.HTTPAdapter.

    Raises:
        ContractFetchError: On connection failure, a non-success status,
            or a body that is not a JSON object.
    """
    url = contract_url(base_url, endpoint)
    session = _build_session(retries)
    try:
        resp = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ContractFetchError(str(e), url) from e
    finally:
        session.close()

    if not resp.ok:
        raise ContractFetchError(resp.reason or "request failed", url, resp.status_code)

    try:
        data = resp.json()
    except ValueError as e:
        raise ContractFetchError(f"Response is not valid JSON: {e}", url) from e

    if not isinstance(data, dict):
        raise ContractFetchError("Contract root must be a JSON object", url)

    return data
