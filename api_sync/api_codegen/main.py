"""
API type generator - Generates a typed TypeScript client from a route contract.

The contract is either fetched from a running server (``sync``) or read
from a local JSON/YAML file (``generate``). Both paths run the same pure
pipeline: contract model -> route trie -> TypeScript emitter.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Final, Sequence

from api_sync.shared import (
    DEFAULT_TIMEOUT,
    ContractError,
    contract_url,
    fetch_contract,
    load_contract,
)

from .contract import ContractDocument, parse_contract
from .emitter import CLIENT_MODULE, generate_type_definition

DEFAULT_OUTPUT: Final[Path] = Path("src/api.generated.ts")
DEFAULT_ENDPOINT: Final[str] = "/__contract__"


def write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def render_contract(
    data: dict[str, Any],
    prefix: str | None = None,
    source: str | None = None,
) -> tuple[ContractDocument, str]:
    """Decode a raw contract and render its TypeScript artifact."""
    contract = parse_contract(data, source)
    return contract, generate_type_definition(contract, prefix)


def print_usage_hint(output: Path, base_url: str) -> None:
    module = output.as_posix().removesuffix(".ts")
    print()
    print("Usage:")
    print(f"   import {{ createClient }} from '{CLIENT_MODULE}'")
    print(f"   import {{ createApiClient }} from './{module}'")
    print(f"   const api = createApiClient(createClient('{base_url}'))")


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--out", default=DEFAULT_OUTPUT, type=Path, help="Output path for the generated TypeScript file")
    parser.add_argument("--strip-prefix", default=None, help="Path prefix to strip from every route (e.g. /api/v1)")


def sync_main(argv: Sequence[str] | None = None) -> None:
    """Fetch the contract from a server and write the generated client types."""
    parser = argparse.ArgumentParser(prog="api-sync sync", description="Sync API types from a running server")
    parser.add_argument("--url", required=True, help="Server base URL")
    parser.add_argument("--endpoint", default=DEFAULT_ENDPOINT, help="Contract endpoint path")
    parser.add_argument("--timeout", default=DEFAULT_TIMEOUT, type=float, help="Request timeout in seconds")
    _add_output_args(parser)
    args = parser.parse_args(argv)

    url = contract_url(args.url, args.endpoint)
    print(f"Fetching contract from {url}...")
    try:
        data = fetch_contract(args.url, args.endpoint, timeout=args.timeout)
        contract, content = render_contract(data, args.strip_prefix, url)
    except ContractError as e:
        raise SystemExit(f"Failed to sync contract: {e}") from e

    print(f"Received {len(contract.routes)} routes")
    write_output(args.out, content)
    print(f"Generated API types -> {args.out}")
    print_usage_hint(args.out, args.url)


def generate_main(argv: Sequence[str] | None = None) -> None:
    """Generate client types from a local contract file."""
    parser = argparse.ArgumentParser(prog="api-sync generate", description="Generate API types from a contract file")
    parser.add_argument("--contract", required=True, type=Path, help="Path to the contract document (JSON or YAML)")
    _add_output_args(parser)
    args = parser.parse_args(argv)

    try:
        data = load_contract(args.contract)
        contract, content = render_contract(data, args.strip_prefix, str(args.contract))
    except ContractError as e:
        raise SystemExit(f"Failed to generate types: {e}") from e

    write_output(args.out, content)
    print(f"Generated API types for {len(contract.routes)} routes -> {args.out}")


def main() -> None:
    sync_main()


if __name__ == "__main__":
    main()
