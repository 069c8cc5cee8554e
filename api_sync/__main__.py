#!/usr/bin/env python3
"""
Contract sync CLI - keeps a typed TypeScript client in step with a server.

Usage:
    python -m api_sync <command> [options]
    api-sync <command> [options]

Commands:
    sync        Fetch the contract from a running server and generate types
    generate    Generate types from a local contract file

Examples:
    api-sync sync --url http://localhost:3000
    api-sync sync --url http://localhost:3000 --out web/api.generated.ts --strip-prefix /api/v1
    api-sync generate --contract contract.json
"""

from __future__ import annotations

import sys


def cmd_sync(args: list[str]) -> int:
    """Sync API types from a running server."""
    from api_sync.api_codegen import main as generator
    try:
        generator.sync_main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
        return e.code if isinstance(e.code, int) else 1


def cmd_generate(args: list[str]) -> int:
    """Generate API types from a contract file."""
    from api_sync.api_codegen import main as generator
    try:
        generator.generate_main(args)
        return 0
    except SystemExit as e:
        if isinstance(e.code, str):
            print(e.code, file=sys.stderr)
        return e.code if isinstance(e.code, int) else 1


COMMANDS = {
    "sync": (cmd_sync, "Fetch the contract from a running server and generate types"),
    "generate": (cmd_generate, "Generate types from a local contract file"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
