"""Contract document model decoded at the loader boundary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

from api_sync.shared.errors import ContractValidationError

from .schema_types import SchemaNode, decode_schema

SCHEMA_SLOTS: Final[tuple[str, ...]] = ("body", "query", "params", "response")


@dataclass(frozen=True, slots=True)
class RouteSchema:
    """Decoded schema slots of a route; ``None`` means the slot was not supplied."""

    body: SchemaNode | None = None
    query: SchemaNode | None = None
    params: SchemaNode | None = None
    response: SchemaNode | None = None


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """A single route from the contract."""

    method: str
    path: str
    name: str | None = None
    description: str | None = None
    sse: bool = False
    schema: RouteSchema = RouteSchema()

    @property
    def method_key(self) -> str:
        return self.method.lower()


@dataclass(frozen=True, slots=True)
class ContractDocument:
    version: str
    generated_at: str
    routes: tuple[RouteDescriptor, ...]


def _is_supplied(value: Any) -> bool:
    # Any mapping counts, even {}; null, false and 0 do not
    return isinstance(value, dict) or bool(value)


def _decode_route_schema(raw: Any) -> RouteSchema:
    if not isinstance(raw, dict):
        return RouteSchema()
    slots = {
        slot: decode_schema(raw[slot])
        for slot in SCHEMA_SLOTS
        if _is_supplied(raw.get(slot))
    }
    return RouteSchema(**slots)


def parse_route(raw: Any, index: int = 0, source: str | None = None) -> RouteDescriptor:
    """Decode one route entry of a contract document.

    Raises:
        ContractValidationError: If the entry is not a mapping or lacks
            a string ``method`` or ``path``, or has a non-boolean ``sse``.
    """
    if not isinstance(raw, dict):
        raise ContractValidationError("route must be a mapping", source, f"routes[{index}]")
    for key in ("method", "path"):
        if not isinstance(raw.get(key), str):
            raise ContractValidationError("must be a string", source, f"routes[{index}].{key}")

    sse = raw.get("sse", False)
    if not isinstance(sse, bool):
        raise ContractValidationError("must be a boolean", source, f"routes[{index}].sse")

    name = raw.get("name")
    description = raw.get("description")
    return RouteDescriptor(
        method=raw["method"],
        path=raw["path"],
        name=name if isinstance(name, str) else None,
        description=description if isinstance(description, str) else None,
        sse=sse,
        schema=_decode_route_schema(raw.get("schema")),
    )


def parse_contract(data: Any, source: str | None = None) -> ContractDocument:
    """Decode a raw contract mapping into a ``ContractDocument``.

    Missing ``version`` and ``generatedAt`` default to empty strings.

    Raises:
        ContractValidationError: If the document is malformed.
    """
    if not isinstance(data, dict):
        raise ContractValidationError("contract root must be a mapping", source)

    routes = data.get("routes", [])
    if not isinstance(routes, list):
        raise ContractValidationError("must be a list", source, "routes")

    return ContractDocument(
        version=str(data.get("version", "")),
        generated_at=str(data.get("generatedAt", "")),
        routes=tuple(parse_route(r, i, source) for i, r in enumerate(routes)),
    )
