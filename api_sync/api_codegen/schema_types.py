"""
Schema to TypeScript type mapping.

A raw JSON-Schema-like node is decoded once into a small tagged union
(the schema IR) and then rendered by a single exhaustive match. Both
steps are total: shapes that are not recognised decode to ``Unknown``
and render as the fallback type.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Any, Final, Union as TypingUnion

from api_sync.shared.naming import quote_key

FALLBACK_TYPE: Final[str] = "unknown"
EMPTY_UNION_TYPE: Final[str] = "never"

# Declared JSON Schema types and the primitive kind they decode to
PRIMITIVE_KINDS: Final[dict[str, str]] = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "null": "null",
}


@dataclass(frozen=True, slots=True)
class Primitive:
    kind: str


@dataclass(frozen=True, slots=True)
class Literal:
    value: Any


@dataclass(frozen=True, slots=True)
class Enum:
    values: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class Array:
    items: SchemaNode | None = None


@dataclass(frozen=True, slots=True)
class ObjectFixed:
    """Object with declared fields; ``properties`` keeps declaration order."""

    properties: tuple[tuple[str, SchemaNode], ...]
    required: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class ObjectRecord:
    """String-keyed mapping with a uniform value type."""

    value: SchemaNode


@dataclass(frozen=True, slots=True)
class Union:
    members: tuple[SchemaNode, ...]
    spelling: str = "anyOf"


@dataclass(frozen=True, slots=True)
class Intersection:
    members: tuple[SchemaNode, ...]


@dataclass(frozen=True, slots=True)
class Unknown:
    pass


SchemaNode = TypingUnion[
    Primitive,
    Literal,
    Enum,
    Array,
    ObjectFixed,
    ObjectRecord,
    Union,
    Intersection,
    Unknown,
]


def decode_schema(raw: Any, _seen: frozenset[int] = frozenset()) -> SchemaNode:
    """Decode a raw schema mapping into the schema IR.

    Precedence (first match wins): ``const``, ``enum``, ``anyOf``,
    ``oneOf``, ``allOf``, declared ``type``, bare ``properties``.
    Anything else decodes to ``Unknown``, as does a node that refers back
    to one of its own ancestors (YAML anchors can build such cycles).
    """
    if not isinstance(raw, dict) or id(raw) in _seen:
        return Unknown()
    seen = _seen | {id(raw)}

    if "const" in raw:
        return Literal(raw["const"])

    enum = raw.get("enum")
    if isinstance(enum, list):
        return Enum(tuple(enum))

    for spelling in ("anyOf", "oneOf"):
        members = raw.get(spelling)
        if isinstance(members, list):
            return Union(tuple(decode_schema(m, seen) for m in members), spelling)

    all_of = raw.get("allOf")
    if isinstance(all_of, list):
        return Intersection(tuple(decode_schema(m, seen) for m in all_of))

    schema_type = raw.get("type")
    if isinstance(schema_type, list) and schema_type:
        return Union(tuple(_decode_typed(t, raw, seen) for t in schema_type), "type")
    if isinstance(schema_type, str) and (
        schema_type in PRIMITIVE_KINDS or schema_type in ("array", "object")
    ):
        return _decode_typed(schema_type, raw, seen)

    if isinstance(raw.get("properties"), dict):
        return _decode_object(raw, seen)

    return Unknown()


def _decode_typed(type_name: Any, raw: dict[str, Any], seen: frozenset[int]) -> SchemaNode:
    if type_name == "array":
        items = raw.get("items")
        return Array(decode_schema(items, seen) if items is not None else None)
    if type_name == "object":
        return _decode_object(raw, seen)
    if isinstance(type_name, str) and type_name in PRIMITIVE_KINDS:
        return Primitive(PRIMITIVE_KINDS[type_name])
    return Unknown()


def _decode_object(raw: dict[str, Any], seen: frozenset[int]) -> SchemaNode:
    # Record<K, V> shapes are emitted as patternProperties
    pattern_props = raw.get("patternProperties")
    if isinstance(pattern_props, dict):
        patterns = list(pattern_props.values())
        return ObjectRecord(decode_schema(patterns[0], seen) if patterns else Unknown())

    properties = raw.get("properties")
    if not isinstance(properties, dict) or not properties:
        additional = raw.get("additionalProperties")
        if isinstance(additional, dict):
            return ObjectRecord(decode_schema(additional, seen))
        return ObjectRecord(Unknown())

    required_list = raw.get("required")
    required: frozenset[str] = frozenset()
    if isinstance(required_list, list):
        required = frozenset(r for r in required_list if isinstance(r, str))

    return ObjectFixed(
        properties=tuple((str(name), decode_schema(prop, seen)) for name, prop in properties.items()),
        required=required,
    )


def map_type(node: SchemaNode) -> str:
    """Render a schema IR node as TypeScript type text."""
    match node:
        case Literal(value=value):
            return _ts_literal(value)
        case Enum(values=values):
            if not values:
                return EMPTY_UNION_TYPE
            return " | ".join(_ts_literal(v) for v in values)
        case Union(members=members):
            if not members:
                return EMPTY_UNION_TYPE
            return " | ".join(map_type(m) for m in members)
        case Intersection(members=members):
            if not members:
                return FALLBACK_TYPE
            return " & ".join(map_type(m) for m in members)
        case Primitive(kind=kind):
            return kind
        case Array(items=items):
            item_type = map_type(items) if items is not None else FALLBACK_TYPE
            return f"{item_type}[]"
        case ObjectRecord(value=value):
            return f"Record<string, {map_type(value)}>"
        case ObjectFixed(properties=properties, required=required):
            fields = [
                f"{quote_key(name)}{'' if name in required else '?'}: {map_type(prop)}"
                for name, prop in properties
            ]
            return "{ " + "; ".join(fields) + " }"
        case _:
            return FALLBACK_TYPE


def schema_to_type(raw: Any) -> str:
    """Convert a raw schema mapping to a TypeScript type string."""
    return map_type(decode_schema(raw))


def _ts_literal(value: Any) -> str:
    # NaN and Infinity have no literal type
    if isinstance(value, float) and not math.isfinite(value):
        return "number"
    # JSON text is valid TypeScript literal syntax
    return json.dumps(value, ensure_ascii=False, default=str)
