"""API type generator - Generates typed TypeScript clients from route contracts."""

from .contract import (
    ContractDocument,
    RouteDescriptor,
    RouteSchema,
    parse_contract,
)
from .emitter import (
    GeneratorContext,
    generate_client_type,
    generate_method_signature,
    generate_method_type,
    generate_route_tree_type,
    generate_type_definition,
)
from .route_trie import (
    DYNAMIC_KEY,
    STREAM_METHOD_KEY,
    TrieNode,
    build_route_trie,
)
from .schema_types import decode_schema, map_type, schema_to_type

__all__ = [
    "ContractDocument",
    "RouteDescriptor",
    "RouteSchema",
    "parse_contract",
    "GeneratorContext",
    "generate_client_type",
    "generate_method_signature",
    "generate_method_type",
    "generate_route_tree_type",
    "generate_type_definition",
    "DYNAMIC_KEY",
    "STREAM_METHOD_KEY",
    "TrieNode",
    "build_route_trie",
    "decode_schema",
    "map_type",
    "schema_to_type",
]
